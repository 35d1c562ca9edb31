"""Data models for station platform bookings."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Dict, Optional, Union

from .errors import SchedulingConflictError

# Either a datetime or epoch seconds
TimeInstant = Union[datetime, int, float]

STOPPAGE_WINDOW = timedelta(minutes=30)
THROUGH_WINDOW = timedelta(minutes=10)


class EventKind(Enum):
    """Class of train event booked against a platform."""
    STOPPAGE = "stoppage"  # train stops and dwells
    THROUGH = "through"  # train passes without stopping

    @classmethod
    def parse(cls, value: str) -> "EventKind":
        """Look up a kind by its (case-insensitive) name, e.g. "Stoppage"."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown event kind '{value}'") from None


DEFAULT_WINDOWS: Dict[EventKind, timedelta] = {
    EventKind.STOPPAGE: STOPPAGE_WINDOW,
    EventKind.THROUGH: THROUGH_WINDOW,
}


def seconds_between(a: TimeInstant, b: TimeInstant) -> float:
    """Absolute gap between two instants, in seconds."""
    delta = a - b
    if isinstance(delta, timedelta):
        return abs(delta.total_seconds())
    return abs(delta)


@dataclass(frozen=True)
class StationId:
    """
    Station identity: either a string code or an integer number.

    The kind is fixed by the type of ``value`` at construction.
    """
    value: Union[str, int]

    def __post_init__(self):
        # bool is an int subclass but never a valid station number
        if isinstance(self.value, bool) or not isinstance(self.value, (str, int)):
            raise TypeError(
                f"Station id must be str or int, got {type(self.value).__name__}"
            )

    @property
    def is_string(self) -> bool:
        return isinstance(self.value, str)

    def describe(self) -> str:
        if self.is_string:
            return f"Station ID (String): {self.value}"
        return f"Station ID (Integer): {self.value}"

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Line:
    """A named line serving a station (e.g. "Blue Line")."""
    name: str


@dataclass(frozen=True)
class BookingRequest:
    """One requested event on a platform, e.g. a timetable row."""
    platform_id: int
    kind: EventKind
    time: TimeInstant


@dataclass(frozen=True)
class SchedulingConflict:
    """Why a booking was refused."""
    platform_id: int
    kind: EventKind
    requested: TimeInstant
    existing: TimeInstant  # already-booked instant inside the window
    window: timedelta

    @property
    def message(self) -> str:
        gap_minutes = seconds_between(self.requested, self.existing) / 60
        return (
            f"{self.kind.value.capitalize()} at {self.requested} on platform {self.platform_id} "
            f"is {gap_minutes:g} min from existing {self.kind.value} at {self.existing} "
            f"(minimum {self.window.total_seconds() / 60:g} min)"
        )


@dataclass(frozen=True)
class BookingResult:
    """Outcome of a single booking attempt. Truthy when the booking was accepted."""
    platform_id: int
    kind: EventKind
    time: TimeInstant
    conflict: Optional[SchedulingConflict] = None

    @property
    def accepted(self) -> bool:
        return self.conflict is None

    def __bool__(self) -> bool:
        return self.accepted

    def raise_for_conflict(self) -> None:
        """Raise SchedulingConflictError if the booking was refused."""
        if self.conflict is not None:
            raise SchedulingConflictError(self.conflict)
