"""Per-platform event timelines with minimum-separation checks."""

import bisect
import logging
from datetime import timedelta
from typing import Dict, List, Optional, Tuple

from .models import (
    DEFAULT_WINDOWS,
    BookingResult,
    EventKind,
    SchedulingConflict,
    TimeInstant,
    seconds_between,
)

logger = logging.getLogger(__name__)


class PlatformTimeline:
    """
    Booked stoppage and through instants for one platform.

    Each event kind keeps its own sorted list of instants. Any two instants
    in the same list are at least that kind's window apart; stoppages and
    through events never conflict with each other.
    """

    def __init__(self, platform_id: int, windows: Optional[Dict[EventKind, timedelta]] = None):
        """
        Args:
            platform_id: Platform number, unique within its station.
            windows: Optional minimum separation per event kind. Kinds not
                     given fall back to DEFAULT_WINDOWS.
        """
        self.platform_id = platform_id
        self.windows: Dict[EventKind, timedelta] = dict(DEFAULT_WINDOWS)
        if windows:
            self.windows.update(windows)
        self._instants: Dict[EventKind, List[TimeInstant]] = {kind: [] for kind in EventKind}

    @property
    def stoppages(self) -> Tuple[TimeInstant, ...]:
        return tuple(self._instants[EventKind.STOPPAGE])

    @property
    def throughs(self) -> Tuple[TimeInstant, ...]:
        return tuple(self._instants[EventKind.THROUGH])

    def instants(self, kind: EventKind) -> Tuple[TimeInstant, ...]:
        """Booked instants of one kind, in time order."""
        return tuple(self._instants[kind])

    def find_conflict(self, kind: EventKind, time: TimeInstant) -> Optional[SchedulingConflict]:
        """
        Check whether ``time`` could be booked as ``kind`` without booking it.

        Only the neighbours of the insertion point need checking since the
        stored instants are already separated by at least the window.

        Returns:
            The conflict with the closest existing instant, or None if free.

        Raises:
            TypeError: If ``kind`` is not an EventKind.
            ValueError: If ``time`` is NaN or NaT.
        """
        if not isinstance(kind, EventKind):
            raise TypeError(f"Event kind must be an EventKind, got {kind!r}")
        # NaN and NaT compare unequal to themselves and would corrupt the sort order
        if time != time:
            raise ValueError(f"Cannot book an undefined time ({time!r})")

        booked = self._instants[kind]
        window = self.windows[kind]
        limit = window.total_seconds()
        idx = bisect.bisect_left(booked, time)

        closest = None
        closest_gap = None
        for existing in booked[max(idx - 1, 0):idx + 1]:
            gap = seconds_between(existing, time)
            # A gap of exactly the window is allowed
            if gap < limit and (closest_gap is None or gap < closest_gap):
                closest, closest_gap = existing, gap

        if closest_gap is None:
            return None
        return SchedulingConflict(
            platform_id=self.platform_id,
            kind=kind,
            requested=time,
            existing=closest,
            window=window,
        )

    def try_book(self, kind: EventKind, time: TimeInstant) -> BookingResult:
        """
        Record ``time`` as a ``kind`` event if it respects the kind's window.

        A refused booking leaves the timeline unchanged.
        """
        conflict = self.find_conflict(kind, time)
        if conflict is not None:
            return BookingResult(self.platform_id, kind, time, conflict=conflict)

        bisect.insort(self._instants[kind], time)
        logger.debug(f"Booked {kind.value} at {time} on platform {self.platform_id}")
        return BookingResult(self.platform_id, kind, time)

    def try_book_stoppage(self, time: TimeInstant) -> BookingResult:
        return self.try_book(EventKind.STOPPAGE, time)

    def try_book_through(self, time: TimeInstant) -> BookingResult:
        return self.try_book(EventKind.THROUGH, time)

    def __repr__(self) -> str:
        return (
            f"PlatformTimeline(platform_id={self.platform_id}, "
            f"stoppages={len(self._instants[EventKind.STOPPAGE])}, "
            f"throughs={len(self._instants[EventKind.THROUGH])})"
        )
