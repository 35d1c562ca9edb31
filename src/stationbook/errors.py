"""Exceptions raised by stationbook."""


class StationBookError(Exception):
    """Base class for all stationbook errors."""


class PlatformNotFoundError(StationBookError, KeyError):
    """The referenced platform id does not exist on the station."""

    def __init__(self, platform_id: int):
        self.platform_id = platform_id
        super().__init__(f"Platform {platform_id} not found")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class DuplicatePlatformError(StationBookError, ValueError):
    """A platform with this id was already added to the station."""

    def __init__(self, platform_id: int):
        self.platform_id = platform_id
        super().__init__(f"Platform {platform_id} already exists")


class SchedulingConflictError(StationBookError):
    """
    A booking violated the minimum separation for its event class.

    Booking calls never raise this; they return a refused BookingResult.
    It is only raised by BookingResult.raise_for_conflict().
    """

    def __init__(self, conflict):
        self.conflict = conflict
        super().__init__(conflict.message)


class TimetableError(StationBookError, ValueError):
    """Timetable data could not be parsed."""
