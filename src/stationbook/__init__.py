"""stationbook - Conflict-checked train event booking for station platforms."""

__version__ = "0.1.0"

from .errors import (
    StationBookError,
    PlatformNotFoundError,
    DuplicatePlatformError,
    SchedulingConflictError,
    TimetableError,
)
from .models import (
    EventKind,
    StationId,
    Line,
    BookingRequest,
    BookingResult,
    SchedulingConflict,
    STOPPAGE_WINDOW,
    THROUGH_WINDOW,
)
from .platform_timeline import PlatformTimeline
from .station import Station, PlatformRegistry
from .timetable_loader import TimetableLoader, bookings_to_frame

__all__ = [
    "Station",
    "PlatformRegistry",
    "PlatformTimeline",
    "TimetableLoader",
    "bookings_to_frame",
    "EventKind",
    "StationId",
    "Line",
    "BookingRequest",
    "BookingResult",
    "SchedulingConflict",
    "STOPPAGE_WINDOW",
    "THROUGH_WINDOW",
    "StationBookError",
    "PlatformNotFoundError",
    "DuplicatePlatformError",
    "SchedulingConflictError",
    "TimetableError",
]
