"""Station-level booking API."""

import logging
from datetime import timedelta
from typing import Dict, Iterable, Iterator, List, Optional, Union

from .errors import DuplicatePlatformError, PlatformNotFoundError
from .models import BookingRequest, BookingResult, EventKind, Line, StationId, TimeInstant
from .platform_timeline import PlatformTimeline

logger = logging.getLogger(__name__)


class PlatformRegistry:
    """Platforms of one station, keyed by platform id."""

    def __init__(self, windows: Optional[Dict[EventKind, timedelta]] = None):
        self._platforms: Dict[int, PlatformTimeline] = {}
        self._windows = windows

    def add(self, platform_id: int) -> PlatformTimeline:
        """
        Create an empty timeline for a new platform.

        Raises:
            DuplicatePlatformError: If the id is already registered.
        """
        if platform_id in self._platforms:
            raise DuplicatePlatformError(platform_id)
        platform = PlatformTimeline(platform_id, windows=self._windows)
        self._platforms[platform_id] = platform
        return platform

    def resolve(self, platform_id: int) -> PlatformTimeline:
        """
        Get the timeline for a platform id.

        Raises:
            PlatformNotFoundError: If no platform has that id.
        """
        try:
            return self._platforms[platform_id]
        except KeyError:
            raise PlatformNotFoundError(platform_id) from None

    @property
    def ids(self) -> List[int]:
        return sorted(self._platforms)

    def __contains__(self, platform_id) -> bool:
        return platform_id in self._platforms

    def __iter__(self) -> Iterator[PlatformTimeline]:
        return iter(self._platforms.values())

    def __len__(self) -> int:
        return len(self._platforms)


class Station:
    """
    A station with lines and bookable platforms.

    Booking a platform that does not exist raises PlatformNotFoundError.
    Booking a time that clashes with an existing event of the same kind is a
    normal outcome: the call returns a falsy BookingResult describing the
    conflict, so callers can branch on it and try another time.
    """

    def __init__(
        self,
        station_id: Union[StationId, str, int],
        windows: Optional[Dict[EventKind, timedelta]] = None,
    ):
        """
        Args:
            station_id: Station code (str) or number (int).
            windows: Optional per-kind minimum separation applied to every platform.
        """
        if not isinstance(station_id, StationId):
            station_id = StationId(station_id)
        self.station_id = station_id
        self._lines: List[Line] = []
        self.platforms = PlatformRegistry(windows=windows)

    @property
    def lines(self) -> List[Line]:
        return list(self._lines)

    @property
    def platform_ids(self) -> List[int]:
        return self.platforms.ids

    def add_line(self, name: str) -> Line:
        line = Line(name)
        self._lines.append(line)
        return line

    def add_platform(self, platform_id: int) -> PlatformTimeline:
        platform = self.platforms.add(platform_id)
        logger.debug(f"Added platform {platform_id} to station {self.station_id}")
        return platform

    def get_platform(self, platform_id: int) -> PlatformTimeline:
        return self.platforms.resolve(platform_id)

    def schedule(self, request: BookingRequest) -> BookingResult:
        """
        Book one event on one of this station's platforms.

        Args:
            request: Platform id, event kind and time to book.

        Returns:
            BookingResult, falsy if the time conflicts with an existing booking.

        Raises:
            PlatformNotFoundError: If the platform id was never added.
        """
        platform = self.platforms.resolve(request.platform_id)
        result = platform.try_book(request.kind, request.time)
        if not result:
            logger.warning(f"Station {self.station_id}: {result.conflict.message}")
        return result

    def schedule_stoppage(self, platform_id: int, time: TimeInstant) -> BookingResult:
        return self.schedule(BookingRequest(platform_id, EventKind.STOPPAGE, time))

    def schedule_through(self, platform_id: int, time: TimeInstant) -> BookingResult:
        return self.schedule(BookingRequest(platform_id, EventKind.THROUGH, time))

    def schedule_batch(self, requests: Iterable[BookingRequest]) -> List[BookingResult]:
        """
        Book each request independently, in order.

        Conflicting requests are refused without stopping the batch. An unknown
        platform id still raises; bookings made before it are kept.
        """
        results = [self.schedule(request) for request in requests]
        accepted = sum(1 for r in results if r)
        logger.info(
            f"Station {self.station_id}: booked {accepted} of {len(results)} requested events"
        )
        return results

    def format_id(self) -> str:
        return self.station_id.describe()

    def format_lines(self) -> str:
        """Lines as a bulleted list, e.g. "Lines:\\n- Blue Line"."""
        return "\n".join(["Lines:"] + [f"- {line.name}" for line in self._lines])

    def __repr__(self) -> str:
        return f"Station({self.station_id.value!r}, platforms={self.platform_ids})"
