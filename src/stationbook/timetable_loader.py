"""Timetable CSV loader and booking export."""

import io
import logging
import math
from typing import List

import pandas as pd
import requests

from .errors import TimetableError
from .models import BookingRequest, EventKind, TimeInstant
from .station import Station

logger = logging.getLogger(__name__)

# Strings pandas would turn into a time without them naming one
NON_DATE_KEYWORDS = ("now", "today", "tomorrow", "yesterday", "nat", "nan", "none", "null")


class TimetableLoader:
    """
    Loads booking requests from a timetable CSV.

    Expected columns: platform_id, kind, time. ``kind`` is "stoppage" or
    "through". ``time`` is epoch seconds (integer or decimal) or an ISO-8601
    timestamp, e.g.:

        platform_id,kind,time
        1,stoppage,2024-05-01T10:00:00
        1,through,1714557600.5

    Every time is returned as epoch seconds so rows of either form can be
    booked against each other. Naive timestamps are read as UTC.
    """

    REQUIRED_COLUMNS = ("platform_id", "kind", "time")

    def __init__(self, timeout: float = 10):
        """
        Args:
            timeout: Seconds to wait for a timetable download.
        """
        self.timeout = timeout

    def load_from_url(self, url: str) -> List[BookingRequest]:
        """Download and parse a timetable CSV."""
        logger.info(f"Downloading timetable from {url}")
        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Failed to download timetable: {e}")
            raise
        return self.parse(response.text)

    def load_from_file(self, path: str) -> List[BookingRequest]:
        """Parse a timetable CSV from a local file."""
        logger.info(f"Loading timetable from {path}")
        frame = pd.read_csv(path, dtype=str, keep_default_na=False)
        return self._parse_frame(frame)

    def parse(self, csv_content: str) -> List[BookingRequest]:
        """Parse timetable CSV text."""
        frame = pd.read_csv(io.StringIO(csv_content), dtype=str, keep_default_na=False)
        return self._parse_frame(frame)

    def _parse_frame(self, frame: pd.DataFrame) -> List[BookingRequest]:
        frame.columns = [str(c).strip() for c in frame.columns]
        missing = [c for c in self.REQUIRED_COLUMNS if c not in frame.columns]
        if missing:
            raise TimetableError(f"Timetable is missing columns: {', '.join(missing)}")

        bookings: List[BookingRequest] = []
        # Row numbers are 1-based and skip the header, as in a spreadsheet
        for row_number, row in enumerate(frame.to_dict("records"), start=2):
            try:
                platform_id = int(row["platform_id"].strip())
                kind = EventKind.parse(row["kind"])
                time = self._parse_time(row["time"])
            except ValueError as e:
                raise TimetableError(f"Invalid timetable row {row_number}: {e}") from e
            bookings.append(BookingRequest(platform_id, kind, time))

        logger.info(f"Loaded {len(bookings)} booking requests")
        return bookings

    @staticmethod
    def _parse_time(value: str) -> TimeInstant:
        """Convert a time cell to epoch seconds."""
        value = value.strip()
        if not value:
            raise ValueError("empty time")
        if value.lstrip("-").isdigit():
            return int(value)

        try:
            seconds = float(value)
        except ValueError:
            pass
        else:
            if not math.isfinite(seconds):
                raise ValueError(f"time must be finite, got '{value}'")
            return seconds

        if value.lower() in NON_DATE_KEYWORDS:
            raise ValueError(f"'{value}' is not a timestamp")
        timestamp = pd.Timestamp(value)
        if timestamp is pd.NaT:
            raise ValueError(f"'{value}' is not a timestamp")
        # Naive timestamps are taken as UTC
        return timestamp.timestamp()


def bookings_to_frame(station: Station) -> pd.DataFrame:
    """
    Flatten a station's booked events into a DataFrame.

    Returns:
        One row per booked instant with columns platform_id, kind, time,
        ordered by platform id, then kind, then time.
    """
    rows = []
    for platform_id in station.platform_ids:
        platform = station.get_platform(platform_id)
        for kind in EventKind:
            for time in platform.instants(kind):
                rows.append({"platform_id": platform_id, "kind": kind.value, "time": time})
    return pd.DataFrame(rows, columns=["platform_id", "kind", "time"])
