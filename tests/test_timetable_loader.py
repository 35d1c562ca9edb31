"""Tests for timetable loading and booking export."""

import os
import tempfile
import unittest
from unittest.mock import patch
import sys
from pathlib import Path

import requests

# Add src to path so we can import stationbook
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from stationbook.errors import TimetableError
from stationbook.models import BookingRequest, EventKind
from stationbook.station import Station
from stationbook.timetable_loader import TimetableLoader, bookings_to_frame

TIMETABLE_CSV = """platform_id,kind,time
1,stoppage,2024-05-01T10:00:00
1,Through,2024-05-01T10:30:00
2,stoppage,1714557600
"""


class TestTimetableLoader(unittest.TestCase):
    """Test timetable CSV parsing."""

    def setUp(self):
        self.loader = TimetableLoader()

    def test_parse(self):
        bookings = self.loader.parse(TIMETABLE_CSV)

        self.assertEqual(len(bookings), 3)
        self.assertEqual(bookings[0], BookingRequest(1, EventKind.STOPPAGE, 1714557600))
        self.assertEqual(bookings[1].kind, EventKind.THROUGH)
        self.assertEqual(bookings[2], BookingRequest(2, EventKind.STOPPAGE, 1714557600))

    def test_parse_strips_whitespace(self):
        bookings = self.loader.parse("platform_id, kind, time\n 3 , through , 600\n")
        self.assertEqual(bookings, [BookingRequest(3, EventKind.THROUGH, 600)])

    def test_missing_column(self):
        with self.assertRaises(TimetableError) as ctx:
            self.loader.parse("platform_id,time\n1,600\n")
        self.assertIn("kind", str(ctx.exception))

    def test_unknown_kind(self):
        with self.assertRaises(TimetableError) as ctx:
            self.loader.parse("platform_id,kind,time\n1,express,600\n")
        self.assertIn("row 2", str(ctx.exception))

    def test_invalid_platform_id(self):
        with self.assertRaises(TimetableError):
            self.loader.parse("platform_id,kind,time\nA,stoppage,600\n")

    def test_invalid_time(self):
        with self.assertRaises(TimetableError):
            self.loader.parse("platform_id,kind,time\n1,stoppage,\n")
        with self.assertRaises(TimetableError):
            self.loader.parse("platform_id,kind,time\n1,stoppage,not a time\n")

    def test_keyword_times_rejected(self):
        """Values pandas would read as "missing" or "current time" are not timestamps."""
        for value in ("NaT", "now", "today", "nan", "inf", "-Infinity"):
            with self.subTest(value=value):
                with self.assertRaises(TimetableError) as ctx:
                    self.loader.parse(f"platform_id,kind,time\n1,stoppage,1714557600\n1,stoppage,{value}\n")
                self.assertIn("row 3", str(ctx.exception))

    def test_decimal_epoch_seconds(self):
        bookings = self.loader.parse("platform_id,kind,time\n1,through,1714557600.5\n")
        self.assertEqual(bookings[0].time, 1714557600.5)

    def test_timezone_offset(self):
        bookings = self.loader.parse("platform_id,kind,time\n1,through,2024-05-01T15:30:00+05:30\n")
        self.assertEqual(bookings[0].time, 1714557600)

    def test_mixed_time_formats_book_against_each_other(self):
        station = Station(1001)
        station.add_platform(1)
        bookings = self.loader.parse(
            "platform_id,kind,time\n"
            "1,through,2024-05-01T10:00:00\n"
            "1,through,1714557900\n"
            "1,through,2024-05-01T10:10:00\n"
        )

        results = station.schedule_batch(bookings)

        # 10:05 is within 10 minutes of 10:00; 10:10 is exactly 10 minutes after
        self.assertEqual([bool(r) for r in results], [True, False, True])
        self.assertEqual(station.get_platform(1).throughs, (1714557600, 1714558200))

    def test_timetable_error_is_value_error(self):
        with self.assertRaises(ValueError):
            self.loader.parse("platform_id,kind,time\n1,express,600\n")

    def test_load_from_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "timetable.csv")
            with open(path, "w", encoding="utf-8") as f:
                f.write(TIMETABLE_CSV)

            bookings = self.loader.load_from_file(path)

        self.assertEqual(len(bookings), 3)
        self.assertEqual(bookings[0].platform_id, 1)

    @patch("stationbook.timetable_loader.requests.get")
    def test_load_from_url(self, mock_get):
        mock_get.return_value.text = TIMETABLE_CSV

        bookings = TimetableLoader(timeout=5).load_from_url("http://test/timetable.csv")

        mock_get.assert_called_once_with("http://test/timetable.csv", timeout=5)
        mock_get.return_value.raise_for_status.assert_called_once()
        self.assertEqual(len(bookings), 3)

    @patch("stationbook.timetable_loader.requests.get")
    def test_load_from_url_failure(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("unreachable")

        with self.assertRaises(requests.RequestException):
            self.loader.load_from_url("http://test/timetable.csv")


class TestBookingsToFrame(unittest.TestCase):
    """Test exporting booked events."""

    def test_loaded_timetable_round_trip(self):
        station = Station("NDLS")
        station.add_platform(2)
        station.add_platform(1)

        bookings = TimetableLoader().parse(
            "platform_id,kind,time\n"
            "2,through,1200\n"
            "1,stoppage,0\n"
            "1,stoppage,900\n"
            "1,through,600\n"
            "1,stoppage,1800\n"
        )
        results = station.schedule_batch(bookings)
        self.assertEqual([bool(r) for r in results], [True, True, False, True, True])

        frame = bookings_to_frame(station)

        self.assertEqual(list(frame.columns), ["platform_id", "kind", "time"])
        self.assertEqual(list(frame["platform_id"]), [1, 1, 1, 2])
        self.assertEqual(list(frame["kind"]), ["stoppage", "stoppage", "through", "through"])
        self.assertEqual(list(frame["time"]), [0, 1800, 600, 1200])

    def test_empty_station(self):
        station = Station(7)
        station.add_platform(1)

        frame = bookings_to_frame(station)

        self.assertEqual(len(frame), 0)
        self.assertEqual(list(frame.columns), ["platform_id", "kind", "time"])


if __name__ == "__main__":
    unittest.main()
