"""Example usage of stationbook."""

import logging
import sys
from datetime import datetime
from pathlib import Path

# Add src to path so we can import stationbook
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from stationbook import PlatformNotFoundError, Station

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


def at(hour: int, minute: int) -> datetime:
    """A time on a fixed demo day."""
    return datetime(2024, 5, 1, hour, minute)


def run_demo():
    station = Station(1001)
    station.add_line("Blue Line")
    station.add_line("Yellow Line")
    station.add_platform(1)
    station.add_platform(2)

    print(station.format_id())
    print(station.format_lines())
    print()

    if station.schedule_stoppage(1, at(10, 0)):
        print("Stoppage scheduled successfully.")

    if station.schedule_through(1, at(10, 30)):
        print("Through train scheduled successfully.")

    if not station.schedule_stoppage(1, at(10, 15)):
        print("Conflict: Could not schedule stoppage.")

    if not station.schedule_through(1, at(10, 35)):
        print("Conflict: Could not schedule through train.")

    # Exactly 10 minutes before the 10:30 through train
    if station.schedule_through(1, at(10, 20)):
        print("Through train scheduled successfully.")

    try:
        station.schedule_stoppage(3, at(11, 0))
    except PlatformNotFoundError as e:
        print(f"Error: {e}")


if __name__ == "__main__":
    try:
        run_demo()
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        sys.exit(1)
