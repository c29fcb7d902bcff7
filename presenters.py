"""
Terminal reports for SMHI observations.

Provides:
  - show_temperatures: national average, or a throttled per-station listing
    that can be cancelled from the keyboard
  - show_rainfall: total precipitation for one station over its value range
"""

import time
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import numpy as np

from config import PRINT_DELAY_SECONDS, DATE_FORMAT, DISPLAY_TIMEZONE, LUND_STATION_NAME
from models import Station, StationData, parse_reading
from terminal import EscapeListener, clear_screen, colored, DARK_RED

CANCELLED_MESSAGE = "The task has been cancelled by the user."
CANCEL_HINT = "Press escape to cancel printing."
NO_READINGS_MESSAGE = "No temperature readings available."


class EmptyStationError(ValueError):
    """Station has no values to summarize."""


# =======================================================================
# Temperatures
# =======================================================================

def average_temperature(data: StationData) -> Optional[float]:
    """Mean of every parseable reading across all stations, or None if there are none."""
    readings = [
        reading
        for station in data.stations
        for reading in (parse_reading(v.value) for v in station.values)
        if reading is not None
    ]
    if not readings:
        return None
    return float(np.mean(readings))


def show_temperatures(data: StationData, average_all: bool,
                      cancel_event: threading.Event = None,
                      sleep=time.sleep, delay: float = PRINT_DELAY_SECONDS):
    """
    Scan every station's readings and print either the average or each reading.

    The cancel event is checked before each value. Once it is set the scan
    stops, prints a notice and returns None; no average is printed.

    Returns the average (average mode, None when nothing parsed) or the number
    of lines printed (list mode).
    """
    readings = []
    printed = 0

    for station in data.stations:
        if not station.values:
            continue  # station not reporting

        for value in station.values:
            if cancel_event is not None and cancel_event.is_set():
                print(colored(CANCELLED_MESSAGE, DARK_RED))
                return None

            reading = parse_reading(value.value)
            if reading is None:
                continue

            if average_all:
                readings.append(reading)
                continue

            if printed == 0:
                print(colored(CANCEL_HINT, DARK_RED))
            print(f"{station.name}: {value.value}", flush=True)
            printed += 1
            sleep(delay)

    if not average_all:
        return printed

    clear_screen()
    if not readings:
        print(NO_READINGS_MESSAGE)
        return None

    average = float(np.mean(readings))
    print(f"The average temperature: {average:.2f}°C")
    return average


def run_temperatures(data: StationData, average_all: bool, with_listener: bool = True, **kwargs):
    """show_temperatures with an Escape listener running for the length of the scan."""
    cancel_event = threading.Event()
    clear_screen()

    if not with_listener:
        return show_temperatures(data, average_all, cancel_event=cancel_event, **kwargs)

    with EscapeListener(cancel_event):
        return show_temperatures(data, average_all, cancel_event=cancel_event, **kwargs)


# =======================================================================
# Rainfall
# =======================================================================

@dataclass(frozen=True)
class RainfallSummary:
    total: float
    start_date: str
    end_date: str


def format_epoch_ms(ms: int, fmt: str = None, tz_name: str = None) -> str:
    """Epoch milliseconds -> calendar date string in the display timezone (local if unset)."""
    fmt = DATE_FORMAT if fmt is None else fmt
    tz_name = DISPLAY_TIMEZONE if tz_name is None else tz_name

    try:
        dt = datetime.fromtimestamp(ms / 1000.0, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        raise ValueError(f"Timestamp out of range: {ms!r}")

    if tz_name:
        try:
            tz = ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown DISPLAY_TIMEZONE: {tz_name!r}")
        dt = dt.astimezone(tz)
    else:
        dt = dt.astimezone()
    return dt.strftime(fmt)


def _require_number(raw) -> float:
    try:
        return float(raw)
    except (TypeError, ValueError):
        raise ValueError(f"Rainfall reading is not a number: {raw!r}")


def summarize_rainfall(station: Station, fmt: str = None,
                       tz_name: str = None) -> RainfallSummary:
    """
    Total every reading and take the covered range from the first value's
    `from` to the last value's `to`.

    Values must already be in chronological order; they are not sorted here.
    fmt and tz_name default to DATE_FORMAT and DISPLAY_TIMEZONE.
    Raises EmptyStationError for an empty station and ValueError if any
    reading is not a number or a date cannot be formatted.
    """
    if not station.values:
        raise EmptyStationError(f"No rainfall values for station {station.name or '?'}")

    total = float(np.sum([_require_number(v.value) for v in station.values]))

    first, last = station.values[0], station.values[-1]
    if first.from_ is None or last.to is None:
        raise ValueError("Rainfall values are missing their from/to timestamps")

    return RainfallSummary(
        total=total,
        start_date=format_epoch_ms(first.from_, fmt, tz_name),
        end_date=format_epoch_ms(last.to, fmt, tz_name),
    )


def show_rainfall(station: Station) -> RainfallSummary:
    summary = summarize_rainfall(station)
    name = station.name or LUND_STATION_NAME

    clear_screen()
    print(f"The total rainfall in {name} between {summary.start_date} and "
          f"{summary.end_date} was: {summary.total:.1f} millimeters.")
    return summary
