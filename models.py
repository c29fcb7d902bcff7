"""
Read-only records decoded from SMHI metobs JSON.

Two payload shapes are handled:
  - station-set data: {"station": [{"name": ..., "value": [...]}, ...]}
  - single station data: {"value": [...], "station": {"name": ...}}

Readings stay as the strings SMHI sends. Presenters parse them when needed,
see parse_reading().
"""

import json
import math
from dataclasses import dataclass, field
from typing import Optional


class DecodeError(ValueError):
    """Payload is valid JSON but not the shape we expect."""


@dataclass(frozen=True)
class Value:
    """One observation: raw reading plus its timestamps (epoch ms)."""
    value: Optional[str]
    date: Optional[int] = None
    from_: Optional[int] = None
    to: Optional[int] = None


@dataclass(frozen=True)
class Station:
    name: str
    values: tuple = field(default_factory=tuple)


@dataclass(frozen=True)
class StationData:
    stations: tuple = field(default_factory=tuple)


def parse_reading(raw) -> Optional[float]:
    """Return the reading as a finite float, or None if it is missing or not a number."""
    if raw is None:
        return None
    try:
        reading = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(reading):
        return None
    return reading


def _to_millis(raw) -> Optional[int]:
    if raw is None:
        return None
    try:
        return int(raw)
    except (TypeError, ValueError, OverflowError):
        raise DecodeError(f"Bad timestamp: {raw!r}")


def _value_from_dict(obj) -> Value:
    if not isinstance(obj, dict):
        raise DecodeError(f"Expected a value object, got {type(obj).__name__}")

    raw = obj.get("value")
    if raw is not None and not isinstance(raw, str):
        raw = str(raw)  # some endpoints send bare numbers

    return Value(
        value=raw,
        date=_to_millis(obj.get("date")),
        from_=_to_millis(obj.get("from")),
        to=_to_millis(obj.get("to")),
    )


def station_from_dict(obj: dict) -> Station:
    """
    Build a Station from a decoded JSON object.

    A null or absent "value" list means the station is not reporting and
    gives an empty Station, not an error.
    """
    if not isinstance(obj, dict):
        raise DecodeError(f"Expected a station object, got {type(obj).__name__}")

    name = obj.get("name")
    if name is None:
        # single-station payloads nest the metadata
        meta = obj.get("station")
        if isinstance(meta, dict):
            name = meta.get("name")

    raw_values = obj.get("value")
    if raw_values is None:
        raw_values = []
    if not isinstance(raw_values, list):
        raise DecodeError("Station 'value' must be a list")

    return Station(
        name=name or "",
        values=tuple(_value_from_dict(v) for v in raw_values),
    )


def station_data_from_dict(obj: dict) -> StationData:
    if not isinstance(obj, dict):
        raise DecodeError(f"Expected an object, got {type(obj).__name__}")

    raw_stations = obj.get("station") or []
    if not isinstance(raw_stations, list):
        raise DecodeError("'station' must be a list")

    return StationData(stations=tuple(station_from_dict(s) for s in raw_stations))


def decode_station(text: str) -> Station:
    """Decode a single-station response body."""
    return station_from_dict(json.loads(text))


def decode_station_data(text: str) -> StationData:
    """Decode a station-set response body."""
    return station_data_from_dict(json.loads(text))
