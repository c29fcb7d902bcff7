from __future__ import annotations

import json

import pytest
import requests_mock as requests_mock_lib


MIXED_STATIONS = {
    "station": [
        {"name": "A", "value": [{"value": "10"}]},
        {"name": "B", "value": None},
        {"name": "C", "value": [{"value": "x"}]},
    ]
}

LUND_PAYLOAD = {
    "station": {"key": "53430", "name": "Lund"},
    "parameter": {"key": "23", "unit": "millimeter"},
    "value": [
        {"from": 1693526400001, "to": 1696118400000, "date": 1696118400000, "value": "41.2"},
        {"from": 1696118400001, "to": 1698796800000, "date": 1698796800000, "value": "88.0"},
        {"from": 1698796800001, "to": 1701388800000, "date": 1701388800000, "value": "63.5"},
    ],
}


@pytest.fixture()
def requests_mock():
    with requests_mock_lib.Mocker() as mocker:
        yield mocker


@pytest.fixture()
def mixed_stations_json() -> str:
    return json.dumps(MIXED_STATIONS)


@pytest.fixture()
def lund_json() -> str:
    return json.dumps(LUND_PAYLOAD)
