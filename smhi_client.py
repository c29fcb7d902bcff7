"""
SMHI open data (metobs) API client.

Handles:
  - One shared requests.Session for every call (built once at startup)
  - Raw GET of an endpoint suffix against the configured base URL
  - Decoding of station-set and single-station payloads

No retries: a failed call raises and the caller decides what to do.
"""

import requests

from config import (
    SMHI_BASE_URL, USER_AGENT, HTTP_TIMEOUT_SECONDS,
    ALL_STATION_TEMPERATURES, LUND_RAINFALL,
)
from models import Station, StationData, decode_station, decode_station_data


class SmhiClient:
    def __init__(self, base_url: str = SMHI_BASE_URL, session: requests.Session = None,
                 timeout: float = HTTP_TIMEOUT_SECONDS):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        if session is None:
            session = requests.Session()
            session.headers.update({"User-Agent": USER_AGENT, "Accept": "application/json"})
        self.session = session

    def fetch_text(self, suffix: str) -> str:
        """GET base_url + suffix and return the body text. Raises on HTTP errors."""
        url = f"{self.base_url}{suffix}"
        resp = self.session.get(url, timeout=self.timeout)
        resp.raise_for_status()
        return resp.text

    # -- Decoded endpoints ----------------------------------------------

    def get_station_data(self, suffix: str = ALL_STATION_TEMPERATURES) -> StationData:
        """Fetch a station-set endpoint (all stations, latest hour by default)."""
        return decode_station_data(self.fetch_text(suffix))

    def get_station(self, suffix: str = LUND_RAINFALL) -> Station:
        """Fetch a single-station endpoint (Lund rainfall by default)."""
        return decode_station(self.fetch_text(suffix))

    def close(self):
        self.session.close()


def test_connection():
    """Quick check that the SMHI API answers and decodes."""
    print("=" * 60)
    print("SMHI API CONNECTION TEST")
    print("=" * 60)

    client = SmhiClient()
    try:
        try:
            data = client.get_station_data()
            print(f"[OK] Station set: {len(data.stations)} stations")
        except requests.HTTPError as e:
            print(f"[FAIL] HTTP {e.response.status_code}: {e.response.text[:200]}")
            return False
        except (requests.RequestException, ValueError) as e:
            print(f"[FAIL] Station set: {e}")
            return False

        try:
            station = client.get_station()
            print(f"[OK] {station.name or 'Lund'}: {len(station.values)} values")
        except (requests.RequestException, ValueError) as e:
            print(f"[WARN] Could not fetch Lund rainfall: {e}")
    finally:
        client.close()

    print("=" * 60)
    print("Connection test passed.")
    print("=" * 60)
    return True


if __name__ == "__main__":
    test_connection()
