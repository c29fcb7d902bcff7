"""
Configuration for the SMHI weather menu.

Endpoint paths come from the SMHI open data docs:
https://opendata.smhi.se/apidocs/metobs/index.html
Runtime knobs can be overridden through the environment or a .env file.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# --- SMHI API ---
SMHI_BASE_URL = os.getenv(
    "SMHI_BASE_URL",
    "https://opendata-download-metobs.smhi.se/api/version/latest",
).rstrip("/")
USER_AGENT = "SmhiWeatherMenu/1.0"
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))

# Parameter 39, hourly instantaneous reading, latest hour for every station.
ALL_STATION_TEMPERATURES = (
    "/parameter/39/station-set/all/period/latest-hour/data.json"
    "?measuringStations=all"
)
# Parameter 23, monthly precipitation sum. Station 53430 is Lund.
LUND_RAINFALL = "/parameter/23/station/53430/period/latest-months/data.json"
LUND_STATION_NAME = "Lund"

# --- Presentation ---
PRINT_DELAY_SECONDS = float(os.getenv("PRINT_DELAY_SECONDS", "0.1"))  # list mode throttle
DATE_FORMAT = os.getenv("DATE_FORMAT", "%Y-%m-%d")  # sv-SE short date
DISPLAY_TIMEZONE = os.getenv("DISPLAY_TIMEZONE", "")  # empty = machine local time

# --- Terminal ---
ESCAPE_KEY = "ESC"
KEY_POLL_SECONDS = 0.1  # listener wakes this often to check if it should stop

MENU_OPTIONS = [
    "Current Average Temperature in Sweden",
    "Rainfall in Lund last month",
    "Print temperature of all stations",
    "Exit",
]
OPTION_AVERAGE = 0
OPTION_RAINFALL = 1
OPTION_LIST = 2
OPTION_EXIT = len(MENU_OPTIONS) - 1
