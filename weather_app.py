"""
Interactive SMHI weather menu.

Arrow keys move the highlight, Enter runs the selected option, Escape
cancels a running temperature scan. A failed request or a bad payload is
reported and the menu comes back; it never ends the session.

Usage:
    python weather_app.py              # interactive menu
    python weather_app.py --average    # print the national average and exit
    python weather_app.py --list       # list every station's reading and exit
    python weather_app.py --rainfall   # print the Lund rainfall summary and exit
"""

import sys
import signal
from dataclasses import dataclass
from typing import Optional

import requests

from config import (
    MENU_OPTIONS, OPTION_AVERAGE, OPTION_RAINFALL, OPTION_LIST, OPTION_EXIT,
    ALL_STATION_TEMPERATURES, LUND_RAINFALL, KEY_POLL_SECONDS,
)
from smhi_client import SmhiClient
from presenters import run_temperatures, show_rainfall
from terminal import read_key, raw_mode, clear_screen, colored, HIGHLIGHT, RED

CALL_MADE_MESSAGE = "Call has been made, please wait for a response from the API."
CONTINUE_PROMPT = "Press any key to return to the menu."

ONE_SHOT_FLAGS = {
    "--average": OPTION_AVERAGE,
    "--rainfall": OPTION_RAINFALL,
    "--list": OPTION_LIST,
}


# Graceful shutdown
RUNNING = True


def handle_signal(signum, frame):
    global RUNNING
    print("\n[MENU] Shutting down...")
    RUNNING = False


# =======================================================================
# Menu state
# =======================================================================

class Menu:
    def __init__(self, options=None):
        self.options = list(options or MENU_OPTIONS)
        self.index = 0

    def move_up(self):
        self.index = (self.index - 1) % len(self.options)

    def move_down(self):
        self.index = (self.index + 1) % len(self.options)

    def handle_key(self, key) -> Optional[int]:
        """Apply a key press. Returns the selected index on Enter, else None."""
        if key == "UP":
            self.move_up()
        elif key == "DOWN":
            self.move_down()
        elif key == "ENTER":
            return self.index
        return None

    def render(self) -> list:
        return [
            colored(option, HIGHLIGHT) if i == self.index else option
            for i, option in enumerate(self.options)
        ]

    def draw(self):
        for line in self.render():
            print(line)
        sys.stdout.flush()


# =======================================================================
# Dispatch
# =======================================================================

@dataclass
class ActionResult:
    ok: bool
    error: Optional[str] = None
    value: object = None


def run_option(option: int, client: SmhiClient, with_listener: bool = True) -> ActionResult:
    """
    Fetch, decode and present one menu option.

    Network and payload errors are caught here and reported; they come back
    as a failed ActionResult instead of propagating into the menu loop.
    """
    try:
        if option == OPTION_AVERAGE:
            data = client.get_station_data(ALL_STATION_TEMPERATURES)
            value = run_temperatures(data, True, with_listener=with_listener)
        elif option == OPTION_RAINFALL:
            station = client.get_station(LUND_RAINFALL)
            value = show_rainfall(station)
        elif option == OPTION_LIST:
            data = client.get_station_data(ALL_STATION_TEMPERATURES)
            value = run_temperatures(data, False, with_listener=with_listener)
        else:
            return ActionResult(ok=False, error=f"Unknown option: {option}")
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else "?"
        message = f"SMHI request failed (HTTP {status}): {e}"
    except requests.RequestException as e:
        message = f"SMHI request failed: {e}"
    except ValueError as e:
        message = f"Could not use SMHI response: {e}"
    else:
        return ActionResult(ok=True, value=value)

    print(colored(f"[ERROR] {message}", RED))
    return ActionResult(ok=False, error=message)


# =======================================================================
# Main loop
# =======================================================================

def _wait_for_key(key_reader):
    """Block for a key, waking up to notice a shutdown signal. None on shutdown or EOF."""
    while RUNNING:
        try:
            key = key_reader(KEY_POLL_SECONDS)
        except EOFError:
            print("\n[STOP] Input closed.")
            return None
        if key is not None:
            return key
    return None


def main_menu(client: SmhiClient, key_reader=read_key):
    """Run the menu until Exit is chosen or a shutdown signal arrives."""
    menu = Menu()

    while RUNNING:
        menu.draw()
        key = _wait_for_key(key_reader)
        if key is None:
            return
        clear_screen()

        selected = menu.handle_key(key)
        if selected is None:
            continue
        if selected == OPTION_EXIT:
            return

        print(colored(f"\n{CALL_MADE_MESSAGE}", RED))
        run_option(selected, client)

        print(f"\n{CONTINUE_PROMPT}")
        if _wait_for_key(key_reader) is None:
            return
        clear_screen()


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    client = SmhiClient()

    try:
        for flag, option in ONE_SHOT_FLAGS.items():
            if flag in argv:
                with raw_mode():
                    result = run_option(option, client, with_listener=sys.stdin.isatty())
                return 0 if result.ok else 1

        signal.signal(signal.SIGTERM, handle_signal)
        try:
            with raw_mode():
                main_menu(client)
        except KeyboardInterrupt:
            print("\n[STOP] Interrupted by user.")
    finally:
        client.close()

    print("Goodbye.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
