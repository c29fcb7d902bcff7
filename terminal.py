"""
Raw terminal input and a few ANSI helpers.

Keys are returned as names ("UP", "DOWN", "ENTER", "ESC") or as the
character typed. POSIX terminals only (termios).
"""

import os
import sys
import select
import termios
import threading
from contextlib import contextmanager

from config import ESCAPE_KEY, KEY_POLL_SECONDS

# --- ANSI ---
RESET = "\033[0m"
RED = "\033[31m"
DARK_RED = "\033[2;31m"
HIGHLIGHT = "\033[30;47m"  # black on white

KEY_NAMES = {
    "\x1b[A": "UP",
    "\x1b[B": "DOWN",
    "\x1b[C": "RIGHT",
    "\x1b[D": "LEFT",
    "\x1bOA": "UP",    # application cursor mode
    "\x1bOB": "DOWN",
    "\x1bOC": "RIGHT",
    "\x1bOD": "LEFT",
    "\r": "ENTER",
    "\n": "ENTER",
    "\x1b": ESCAPE_KEY,
}

ESCAPE_SEQUENCE_WAIT = 0.05  # seconds to wait for the rest of "\x1b[A"


def colored(text: str, color: str) -> str:
    if not sys.stdout.isatty():
        return text
    return f"{color}{text}{RESET}"


def clear_screen():
    if not sys.stdout.isatty():
        return
    print("\033[2J\033[H", end="", flush=True)


def decode_key(seq: str) -> str:
    """Map a raw byte sequence from the terminal to a key name."""
    if seq in KEY_NAMES:
        return KEY_NAMES[seq]
    if seq.startswith("\x1b"):
        return "UNKNOWN"
    return seq[:1]


@contextmanager
def raw_mode(stream=None):
    """Disable line buffering and echo on a TTY; restore on exit. No-op otherwise."""
    stream = stream or sys.stdin
    if not stream.isatty():
        yield
        return

    fd = stream.fileno()
    old_settings = termios.tcgetattr(fd)
    new_settings = termios.tcgetattr(fd)
    new_settings[3] = new_settings[3] & ~termios.ICANON & ~termios.ECHO
    new_settings[6][termios.VMIN] = 1
    new_settings[6][termios.VTIME] = 0
    try:
        termios.tcsetattr(fd, termios.TCSADRAIN, new_settings)
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)


def read_key(timeout: float = None, stream=None):
    """
    Read one key press.

    Blocks until a key arrives, or for at most `timeout` seconds when given,
    in which case None is returned on timeout. Reads the fd directly so that
    select() sees any bytes left over from an escape sequence.
    """
    stream = stream or sys.stdin
    fd = stream.fileno()

    rlist, _, _ = select.select([fd], [], [], timeout)
    if not rlist:
        return None

    data = os.read(fd, 1)
    if not data:
        raise EOFError("stdin closed")

    # rest of a multi-byte UTF-8 character
    lead = data[0]
    extra = 3 if lead >= 0xF0 else 2 if lead >= 0xE0 else 1 if lead >= 0xC0 else 0
    if extra:
        data += os.read(fd, extra)

    if data == b"\x1b":
        rlist, _, _ = select.select([fd], [], [], ESCAPE_SEQUENCE_WAIT)
        if rlist:
            data += os.read(fd, 8)

    return decode_key(data.decode("utf-8", errors="replace"))


class EscapeListener:
    """
    Background thread that sets `cancel_event` when Escape is pressed.

    Polls with a short timeout so stop() returns promptly and the thread
    never holds on to keys meant for the menu.
    """

    def __init__(self, cancel_event: threading.Event, key_reader=read_key,
                 poll_seconds: float = KEY_POLL_SECONDS):
        self.cancel_event = cancel_event
        self._read_key = key_reader
        self._poll = poll_seconds
        self._stop = threading.Event()
        self._thread = None

    def start(self):
        self._thread = threading.Thread(target=self._run, name="escape-listener", daemon=True)
        self._thread.start()
        return self

    def stop(self):
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=max(self._poll * 5, 1.0))

    def _run(self):
        while not self._stop.is_set() and not self.cancel_event.is_set():
            try:
                key = self._read_key(self._poll)
            except (EOFError, OSError, ValueError):
                # stdin closed or not selectable; nothing left to listen to
                return
            if key == ESCAPE_KEY:
                self.cancel_event.set()

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.stop()
        return False
