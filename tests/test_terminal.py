from __future__ import annotations

import os
import threading

import pytest

from terminal import EscapeListener, decode_key, read_key


class PipeStream:
    """Just enough of a file object for read_key: a fileno."""

    def __init__(self, fd: int) -> None:
        self._fd = fd

    def fileno(self) -> int:
        return self._fd


@pytest.fixture()
def pipe():
    read_fd, write_fd = os.pipe()
    yield PipeStream(read_fd), write_fd
    os.close(read_fd)
    os.close(write_fd)


@pytest.mark.parametrize("seq, name", [
    ("\x1b[A", "UP"),
    ("\x1b[B", "DOWN"),
    ("\x1bOA", "UP"),
    ("\r", "ENTER"),
    ("\n", "ENTER"),
    ("\x1b", "ESC"),
    ("\x1b[5~", "UNKNOWN"),
    ("q", "q"),
])
def test_decode_key(seq, name) -> None:
    assert decode_key(seq) == name


def test_read_key_joins_arrow_sequence(pipe) -> None:
    stream, write_fd = pipe
    os.write(write_fd, b"\x1b[B")

    assert read_key(0.5, stream=stream) == "DOWN"


def test_read_key_lone_escape(pipe) -> None:
    stream, write_fd = pipe
    os.write(write_fd, b"\x1b")

    assert read_key(0.5, stream=stream) == "ESC"


def test_read_key_times_out(pipe) -> None:
    stream, _ = pipe

    assert read_key(0.01, stream=stream) is None


def test_listener_sets_event_on_escape() -> None:
    keys = iter(["a", None, "ENTER", "ESC"])
    cancel = threading.Event()

    def reader(timeout):
        return next(keys, None)

    with EscapeListener(cancel, key_reader=reader, poll_seconds=0.01):
        assert cancel.wait(timeout=2.0)


def test_listener_stops_without_escape() -> None:
    cancel = threading.Event()
    listener = EscapeListener(cancel, key_reader=lambda timeout: None, poll_seconds=0.01)

    listener.start()
    listener.stop()

    assert not listener._thread.is_alive()
    assert not cancel.is_set()


def test_listener_quits_when_stdin_unusable() -> None:
    cancel = threading.Event()

    def broken(timeout):
        raise OSError("no fileno")

    with EscapeListener(cancel, key_reader=broken, poll_seconds=0.01) as listener:
        listener._thread.join(timeout=1.0)
        assert not listener._thread.is_alive()
    assert not cancel.is_set()


def test_read_key_raises_eof_on_closed_input() -> None:
    read_fd, write_fd = os.pipe()
    os.close(write_fd)
    try:
        with pytest.raises(EOFError):
            read_key(0.5, stream=PipeStream(read_fd))
    finally:
        os.close(read_fd)


def test_read_key_keeps_utf8_character_whole(pipe) -> None:
    stream, write_fd = pipe
    os.write(write_fd, "åq".encode("utf-8"))

    assert read_key(0.5, stream=stream) == "å"
    assert read_key(0.5, stream=stream) == "q"


def test_listener_stops_on_closed_input() -> None:
    read_fd, write_fd = os.pipe()
    os.close(write_fd)
    cancel = threading.Event()
    stream = PipeStream(read_fd)

    try:
        with EscapeListener(cancel, key_reader=lambda timeout: read_key(timeout, stream=stream),
                            poll_seconds=0.01) as listener:
            listener._thread.join(timeout=1.0)
            assert not listener._thread.is_alive()
    finally:
        os.close(read_fd)
    assert not cancel.is_set()
