import os
import select
import sys
import termios
import threading
import tty
from contextlib import contextmanager
from typing import IO

STDIN_READ_SIZE = 1024


def is_terminal(stream: IO) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


@contextmanager
def raw_terminal(enabled: bool = True, stream: IO = None):
    stream = stream or sys.stdin
    if not enabled or not is_terminal(stream):
        yield
        return

    fd = stream.fileno()
    old_settings = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)


class StdinForwarder(threading.Thread):
    """
    Copies local stdin bytes into an exec socket until stopped or stdin closes.
    """

    def __init__(self, sock, stream: IO = None, poll_interval: float = 0.1):
        super().__init__(daemon=True)
        self._sock = sock
        self._stream = stream or sys.stdin
        self._poll_interval = poll_interval
        self._stop_event = threading.Event()

    def run(self):
        fd = self._stream.fileno()
        while not self._stop_event.is_set():
            readable, _, _ = select.select([fd], [], [], self._poll_interval)
            if not readable:
                continue
            data = os.read(fd, STDIN_READ_SIZE)
            if not data:
                return
            try:
                self._sock.send(data)
            except OSError:
                return

    def stop(self):
        self._stop_event.set()
        if self.is_alive():
            self.join(timeout=self._poll_interval * 5)
