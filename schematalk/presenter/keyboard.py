"""
schematalk/presenter/keyboard.py
Per-keystroke terminal input

Raw mode is a scoped resource: acquire with `with keyboard.raw_mode():`,
released on every exit path (quit, interrupt, exceptions).
"""
from __future__ import annotations

import logging
import os
import sys
from contextlib import contextmanager
from typing import Iterator, Optional, TextIO

logger = logging.getLogger(__name__)

# Key alphabet
KEY_QUIT = "q"
KEY_INTERRUPT = "\x03"  # Ctrl+C
KEY_SPACE = " "
KEY_RIGHT = "\x1b[C"
KEY_LEFT = "\x1b[D"

QUIT_KEYS = frozenset({KEY_QUIT, KEY_INTERRUPT})
NEXT_KEYS = frozenset({KEY_SPACE, KEY_RIGHT})
PREV_KEYS = frozenset({KEY_LEFT})

# Escape sequences (arrows) arrive in a single read
_READ_SIZE = 8


class KeyboardInput:
    """Keystroke source backed by a terminal stream (stdin by default)"""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdin

    def is_interactive(self) -> bool:
        try:
            return bool(self.stream) and self.stream.isatty()
        except (AttributeError, ValueError):
            # closed or detached stream
            return False

    @contextmanager
    def raw_mode(self) -> Iterator[None]:
        """
        Put the terminal into per-keystroke mode.

        No echo, no line buffering, Ctrl+C delivered as a key. Output
        post-processing stays on so "\\n" still returns the carriage.
        """
        import termios
        import tty

        fd = self.stream.fileno()
        saved = termios.tcgetattr(fd)
        mode = termios.tcgetattr(fd)
        mode[tty.IFLAG] &= ~(termios.ICRNL | termios.IXON)
        mode[tty.LFLAG] &= ~(termios.ECHO | termios.ICANON | termios.ISIG | termios.IEXTEN)
        mode[tty.CC][termios.VMIN] = 1
        mode[tty.CC][termios.VTIME] = 0
        termios.tcsetattr(fd, termios.TCSAFLUSH, mode)
        logger.debug("[KeyboardInput] raw mode acquired")
        try:
            yield
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, saved)
            logger.debug("[KeyboardInput] raw mode released")

    def read_key(self) -> str:
        """Block until a key arrives. Returns "" at end of input."""
        data = os.read(self.stream.fileno(), _READ_SIZE)
        return data.decode("utf-8", errors="ignore")
