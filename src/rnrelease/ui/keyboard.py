"""
Raw keyboard input for the asyncio loop

Puts stdin in cbreak mode and registers it as a loop reader. Bytes are
decoded into key names and posted as KeyPressed messages. POSIX only.
"""

import asyncio
import logging
import os
import sys
import termios
import tty
from typing import Callable, List, Optional

from rnrelease.models.messages import KeyPressed, Message

logger = logging.getLogger(__name__)

ESCAPE_SEQUENCES = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOH": "home",
    "\x1bOF": "end",
}

CONTROL_KEYS = {
    "\r": "enter",
    "\n": "enter",
    "\x7f": "backspace",
    "\x08": "backspace",
    "\x03": "ctrl+c",
    "\t": "tab",
}


def decode_keys(data: str) -> List[str]:
    """
    Split a chunk read from the terminal into key names

    Printable characters are returned as themselves. Unknown escape
    sequences are dropped; a lone ESC becomes "esc".
    """
    keys = []
    i = 0
    while i < len(data):
        char = data[i]

        if char == "\x1b":
            sequence = data[i:i + 3]
            if sequence in ESCAPE_SEQUENCES:
                keys.append(ESCAPE_SEQUENCES[sequence])
                i += 3
                continue
            if len(sequence) > 1 and sequence[1] in "[O":
                # skip an unrecognized CSI/SS3 sequence up to its final byte
                j = i + 2
                while j < len(data) and not data[j].isalpha() and data[j] != "~":
                    j += 1
                i = j + 1
                continue
            keys.append("esc")
            i += 1
            continue

        if char in CONTROL_KEYS:
            keys.append(CONTROL_KEYS[char])
        elif char.isprintable():
            keys.append(char)
        i += 1

    return keys


class KeyReader:
    """
    Context manager feeding key presses from stdin into a message sink

    Usage:
        with KeyReader(loop, runner.post):
            await runner.run()
    """

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        post: Callable[[Message], None],
        stream=None,
    ):
        self.loop = loop
        self.post = post
        self.stream = stream or sys.stdin
        self._fd: Optional[int] = None
        self._saved_attrs = None

    def __enter__(self) -> "KeyReader":
        self._fd = self.stream.fileno()
        if os.isatty(self._fd):
            self._saved_attrs = termios.tcgetattr(self._fd)
            tty.setcbreak(self._fd)
        self.loop.add_reader(self._fd, self._on_readable)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.loop.remove_reader(self._fd)
        if self._saved_attrs is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_attrs)
            self._saved_attrs = None

    def _on_readable(self) -> None:
        data = os.read(self._fd, 1024)
        if not data:
            # stdin closed; nothing more will arrive
            self.loop.remove_reader(self._fd)
            return

        for key in decode_keys(data.decode("utf-8", errors="ignore")):
            self.post(KeyPressed(key))
