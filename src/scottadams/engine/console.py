"""Terminal boundary: text output, line input, screen clearing and pauses."""

import sys
import time
from typing import TextIO

CLEAR_SCREEN = "\033[H\033[2J"


class Console:
    """Wraps the input and output streams the game talks through."""

    def __init__(
        self,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        delay_seconds: float = 1.0,
    ):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.delay_seconds = delay_seconds

    def write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def writeln(self, text: str = "") -> None:
        self.write(text + "\n")

    def read_line(self) -> str | None:
        """Return the next line without its newline, or None at end of input."""
        line = self.stdin.readline()
        if not line:
            return None
        return line.rstrip("\r\n")

    def prompt(self, text: str) -> str | None:
        self.writeln(text)
        return self.read_line()

    def clear(self) -> None:
        if self.stdout.isatty():
            self.write(CLEAR_SCREEN)

    def pause(self) -> None:
        if self.delay_seconds > 0:
            time.sleep(self.delay_seconds)
