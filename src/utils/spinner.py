"""Terminal progress indicator shown around network calls."""

import itertools
import sys
from typing import TextIO


class Spinner:
    """Single-line spinner that advances one frame per network call.

    Writes nothing when the stream is not a terminal, so redirected output
    stays clean.
    """

    FRAMES = "|/-\\"

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream if stream is not None else sys.stderr
        self._frames = itertools.cycle(self.FRAMES)
        self._active = False

    @property
    def enabled(self) -> bool:
        isatty = getattr(self.stream, "isatty", None)
        return bool(isatty and isatty())

    @property
    def active(self) -> bool:
        return self._active

    def start(self) -> None:
        """Show the next spinner frame."""
        self._active = True
        if self.enabled:
            self.stream.write(f"\r{next(self._frames)} ")
            self.stream.flush()

    def stop(self) -> None:
        """Erase the spinner frame."""
        if self._active and self.enabled:
            self.stream.write("\r  \r")
            self.stream.flush()
        self._active = False
