"""Console output — the per-file action log printed during compilation.

Each line shows an action, the output path and, when known, how long the
rep took to compile::

          create  output/index.html [0.12s]
       identical  output/about/index.html [0.01s]

Detects ``NO_COLOR`` / ``TERM`` for safe fallback to plain text.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING, TextIO

from pawprint.reporting.outcome import LogAction, Severity

if TYPE_CHECKING:
    from pawprint.config import PawprintConfig


# ---------------------------------------------------------------------------
# ANSI helpers — respect NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def supports_color(stream: TextIO) -> bool:
    """Return True if *stream* is a terminal that supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(stream, "isatty") and stream.isatty()


_RESET = "\033[0m"
_BOLD = "\033[1m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_DIM = "\033[2m"

_ACTION_STYLES: dict[LogAction, str] = {
    LogAction.CREATE: _BOLD + _GREEN,
    LogAction.UPDATE: _BOLD + _YELLOW,
    LogAction.IDENTICAL: _DIM,
    LogAction.SKIP: _DIM,
    LogAction.NOT_WRITTEN: _DIM,
}

_RANK: dict[Severity, int] = {Severity.LOW: 0, Severity.HIGH: 1}


# ---------------------------------------------------------------------------
# File logger
# ---------------------------------------------------------------------------

class FileLogger:
    """Prints one line per output file, filtered by severity.

    Args:
        stream: Where lines are written (defaults to stdout at call time).
        level: Lowest severity printed. ``LOW`` prints everything,
            ``HIGH`` only created and updated files.
        color: Force colors on or off; ``None`` detects from *stream*.

    """

    __slots__ = ("_color", "_level", "_stream")

    def __init__(
        self,
        stream: TextIO | None = None,
        *,
        level: Severity = Severity.LOW,
        color: bool | None = None,
    ) -> None:
        self._stream = stream
        self._level = level
        self._color = color

    @classmethod
    def from_config(cls, config: PawprintConfig, stream: TextIO | None = None) -> FileLogger:
        return cls(stream, level=Severity(config.log_level), color=config.color)

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def file(
        self,
        severity: Severity,
        action: LogAction,
        path: str,
        duration: float | None = None,
    ) -> None:
        """Log *action* on *path* unless *severity* is below the logger's level."""
        if _RANK[severity] < _RANK[self._level]:
            return
        stream = self.stream
        color = self._color if self._color is not None else supports_color(stream)
        label = f"{action.value:>12}"
        if color:
            label = f"{_ACTION_STYLES[action]}{label}{_RESET}"
        timing = f" [{duration:.2f}s]" if duration is not None else ""
        print(f"{label}  {path}{timing}", file=stream)
