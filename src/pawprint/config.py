"""Pawprint configuration.

PawprintConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

DEFAULT_BUG_TRACKER = "https://github.com/pawprint-ssg/pawprint/issues/new"


@dataclass(frozen=True, slots=True)
class PawprintConfig:
    """Configuration for a pawprint run.

    Attributes:
        root: Path to the site root directory. Always resolved to an absolute
              path on construction.
        site: ``module:attr`` path of the factory that loads the site, relative
              to ``root`` (e.g. ``site:load_site`` for ``site.py``).
        verbose: Print the outcome table and filter profile after a run.
        log_level: Lowest severity of per-file lines to print (``low`` shows
            every line, ``high`` only created and updated files).
        color: Force ANSI colors on or off; ``None`` detects from the terminal.
        bug_tracker: URL shown in failure diagnostics.

    """

    root: Path = field(default_factory=Path.cwd)
    site: str = "site:load_site"
    verbose: bool = False
    log_level: Literal["high", "low"] = "low"
    color: bool | None = None
    bug_tracker: str = DEFAULT_BUG_TRACKER

    def __post_init__(self) -> None:
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())
