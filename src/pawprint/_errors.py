"""Pawprint error hierarchy.

All pawprint-specific errors inherit from PawprintError for easy catching.
"""

from enum import StrEnum


class PawprintError(Exception):
    """Base error for all pawprint operations."""


class ConfigError(PawprintError):
    """Invalid or missing configuration."""


class TargetError(PawprintError):
    """A requested page or asset identifier does not exist in the site."""

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Unknown page or asset: {identifier}")
        self.identifier = identifier


class TimingError(PawprintError):
    """Lifecycle events arrived out of order (an emitter defect)."""


class EmptyStackError(TimingError):
    """A ``filtering_ended`` event arrived with no matching start."""


class FailureKind(StrEnum):
    """Closed set of compiler failures with a dedicated user message."""

    UNKNOWN_LAYOUT = "unknown_layout"
    UNKNOWN_FILTER = "unknown_filter"
    CANNOT_DETERMINE_FILTER = "cannot_determine_filter"
    RECURSIVE_COMPILATION = "recursive_compilation"
    NO_LONGER_SUPPORTED = "no_longer_supported"
    NO_RULES_FILE = "no_rules_file"
    NO_MATCHING_RULE = "no_matching_rule"
    GENERIC = "generic"


class CompilationError(PawprintError):
    """A failure raised by the compiler while producing the site.

    Args:
        kind: Which known failure this is.
        detail: The layout, filter or feature name involved (may be empty).

    """

    def __init__(self, kind: FailureKind, detail: str = "") -> None:
        super().__init__(detail or kind.value)
        self.kind = kind
        self.detail = detail
