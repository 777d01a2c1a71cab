"""Failure diagnostics — turn a compiler exception into a readable report.

Provides two steps:
1. ``build_report`` — collects the message, the compilation stack and the
   Python backtrace of a failure into a :class:`DiagnosticReport`.
2. ``render_diagnostic`` — formats the report as plain text for stderr.

The exception itself is only read, never modified or suppressed.
"""

from __future__ import annotations

import traceback
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeAlias

from pawprint._errors import CompilationError, FailureKind
from pawprint.config import DEFAULT_BUG_TRACKER


# ---------------------------------------------------------------------------
# Compilation stack frames
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PageFrame:
    """A page rep being compiled."""

    identifier: str
    rep_name: str


@dataclass(frozen=True, slots=True)
class AssetFrame:
    """An asset rep being compiled."""

    identifier: str
    rep_name: str


@dataclass(frozen=True, slots=True)
class LayoutFrame:
    """A layout being applied."""

    identifier: str


Frame: TypeAlias = PageFrame | AssetFrame | LayoutFrame


def describe_frame(frame: Frame) -> str:
    """Tag and name of a frame, e.g. ``[page]   /about/ (rep default)``."""
    match frame:
        case PageFrame(identifier=identifier, rep_name=rep_name):
            return f"[page]   {identifier} (rep {rep_name})"
        case AssetFrame(identifier=identifier, rep_name=rep_name):
            return f"[asset]  {identifier} (rep {rep_name})"
        case LayoutFrame(identifier=identifier):
            return f"[layout] {identifier}"


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class DiagnosticReport:
    """Everything shown to the user about one failed run.

    Attributes:
        subject: What was being compiled, e.g. ``"/about/ (rep default)"``.
        kind: The failure kind the message was chosen by.
        message: One-line description of the failure.
        frames: Compilation stack, innermost frame first.
        backtrace: ``file:line:in `function``` entries, most recent call last.

    """

    subject: str
    kind: FailureKind
    message: str
    frames: tuple[Frame, ...]
    backtrace: tuple[str, ...]


def failure_kind(exc: BaseException) -> FailureKind:
    """Kind of *exc*; anything that is not a ``CompilationError`` is generic."""
    if isinstance(exc, CompilationError):
        return exc.kind
    return FailureKind.GENERIC


def failure_message(exc: BaseException) -> str:
    """One-line message for *exc*, chosen by its failure kind."""
    detail = exc.detail if isinstance(exc, CompilationError) else str(exc)
    match failure_kind(exc):
        case FailureKind.UNKNOWN_LAYOUT:
            return f"Unknown layout: {detail}"
        case FailureKind.UNKNOWN_FILTER:
            return f"Unknown filter: {detail}"
        case FailureKind.CANNOT_DETERMINE_FILTER:
            return f"Cannot determine filter for layout: {detail}"
        case FailureKind.RECURSIVE_COMPILATION:
            return "Recursive call to page content."
        case FailureKind.NO_LONGER_SUPPORTED:
            return f"No longer supported: {detail}"
        case FailureKind.NO_RULES_FILE:
            return "No rules file found"
        case FailureKind.NO_MATCHING_RULE:
            return "No matching rule found"
        case FailureKind.GENERIC:
            return f"Error: {detail or type(exc).__qualname__}"


def _subject(stack: Sequence[Frame]) -> str:
    """Describe the innermost rep on the stack, or the site as a whole."""
    for frame in reversed(stack):
        match frame:
            case PageFrame(identifier=identifier, rep_name=rep_name) | AssetFrame(
                identifier=identifier, rep_name=rep_name
            ):
                return f"{identifier} (rep {rep_name})"
    return "the site"


def _backtrace(exc: BaseException) -> tuple[str, ...]:
    return tuple(
        f"{entry.filename}:{entry.lineno}:in `{entry.name}`"
        for entry in traceback.extract_tb(exc.__traceback__)
    )


def build_report(exc: BaseException, stack: Sequence[Frame] | None) -> DiagnosticReport:
    """Collect a diagnostic for *exc* raised while *stack* was being compiled.

    Args:
        exc: The exception that ended the run.
        stack: The compiler's stack at the time of failure, outermost first.
            ``None`` is treated as empty.

    """
    frames = tuple(stack or ())
    return DiagnosticReport(
        subject=_subject(frames),
        kind=failure_kind(exc),
        message=failure_message(exc),
        frames=tuple(reversed(frames)),
        backtrace=_backtrace(exc),
    )


def render_diagnostic(report: DiagnosticReport, *, bug_tracker: str = DEFAULT_BUG_TRACKER) -> str:
    """Format *report* for the terminal."""
    lines = [
        "",
        f"ERROR: An exception occurred while compiling {report.subject}.",
        "",
        f"If you think this is a bug in pawprint, please do report it at <{bug_tracker}> -- thanks!",
        "",
        "Message:",
        f"  {report.message}",
        "",
        "Compilation stack:",
    ]
    lines.extend(f"  - {describe_frame(frame)}" for frame in report.frames)
    lines.append("")
    lines.append("Backtrace:")
    lines.extend(f"  - {entry}" for entry in report.backtrace)
    return "\n".join(lines)
