"""Tests for pawprint.reporting.diagnostic — failure reports."""

from __future__ import annotations

import pytest

from pawprint._errors import CompilationError, FailureKind
from pawprint.reporting.diagnostic import (
    AssetFrame,
    LayoutFrame,
    PageFrame,
    build_report,
    describe_frame,
    failure_kind,
    failure_message,
    render_diagnostic,
)


def _raised(exc: BaseException) -> BaseException:
    """Raise and catch *exc* so that it carries a traceback."""
    try:
        raise exc
    except BaseException as caught:  # noqa: BLE001
        return caught


class TestFailureMessage:
    """failure_message() — one message per failure kind."""

    @pytest.mark.parametrize(
        ("kind", "detail", "expected"),
        [
            (FailureKind.UNKNOWN_LAYOUT, "/default/", "Unknown layout: /default/"),
            (FailureKind.UNKNOWN_FILTER, "haml", "Unknown filter: haml"),
            (
                FailureKind.CANNOT_DETERMINE_FILTER,
                "/page/",
                "Cannot determine filter for layout: /page/",
            ),
            (FailureKind.RECURSIVE_COMPILATION, "", "Recursive call to page content."),
            (FailureKind.NO_LONGER_SUPPORTED, "page_defaults", "No longer supported: page_defaults"),
            (FailureKind.NO_RULES_FILE, "", "No rules file found"),
            (FailureKind.NO_MATCHING_RULE, "/about/", "No matching rule found"),
            (FailureKind.GENERIC, "disk full", "Error: disk full"),
        ],
    )
    def test_known_kinds(self, kind: FailureKind, detail: str, expected: str) -> None:
        assert failure_message(CompilationError(kind, detail)) == expected

    def test_foreign_exception_is_generic(self) -> None:
        exc = ValueError("bad front matter")
        assert failure_kind(exc) is FailureKind.GENERIC
        assert failure_message(exc) == "Error: bad front matter"

    def test_generic_without_message_uses_type(self) -> None:
        assert failure_message(KeyError()) == "Error: KeyError"


class TestFrames:
    def test_describe_frames(self) -> None:
        assert describe_frame(PageFrame("/about/", "default")) == "[page]   /about/ (rep default)"
        assert describe_frame(AssetFrame("/style/", "css")) == "[asset]  /style/ (rep css)"
        assert describe_frame(LayoutFrame("/default/")) == "[layout] /default/"


class TestBuildReport:
    """build_report() — subject, frames and backtrace."""

    def test_subject_is_innermost_rep(self) -> None:
        stack = [
            PageFrame("/", "default"),
            LayoutFrame("/default/"),
            PageFrame("/sidebar/", "default"),
            LayoutFrame("/partial/"),
        ]
        report = build_report(_raised(RuntimeError("x")), stack)

        assert report.subject == "/sidebar/ (rep default)"

    def test_asset_subject(self) -> None:
        report = build_report(_raised(RuntimeError("x")), [AssetFrame("/logo/", "png")])
        assert report.subject == "/logo/ (rep png)"

    def test_subject_defaults_to_site(self) -> None:
        assert build_report(_raised(RuntimeError("x")), []).subject == "the site"
        assert build_report(_raised(RuntimeError("x")), None).subject == "the site"
        assert build_report(_raised(RuntimeError("x")), [LayoutFrame("/d/")]).subject == "the site"

    def test_frames_innermost_first(self) -> None:
        stack = [PageFrame("/", "default"), LayoutFrame("/default/")]
        report = build_report(_raised(RuntimeError("x")), stack)

        assert report.frames == (LayoutFrame("/default/"), PageFrame("/", "default"))

    def test_backtrace_from_traceback(self) -> None:
        report = build_report(_raised(RuntimeError("x")), [])

        assert report.backtrace
        assert "test_diagnostic.py" in report.backtrace[-1]
        assert "in `_raised`" in report.backtrace[-1]

    def test_exception_left_untouched(self) -> None:
        exc = _raised(CompilationError(FailureKind.UNKNOWN_FILTER, "haml"))
        tb = exc.__traceback__

        build_report(exc, [PageFrame("/", "default")])

        assert exc.__traceback__ is tb
        assert exc.args == ("haml",)

    def test_kind_recorded(self) -> None:
        report = build_report(_raised(CompilationError(FailureKind.NO_RULES_FILE)), [])
        assert report.kind is FailureKind.NO_RULES_FILE
        assert report.message == "No rules file found"


class TestRenderDiagnostic:
    """render_diagnostic() — plain-text layout."""

    def test_sections(self) -> None:
        exc = _raised(CompilationError(FailureKind.UNKNOWN_LAYOUT, "/fancy/"))
        stack = [PageFrame("/about/", "default"), LayoutFrame("/fancy/")]

        text = render_diagnostic(build_report(exc, stack), bug_tracker="https://bugs.example")
        lines = text.splitlines()

        assert "ERROR: An exception occurred while compiling /about/ (rep default)." in lines
        assert "https://bugs.example" in text
        message_at = lines.index("Message:")
        assert lines[message_at + 1] == "  Unknown layout: /fancy/"
        stack_at = lines.index("Compilation stack:")
        assert lines[stack_at + 1] == "  - [layout] /fancy/"
        assert lines[stack_at + 2] == "  - [page]   /about/ (rep default)"
        backtrace_at = lines.index("Backtrace:")
        assert lines[backtrace_at + 1].startswith("  - ")
        assert backtrace_at > stack_at > message_at
