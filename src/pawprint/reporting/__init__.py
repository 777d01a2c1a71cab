"""Reporting — outcome classification, run summaries, and failure diagnostics."""

from pawprint.reporting.diagnostic import (
    AssetFrame,
    DiagnosticReport,
    Frame,
    LayoutFrame,
    PageFrame,
    build_report,
    render_diagnostic,
)
from pawprint.reporting.outcome import (
    LogAction,
    LogDecision,
    OutcomeCategory,
    Severity,
    classify,
    partition,
    should_log,
)
from pawprint.reporting.summary import (
    ProfileRow,
    compute_profile_rows,
    render_completion,
    render_profile_table,
    render_state_table,
)

__all__ = [
    "AssetFrame",
    "DiagnosticReport",
    "Frame",
    "LayoutFrame",
    "LogAction",
    "LogDecision",
    "OutcomeCategory",
    "PageFrame",
    "ProfileRow",
    "Severity",
    "build_report",
    "classify",
    "compute_profile_rows",
    "partition",
    "render_completion",
    "render_diagnostic",
    "render_profile_table",
    "render_state_table",
    "should_log",
]
