"""Run summaries — outcome counts, completion line, and filter profile.

All functions here return lines of text and never touch the aggregator's
state; the compile command decides which stream they go to.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pawprint.reporting.outcome import OutcomeCategory, partition

if TYPE_CHECKING:
    from pawprint._types import FilterName
    from pawprint.site import Representation

PROFILE_WARNING = (
    "Warning: profiling information may not be accurate because "
    "some objects were not compiled."
)


@dataclass(frozen=True, slots=True)
class ProfileRow:
    """Aggregate statistics for one filter across a run.

    Attributes:
        filter_name: Name of the filter.
        count: Number of invocations.
        min: Shortest invocation in seconds.
        avg: Mean invocation in seconds.
        max: Longest invocation in seconds.
        total: Sum of all invocations in seconds.

    """

    filter_name: str
    count: int
    min: float
    avg: float
    max: float
    total: float


# ---------------------------------------------------------------------------
# Outcome summary
# ---------------------------------------------------------------------------


def render_state_table(reps: Iterable[Representation]) -> list[str]:
    """Count reps per outcome, one ``'  %4d  label'`` line per category."""
    buckets = partition(reps)
    lines = [""]
    lines.extend(
        f"  {len(buckets[category]):4d}  {category.label}" for category in OutcomeCategory
    )
    return lines


def render_completion(
    reps: Sequence[Representation],
    elapsed: float,
    *,
    whole_site: bool = True,
) -> list[str]:
    """Closing lines of a successful run.

    Args:
        reps: Every rep of the site after compilation.
        elapsed: Wall-clock seconds the run took.
        whole_site: Whether the whole site was compiled or only some objects.

    """
    lines = [""]
    if not any(rep.modified for rep in reps):
        lines.append("No objects were modified.")
    subject = "Site" if whole_site else "Object"
    lines.append(f"{subject} compiled in {elapsed:.2f}s.")
    return lines


# ---------------------------------------------------------------------------
# Filter profile
# ---------------------------------------------------------------------------


def compute_profile_rows(
    filter_times: Mapping[FilterName, Sequence[float]],
) -> list[ProfileRow]:
    """Summarise every filter's samples.

    Rows are ordered by their sample sequences compared element-wise (first
    sample, then the next, ...), with the filter name breaking ties. Filters
    without samples are left out.

    """
    rows: list[ProfileRow] = []
    ordered = sorted(
        ((name, samples) for name, samples in filter_times.items() if samples),
        key=lambda item: (tuple(item[1]), item[0]),
    )
    for name, samples in ordered:
        total = sum(samples)
        rows.append(
            ProfileRow(
                filter_name=name,
                count=len(samples),
                min=min(samples),
                avg=total / len(samples),
                max=max(samples),
                total=total,
            )
        )
    return rows


def profile_warning(reps: Iterable[Representation]) -> str | None:
    """Warning to show before the profile when some reps were not compiled."""
    if any(not rep.compiled for rep in reps):
        return PROFILE_WARNING
    return None


def render_profile_table(filter_times: Mapping[FilterName, Sequence[float]]) -> list[str]:
    """Render the filter profile as a fixed-width table.

    Returns an empty list when no filter ran. Otherwise::

                 | count    min    avg    max     tot
        ---------+-----------------------------------
             erb |     3  0.01s  0.02s  0.03s   0.06s
        markdown |     2  0.05s  0.10s  0.15s   0.20s

    """
    rows = compute_profile_rows(filter_times)
    if not rows:
        return []

    width = max(len(row.filter_name) for row in rows)
    lines = [
        "",
        " " * width + " | count    min    avg    max     tot",
        "-" * width + "-+-----------------------------------",
    ]
    for row in rows:
        lines.append(
            f"{row.filter_name:>{width}} |  {row.count:4d}  {row.min:4.2f}s  "
            f"{row.avg:4.2f}s  {row.max:4.2f}s  {row.total:5.2f}s"
        )
    return lines
