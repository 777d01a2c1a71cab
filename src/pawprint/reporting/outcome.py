"""Outcome classification of compiled reps.

Every rep falls into exactly one :class:`OutcomeCategory`, decided by strict
precedence over its four flags::

    created      rep.created
    modified     rep.modified
    skipped      not rep.compiled
    not_written  rep.compiled and not rep.written
    identical    everything else

A rep flagged both created and modified is reported as created only.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pawprint.site import Representation


class OutcomeCategory(StrEnum):
    """Mutually exclusive result of compiling one rep."""

    CREATED = "created"
    MODIFIED = "modified"
    SKIPPED = "skipped"
    NOT_WRITTEN = "not_written"
    IDENTICAL = "identical"

    @property
    def label(self) -> str:
        """Human-readable label used in reports."""
        return self.value.replace("_", " ")


class LogAction(StrEnum):
    """Action column of a per-file log line."""

    CREATE = "create"
    UPDATE = "update"
    IDENTICAL = "identical"
    SKIP = "skip"
    NOT_WRITTEN = "not written"


class Severity(StrEnum):
    """How prominent a per-file log line is."""

    HIGH = "high"
    LOW = "low"


@dataclass(frozen=True, slots=True)
class LogDecision:
    """What to log for a rep as soon as it finishes compiling."""

    action: LogAction
    severity: Severity


def classify(rep: Representation) -> OutcomeCategory:
    """Return the single outcome category of *rep*."""
    if rep.created:
        return OutcomeCategory.CREATED
    if rep.modified:
        return OutcomeCategory.MODIFIED
    if not rep.compiled:
        return OutcomeCategory.SKIPPED
    if not rep.written:
        return OutcomeCategory.NOT_WRITTEN
    return OutcomeCategory.IDENTICAL


def should_log(rep: Representation) -> LogDecision | None:
    """Decide the per-file log line for a rep that just finished compiling.

    Unwritten reps are never logged here; skipped and not-written reps are
    reported once after the run instead.

    """
    if not rep.written:
        return None
    if rep.created:
        return LogDecision(LogAction.CREATE, Severity.HIGH)
    if rep.modified:
        return LogDecision(LogAction.UPDATE, Severity.HIGH)
    if not rep.compiled:
        return None
    return LogDecision(LogAction.IDENTICAL, Severity.LOW)


def partition(
    reps: Iterable[Representation],
) -> dict[OutcomeCategory, list[Representation]]:
    """Split *reps* into one bucket per category, preserving input order.

    Every category is present in the result, possibly empty.

    """
    buckets: dict[OutcomeCategory, list[Representation]] = {
        category: [] for category in OutcomeCategory
    }
    for rep in reps:
        buckets[classify(rep)].append(rep)
    return buckets
