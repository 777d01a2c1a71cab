"""The compile command — drives one compilation run and reports on it.

A run moves through ``IDLE -> RUNNING`` and ends in one of:

- ``SUCCEEDED``: print per-file lines for skipped and unwritten reps, the
  completion line, and with ``--verbose`` the outcome table and filter
  profile. Exit code 0.
- ``INTERRUPTED``: the user pressed Ctrl-C. Nothing else is printed.
  Exit code 0.
- ``FAILED``: the compiler raised. A diagnostic built from the compiler's
  stack goes to stderr. Exit code 1.

There is no retry; timings of a failed or interrupted run are discarded.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, TextIO

from pawprint._errors import TargetError, TimingError
from pawprint.config import DEFAULT_BUG_TRACKER
from pawprint.console import FileLogger
from pawprint.observability import CompileEvent, EventBus, TimingAggregator, now
from pawprint.reporting.diagnostic import build_report, render_diagnostic
from pawprint.reporting.outcome import LogAction, Severity, should_log
from pawprint.reporting.summary import (
    profile_warning,
    render_completion,
    render_profile_table,
    render_state_table,
)
from pawprint.site import all_reps, clean_identifier

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pawprint._types import Clock
    from pawprint.site import CompilationUnit, Representation, Site

DEPRECATED_ALL_WARNING = "Warning: the --all option is deprecated; please use --force instead."


class RunState(StrEnum):
    """Lifecycle of a single compile run."""

    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    INTERRUPTED = "interrupted"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class CompileOptions:
    """Parsed options of ``pawprint compile``.

    Attributes:
        identifiers: Pages or assets to compile; empty means all of them.
        force: Compile even when objects are not outdated.
        all: Deprecated alias for ``force``.
        no_pages: When compiling everything, leave pages out.
        no_assets: When compiling everything, leave assets out.
        verbose: Print the outcome table and filter profile.

    """

    identifiers: tuple[str, ...] = ()
    force: bool = False
    all: bool = False
    no_pages: bool = False
    no_assets: bool = False
    verbose: bool = False


class CompileCommand:
    """Compiles a site and reports timings, outcomes and failures.

    Args:
        site: The loaded site whose compiler does the work.
        out: Stream for progress and summaries (defaults to stdout).
        err: Stream for warnings and diagnostics (defaults to stderr).
        logger: Per-file action log (defaults to one writing to *out*).
        clock: Monotonic time source in seconds.
        bug_tracker: URL printed in failure diagnostics.

    """

    def __init__(
        self,
        site: Site,
        *,
        out: TextIO | None = None,
        err: TextIO | None = None,
        logger: FileLogger | None = None,
        clock: Clock = now,
        bug_tracker: str = DEFAULT_BUG_TRACKER,
    ) -> None:
        self._site = site
        self._out = out
        self._err = err
        self._logger = logger if logger is not None else FileLogger(out)
        self._clock = clock
        self._bug_tracker = bug_tracker
        self._state = RunState.IDLE
        self._timings: TimingAggregator | None = None

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def timings(self) -> TimingAggregator | None:
        """Timings of the last successful run, ``None`` otherwise."""
        return self._timings

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err if self._err is not None else sys.stderr

    def resolve_targets(self, options: CompileOptions) -> list[CompilationUnit] | None:
        """Find the units to compile; ``None`` means the whole site.

        Identifiers are looked up among pages first, then assets.

        Raises:
            TargetError: If an identifier matches neither a page nor an asset.

        """
        if not options.identifiers:
            if options.no_pages:
                return list(self._site.assets)
            if options.no_assets:
                return list(self._site.pages)
            return None

        units: list[CompilationUnit] = []
        for raw in options.identifiers:
            identifier = clean_identifier(raw)
            unit = _find(self._site.pages, identifier) or _find(self._site.assets, identifier)
            if unit is None:
                raise TargetError(identifier)
            units.append(unit)
        return units

    def run(self, options: CompileOptions) -> int:
        """Compile and report. Returns the process exit code."""
        if options.all:
            print(DEPRECATED_ALL_WARNING, file=self.err)

        try:
            units = self.resolve_targets(options)
        except TargetError as exc:
            print(exc, file=self.err)
            return 1

        print(f"Compiling {'site' if units is None else 'objects'}...", file=self.out)

        bus = EventBus()
        timings = TimingAggregator(self._clock)
        timings.attach(bus)
        bus.subscribe(
            CompileEvent.COMPILATION_ENDED,
            lambda rep: self._log_compiled(rep, timings),
        )

        self._timings = None
        self._state = RunState.RUNNING
        started = self._clock()
        try:
            self._site.compiler.run(
                units,
                force=options.force or options.all,
                bus=bus,
            )
        except KeyboardInterrupt:
            self._state = RunState.INTERRUPTED
            return 0
        except TimingError:
            self._state = RunState.FAILED
            raise
        except Exception as exc:
            self._state = RunState.FAILED
            report = build_report(exc, self._site.compiler.stack)
            print(render_diagnostic(report, bug_tracker=self._bug_tracker), file=self.err)
            return 1
        finally:
            bus.clear()
        elapsed = self._clock() - started

        try:
            timings.ensure_balanced()
        except TimingError:
            self._state = RunState.FAILED
            raise

        self._state = RunState.SUCCEEDED
        self._timings = timings
        self._report(options, timings, elapsed, whole_site=units is None)
        return 0

    # ----- Reporting -----

    def _log_compiled(self, rep: Representation, timings: TimingAggregator) -> None:
        decision = should_log(rep)
        if decision is not None:
            self._logger.file(
                decision.severity,
                decision.action,
                rep.output_path,
                timings.elapsed_for(rep.output_path),
            )

    def _report(
        self,
        options: CompileOptions,
        timings: TimingAggregator,
        elapsed: float,
        *,
        whole_site: bool,
    ) -> None:
        reps = all_reps(self._site)

        for rep in reps:
            if not rep.compiled:
                self._logger.file(
                    Severity.LOW, LogAction.SKIP, rep.output_path,
                    timings.elapsed_for(rep.output_path),
                )
        for rep in reps:
            if rep.compiled and not rep.written:
                self._logger.file(
                    Severity.LOW, LogAction.NOT_WRITTEN, rep.output_path,
                    timings.elapsed_for(rep.output_path),
                )

        self._print_lines(render_completion(reps, elapsed, whole_site=whole_site))

        if not options.verbose:
            return

        self._print_lines(render_state_table(reps))

        table = render_profile_table(timings.filter_times())
        if not table:
            return
        warning = profile_warning(reps)
        if warning is not None:
            print(file=self.err)
            print(warning, file=self.err)
        self._print_lines(table)

    def _print_lines(self, lines: Sequence[str]) -> None:
        for line in lines:
            print(line, file=self.out)


def _find(units: Sequence[CompilationUnit], identifier: str) -> CompilationUnit | None:
    for unit in units:
        if unit.identifier == identifier:
            return unit
    return None
