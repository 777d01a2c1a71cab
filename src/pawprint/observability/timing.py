"""Timing aggregator — per-rep and per-filter compilation timings.

Subscribes to the four lifecycle events and keeps:

- the elapsed seconds of every compiled rep, keyed by output path;
- every filter invocation's duration, grouped by filter name;
- a LIFO stack of filter start times.

Filters nest: a layout filter may compile another rep, which runs its own
filters before the outer filter ends. Only a stack attributes each
``filtering_ended`` to its own ``filtering_started`` at any depth.

Thread Safety:
    Single-threaded by contract. Handlers mutate the maps and the stack
    without locking; a compiler that emits from several threads would need a
    lock around both, and concurrent nested filters would corrupt the shared
    stack.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pawprint._errors import EmptyStackError, TimingError
from pawprint.observability.events import CompileEvent, now

if TYPE_CHECKING:
    from pawprint._types import Clock, FilterName, OutputPath
    from pawprint.observability.bus import EventBus
    from pawprint.site import Representation


class TimingAggregator:
    """Aggregates lifecycle events into rep and filter timings.

    Args:
        clock: Monotonic time source in seconds. Tests pass a fake.

    """

    __slots__ = ("_clock", "_filter_times", "_rep_times", "_running", "_stack")

    def __init__(self, clock: Clock = now) -> None:
        self._clock = clock
        self._running: dict[OutputPath, float] = {}
        self._rep_times: dict[OutputPath, float] = {}
        self._filter_times: dict[FilterName, list[float]] = {}
        self._stack: list[float] = []

    def attach(self, bus: EventBus) -> None:
        """Subscribe this aggregator's handlers to *bus*."""
        bus.subscribe(CompileEvent.COMPILATION_STARTED, self.on_compilation_started)
        bus.subscribe(CompileEvent.COMPILATION_ENDED, self.on_compilation_ended)
        bus.subscribe(CompileEvent.FILTERING_STARTED, self.on_filtering_started)
        bus.subscribe(CompileEvent.FILTERING_ENDED, self.on_filtering_ended)

    # ----- Event handlers -----

    def on_compilation_started(self, rep: Representation) -> None:
        """Record the start time of *rep*; a repeated start restarts the clock."""
        self._running[rep.output_path] = self._clock()

    def on_compilation_ended(self, rep: Representation) -> None:
        """Turn *rep*'s start time into its elapsed duration.

        Raises:
            TimingError: If no ``compilation_started`` was seen for the rep.

        """
        start = self._running.pop(rep.output_path, None)
        if start is None:
            msg = f"compilation_ended for {rep.output_path!r} without a matching start"
            raise TimingError(msg)
        self._rep_times[rep.output_path] = self._clock() - start

    def on_filtering_started(self, rep: Representation, filter_name: FilterName) -> None:
        self._stack.append(self._clock())

    def on_filtering_ended(self, rep: Representation, filter_name: FilterName) -> None:
        """Pop the innermost filter start and record its duration.

        Raises:
            EmptyStackError: If no filter is currently running.

        """
        if not self._stack:
            msg = (
                f"filtering_ended for filter {filter_name!r} on "
                f"{rep.output_path!r} without a matching start"
            )
            raise EmptyStackError(msg)
        started = self._stack.pop()
        self._filter_times.setdefault(filter_name, []).append(self._clock() - started)

    # ----- Queries -----

    @property
    def depth(self) -> int:
        """Number of filters currently running."""
        return len(self._stack)

    def ensure_balanced(self) -> None:
        """Check that every start event was matched by an end event.

        Raises:
            TimingError: If filters or reps are still open.

        """
        if self._stack:
            msg = f"{len(self._stack)} filter(s) started but never ended"
            raise TimingError(msg)
        if self._running:
            paths = ", ".join(sorted(self._running))
            msg = f"compilation started but never ended for: {paths}"
            raise TimingError(msg)

    def elapsed_for(self, output_path: OutputPath) -> float | None:
        """Seconds spent compiling the rep at *output_path*, if it finished."""
        return self._rep_times.get(output_path)

    def samples_for(self, filter_name: FilterName) -> tuple[float, ...]:
        """Durations of every invocation of *filter_name*, in completion order."""
        return tuple(self._filter_times.get(filter_name, ()))

    def filter_names(self) -> frozenset[FilterName]:
        """Names of all filters that completed at least once."""
        return frozenset(self._filter_times)

    def filter_times(self) -> dict[FilterName, tuple[float, ...]]:
        """Snapshot of all filter samples, safe to hand to renderers."""
        return {name: tuple(samples) for name, samples in self._filter_times.items()}
