"""Compilation observability — lifecycle events and timing aggregation.

The compiler publishes lifecycle events on an :class:`EventBus`; a
:class:`TimingAggregator` attached to the bus turns them into per-rep and
per-filter timings.

Quick Start:
    >>> from pawprint.observability import CompileEvent, EventBus, TimingAggregator
    >>> bus = EventBus()
    >>> timings = TimingAggregator()
    >>> timings.attach(bus)
    >>> # Hand the bus to the compiler; it publishes CompileEvent.* on it

"""

from pawprint.observability.bus import EventBus
from pawprint.observability.events import CompileEvent, now
from pawprint.observability.timing import TimingAggregator

__all__ = [
    "CompileEvent",
    "EventBus",
    "TimingAggregator",
    "now",
]
