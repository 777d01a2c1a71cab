"""Compilation lifecycle events.

The compiler announces its progress on an :class:`~pawprint.observability.bus.EventBus`
using these names. Payloads are positional:

- ``compilation_started(rep)``
- ``compilation_ended(rep)``
- ``filtering_started(rep, filter_name)``
- ``filtering_ended(rep, filter_name)``

For a given rep, ``compilation_started`` strictly precedes
``compilation_ended``, and filtering pairs nest (LIFO) inside it. Events of
other reps may interleave when a filter triggers a sub-compilation.

"""

import time
from enum import StrEnum


class CompileEvent(StrEnum):
    """Names of the lifecycle events published during compilation."""

    COMPILATION_STARTED = "compilation_started"
    COMPILATION_ENDED = "compilation_ended"
    FILTERING_STARTED = "filtering_started"
    FILTERING_ENDED = "filtering_ended"


def now() -> float:
    """Return the current monotonic clock value in seconds."""
    return time.perf_counter()
