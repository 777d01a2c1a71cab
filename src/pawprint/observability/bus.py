"""Event bus — synchronous, same-thread publish/subscribe.

Decouples the compiler from the observers that time and log it. A bus is
constructed per run by the compile command and discarded afterwards, so no
handler outlives the run that registered it.

Thread Safety:
    None. Handlers run inline on the publishing thread, in registration
    order, before ``publish`` returns.

"""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pawprint._types import Handler


class EventBus:
    """Fan-out notification channel keyed by event name.

    Usage::

        bus = EventBus()
        bus.subscribe(CompileEvent.COMPILATION_STARTED, on_started)
        bus.publish(CompileEvent.COMPILATION_STARTED, rep)

    """

    __slots__ = ("_handlers",)

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = defaultdict(list)

    def subscribe(self, event: str, handler: Handler) -> None:
        """Register *handler* for *event*. The same handler may be added twice."""
        self._handlers[event].append(handler)

    def unsubscribe(self, event: str, handler: Handler) -> None:
        """Remove the earliest registration of *handler* for *event*.

        Raises:
            ValueError: If the handler is not subscribed to the event.

        """
        handlers = self._handlers.get(event)
        if not handlers or handler not in handlers:
            msg = f"{handler!r} is not subscribed to {event!r}"
            raise ValueError(msg)
        handlers.remove(handler)
        if not handlers:
            del self._handlers[event]

    def publish(self, event: str, *payload: object) -> None:
        """Invoke every handler of *event* with *payload*, in order.

        Exceptions raised by a handler propagate to the caller and stop
        delivery to later handlers.

        """
        # Snapshot: a handler may subscribe or unsubscribe while we iterate.
        for handler in tuple(self._handlers.get(event, ())):
            handler(*payload)

    def clear(self) -> int:
        """Drop all subscriptions and return how many were removed."""
        count = sum(len(handlers) for handlers in self._handlers.values())
        self._handlers.clear()
        return count

    def handler_count(self, event: str | None = None) -> int:
        """Number of registrations for *event*, or across all events."""
        if event is not None:
            return len(self._handlers.get(event, ()))
        return sum(len(handlers) for handlers in self._handlers.values())
