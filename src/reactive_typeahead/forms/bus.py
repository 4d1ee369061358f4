"""Synchronous event bus owned by every control and focus node.

Handlers run inline, in subscription order, while the control is being
mutated. They must be plain functions: a coroutine handler would only be
scheduled, and the widget would render a stale value in between.
"""

import inspect
from typing import Callable, Type, TypeVar

from reactive_typeahead.logger import get_logger

from .events import Event

logger = get_logger("forms.bus")

E = TypeVar("E", bound=Event)

Handler = Callable[[E], None]


class EventBus:
    """Per-object publish/subscribe channel keyed by event type.

    Example:
        ```python
        control.events.subscribe(ValueChanged, lambda event: print(event.value))
        control.value = 42  # prints 42
        ```

    Not thread-safe; controls are only touched from the UI event loop.
    """

    def __init__(self) -> None:
        self._handlers: dict[Type[Event], list[Callable[[Event], None]]] = {}

    def subscribe(self, event_type: Type[E], handler: Handler[E]) -> None:
        """
        Call ``handler`` for every published ``event_type``.

        Subscribing the same handler twice has no effect.

        Raises:
            TypeError: If ``handler`` is a coroutine function
        """
        if inspect.iscoroutinefunction(handler):
            name = getattr(handler, "__qualname__", repr(handler))
            raise TypeError(f"{event_type.__name__} handler {name} must be synchronous")

        handlers = self._handlers.setdefault(event_type, [])
        if handler in handlers:
            return
        handlers.append(handler)  # type: ignore[arg-type]
        logger.trace(f"{event_type.__name__}: {len(handlers)} subscriber(s)")

    def unsubscribe(self, event_type: Type[E], handler: Handler[E]) -> None:
        """Remove ``handler``; unknown handlers are ignored."""
        handlers = self._handlers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)  # type: ignore[arg-type]
            logger.trace(f"{event_type.__name__}: {len(handlers)} subscriber(s)")

    def publish(self, event: Event) -> None:
        """
        Deliver ``event`` to the handlers of its exact type.

        A failing handler is logged and skipped. Handlers may unsubscribe
        while the event is being delivered.
        """
        event_type = type(event)
        for handler in tuple(self._handlers.get(event_type, ())):
            try:
                handler(event)
            except Exception:
                logger.exception(f"{event_type.__name__} handler {getattr(handler, '__qualname__', handler)} failed")

    def clear(self) -> None:
        self._handlers.clear()

    def has_subscribers(self, event_type: Type[Event]) -> bool:
        return bool(self._handlers.get(event_type))

    def subscriber_count(self, event_type: Type[Event]) -> int:
        return len(self._handlers.get(event_type, ()))
