"""Observer registry shared by gesture sources, views and controllers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Union

Handler = Callable[..., Any]


@dataclass(frozen=True)
class _Listener:
    name: str
    handler: Handler
    context: Any = None


class EventHub:
    """Named-event publish/subscribe helper.

    Listeners are kept in registration order. ``context`` is an opaque tag used
    to remove every listener registered on behalf of one owner in a single
    ``off(owner)`` call.
    """

    def __init__(self) -> None:
        self._listeners: list[_Listener] = []

    def on(
        self,
        event: Union[str, Mapping[str, Handler]],
        handler: Optional[Handler] = None,
        context: Any = None,
    ) -> None:
        if isinstance(event, Mapping):
            # on({"drag": fn}, context) form
            if context is None and handler is not None and not callable(handler):
                context = handler
            for name, mapped in event.items():
                self._listeners.append(_Listener(name, mapped, context))
            return
        if handler is None:
            raise ValueError(f"No handler given for event {event!r}")
        self._listeners.append(_Listener(event, handler, context))

    def off(self, target: Any = None, context: Any = None) -> None:
        """Remove listeners.

        ``target`` may be ``None`` (everything), an event name, a mapping of
        event names to handlers, a handler, or a context object. ``context``
        narrows the removal to listeners registered with that context.
        """
        if target is None and context is None:
            self._listeners.clear()
            return
        self._listeners = [
            listener
            for listener in self._listeners
            if not self._matches(listener, target, context)
        ]

    @staticmethod
    def _matches(listener: _Listener, target: Any, context: Any) -> bool:
        if context is not None and listener.context is not context:
            return False
        if target is None:
            return True
        if isinstance(target, str):
            return listener.name == target
        if isinstance(target, Mapping):
            handler = target.get(listener.name)
            return handler is not None and listener.handler == handler
        if listener.handler == target:
            return True
        return listener.context is target

    def fire(self, event: str, *args: Any) -> None:
        for listener in [item for item in self._listeners if item.name == event]:
            listener.handler(*args)

    def has_listener(self, event: str) -> bool:
        return any(listener.name == event for listener in self._listeners)

    def listener_count(self, event: str) -> int:
        return sum(1 for listener in self._listeners if listener.name == event)
