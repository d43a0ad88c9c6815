"""Listener registry the parser dispatches events through."""

from collections import defaultdict
from typing import Callable, Dict, List


class EventTarget:
    """Keeps an ordered list of listeners per event type."""

    def __init__(self):
        self._listeners: Dict[str, List[Callable]] = defaultdict(list)

    def add_listener(self, event_type: str, listener: Callable) -> None:
        """Subscribe listener to events of event_type.

        Listeners run in the order they were added.
        """
        self._listeners[event_type].append(listener)

    def remove_listener(self, event_type: str, listener: Callable) -> None:
        listeners = self._listeners.get(event_type)
        if listeners and listener in listeners:
            listeners.remove(listener)

    def mark(self) -> Dict[str, int]:
        """Return the number of listeners currently held per event type."""
        return {event_type: len(listeners) for event_type, listeners in self._listeners.items()}

    def rollback(self, mark: Dict[str, int]) -> None:
        """Drop every listener added since mark was taken."""
        for event_type, listeners in self._listeners.items():
            del listeners[mark.get(event_type, 0):]

    def has_listeners(self, event_type: str) -> bool:
        return bool(self._listeners.get(event_type))

    def fire(self, event) -> None:
        """Call every listener of event.type with event.

        Exceptions raised by listeners propagate to the caller of parse().
        """
        for listener in list(self._listeners.get(event.type, ())):
            listener(event)


__all__ = ['EventTarget']
