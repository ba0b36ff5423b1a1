# core/store/store.py
from __future__ import annotations
from typing import Any, Callable, List, Optional

from core.events.events import Event, INIT_EVENT_TYPE

Reducer = Callable[[Any, Any], Any]
Listener = Callable[[], Any]
Enhancer = Callable[[Callable[..., "Store"]], Callable[..., "Store"]]


class InvalidEventError(TypeError):
    """Raised when something without a `type` reaches the reducer."""


class Store:
    """
    Single-threaded state container:
      - dispatch(event) runs the reducer, then notifies subscribers synchronously
      - re-entrant dispatch from a reducer or listener follows call-stack order
    """
    def __init__(self, reducer: Reducer, initial_state: Any = None):
        self._reducer = reducer
        self._state = initial_state
        self._listeners: List[Listener] = []
        self.dispatch(Event(INIT_EVENT_TYPE))

    def get_state(self) -> Any:
        return self._state

    def dispatch(self, event: Any) -> Any:
        if getattr(event, "type", None) is None:
            raise InvalidEventError(f"Events must carry a type, got {event!r}")
        self._state = self._reducer(self._state, event)
        # snapshot: listeners added or removed during notification apply from the next dispatch
        for listener in list(self._listeners):
            listener()
        return event

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        if not callable(listener):
            raise TypeError("Expected the listener to be callable")
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def replace_reducer(self, reducer: Reducer) -> None:
        self._reducer = reducer
        self.dispatch(Event(INIT_EVENT_TYPE))


def create_store(reducer: Reducer, enhancer: Optional[Enhancer] = None, initial_state: Any = None) -> Store:
    if enhancer is not None:
        return enhancer(create_store)(reducer, initial_state=initial_state)
    return Store(reducer, initial_state=initial_state)
