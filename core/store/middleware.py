# core/store/middleware.py
from __future__ import annotations
from typing import Any, Callable

import structlog

from core.store.store import Store

log = structlog.get_logger()

Dispatch = Callable[[Any], Any]
Middleware = Callable[["StoreAPI"], Callable[[Dispatch], Dispatch]]


class StoreAPI:
    """What a middleware sees of the store: dispatch through the whole chain and read state."""
    def __init__(self, dispatch: Dispatch, get_state: Callable[[], Any]):
        self.dispatch = dispatch
        self.get_state = get_state


def apply_middleware(*middlewares: Middleware):
    """
    Store enhancer. Middlewares wrap dispatch left to right, so the first one
    sees an event before the others:  mw(api)(next_dispatch)(event).
    """
    def enhancer(make_store):
        def make(reducer, initial_state=None) -> Store:
            store = make_store(reducer, initial_state=initial_state)
            base_dispatch = store.dispatch

            def dispatch(event):
                return chained(event)

            api = StoreAPI(dispatch=dispatch, get_state=store.get_state)
            chained = base_dispatch
            for mw in reversed(middlewares):
                chained = mw(api)(chained)
            store.dispatch = dispatch
            return store
        return make
    return enhancer


def thunk_middleware(api: StoreAPI):
    """Lets callers dispatch fn(dispatch, get_state) for deferred or multi-step emits."""
    def wrap(next_dispatch: Dispatch) -> Dispatch:
        def dispatch(event):
            if callable(event):
                return event(api.dispatch, api.get_state)
            return next_dispatch(event)
        return dispatch
    return wrap


def logging_middleware(api: StoreAPI):
    def wrap(next_dispatch: Dispatch) -> Dispatch:
        def dispatch(event):
            log.debug("store.dispatch", type=getattr(event, "type", None))
            return next_dispatch(event)
        return dispatch
    return wrap
