# tests/test_store.py
# How to run:
#   From repo root: pytest -q
#
# What this covers:
#   - Initial state seeding through the INIT event
#   - Synchronous dispatch: reducer, then listeners; unsubscribe
#   - Re-entrant dispatch follows call-stack order
#   - Middleware chaining order and the thunk middleware

import pytest

from core.events.events import Event, INIT_EVENT_TYPE
from core.store.middleware import apply_middleware, logging_middleware, thunk_middleware
from core.store.store import InvalidEventError, Store, create_store


def counter(state, event):
    if state is None:
        state = 0
    if event.type == "ADD":
        return state + event.data
    return state


def test_init_event_seeds_state():
    seen = []

    def reducer(state, event):
        seen.append(event.type)
        return "seeded" if state is None else state

    store = create_store(reducer)
    assert store.get_state() == "seeded"
    assert seen == [INIT_EVENT_TYPE]


def test_dispatch_runs_reducer_then_listeners():
    store = Store(counter)
    states = []
    unsubscribe = store.subscribe(lambda: states.append(store.get_state()))

    returned = store.dispatch(Event("ADD", 2))
    store.dispatch(Event("ADD", 3))
    unsubscribe()
    store.dispatch(Event("ADD", 10))

    assert returned == Event("ADD", 2)
    assert states == [2, 5]
    assert store.get_state() == 15
    unsubscribe()  # second call is harmless


def test_dispatch_rejects_events_without_type():
    store = Store(counter)
    with pytest.raises(InvalidEventError):
        store.dispatch({"data": 1})
    with pytest.raises(TypeError):
        store.subscribe("not callable")


def test_reentrant_dispatch_is_call_stack_ordered():
    store = Store(counter)
    order = []

    def listener():
        order.append(store.get_state())
        if store.get_state() == 1:
            store.dispatch(Event("ADD", 1))

    store.subscribe(listener)
    store.dispatch(Event("ADD", 1))
    assert order == [1, 2]
    assert store.get_state() == 2


def test_replace_reducer():
    store = Store(counter)
    store.dispatch(Event("ADD", 4))
    store.replace_reducer(lambda state, event: state * 10 if event.type == "ADD" else state)
    store.dispatch(Event("ADD", 0))
    assert store.get_state() == 40


def test_middleware_order_first_sees_first():
    trail = []

    def tag(name):
        def mw(api):
            def wrap(next_dispatch):
                def dispatch(event):
                    trail.append(name)
                    return next_dispatch(event)
                return dispatch
            return wrap
        return mw

    store = create_store(counter, apply_middleware(tag("outer"), tag("inner"), logging_middleware))
    store.dispatch(Event("ADD", 1))
    assert trail == ["outer", "inner"]
    assert store.get_state() == 1


def test_thunk_receives_dispatch_and_get_state():
    store = create_store(counter, apply_middleware(thunk_middleware))

    def add_twice(dispatch, get_state):
        dispatch(Event("ADD", 1))
        dispatch(Event("ADD", get_state()))
        return "done"

    assert store.dispatch(add_twice) == "done"
    assert store.get_state() == 2
