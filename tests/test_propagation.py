# tests/test_propagation.py
# How to run:
#   From repo root: pytest -q
#
# What this covers:
#   - Only the convention handlers a module implements are forwarded
#   - Forwarders call the module's own method (module stays the receiver)
#   - Name collisions against the table, the controller, or convention-equal type names
#   - The table is untouched until commit()

import pytest

from app.controller.errors import MethodCollision
from app.controller.propagation import HandlerTable, propagate
from core.events.events import Phase


class Todos:
    def __init__(self):
        self.calls = []

    def throwAddTodo(self, text):
        return {"text": text}

    def reduceOnAddTodo(self, state, data):
        self.calls.append(self)
        return state + [data]

    # not callable: ignored
    handleAddTodo = "not a handler"


class Bare:
    pass


def test_forwards_only_implemented_handlers():
    table = HandlerTable()
    forwarders = propagate(table, Bare(), Todos(), ["ADD_TODO", "REMOVE_TODO"], "todos")
    assert [(f.event_type, f.phase, f.method_name) for f in forwarders] == [
        ("ADD_TODO", Phase.EMIT, "throwAddTodo"),
        ("ADD_TODO", Phase.APPLY, "reduceOnAddTodo"),
    ]
    assert all(f.owner == "todos" for f in forwarders)


def test_forwarder_keeps_module_as_receiver():
    module = Todos()
    table = HandlerTable()
    table.commit(propagate(table, Bare(), module, ["ADD_TODO"]))

    apply = table.get("ADD_TODO").apply
    assert apply([], {"text": "x"}) == [{"text": "x"}]
    assert module.calls == [module]
    assert apply.__name__ == "reduceOnAddTodo"
    assert table.owner_of("reduceOnAddTodo") == "Todos"


def test_collision_with_committed_method_leaves_table_alone():
    table = HandlerTable()
    table.commit(propagate(table, Bare(), Todos(), ["ADD_TODO"], "first"))
    before = table.method_names()

    with pytest.raises(MethodCollision) as exc:
        # "add_todo" converts to the same method names as "ADD_TODO"
        propagate(table, Bare(), Todos(), ["add_todo"], "second")
    assert exc.value.method_name == "throwAddTodo"
    assert exc.value.component == "second"
    assert table.method_names() == before


def test_collision_with_controller_method():
    class Ctrl:
        def reduceOnAddTodo(self, state, data):
            return state

    with pytest.raises(MethodCollision) as exc:
        propagate(HandlerTable(), Ctrl(), Todos(), ["ADD_TODO"])
    assert exc.value.method_name == "reduceOnAddTodo"
    assert exc.value.event_type == "ADD_TODO"


def test_empty_table_lookup():
    hs = HandlerTable().get("NOPE")
    assert hs.event_type == "NOPE"
    assert hs.emit is None and hs.side_effect is None and hs.apply is None
