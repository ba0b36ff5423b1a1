# app/controller/propagation.py
from __future__ import annotations
import functools
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence

from core.events.events import Handler, HandlerSet, Phase
from core.naming.case import method_name
from app.controller.errors import MethodCollision


@dataclass(frozen=True)
class Forwarder:
    """One module handler waiting to be committed into the table."""
    event_type: str
    phase: Phase
    method_name: str
    fn: Handler
    owner: str


class HandlerTable:
    """
    Handlers keyed by event type, plus an index of every convention method name
    already taken. Only commit() mutates it.
    """
    def __init__(self) -> None:
        self._sets: Dict[str, HandlerSet] = {}
        self._methods: Dict[str, str] = {}

    def get(self, event_type: str) -> HandlerSet:
        return self._sets.get(event_type) or HandlerSet(event_type)

    def has_method(self, name: str) -> bool:
        return name in self._methods

    def owner_of(self, name: str) -> Optional[str]:
        return self._methods.get(name)

    def method_names(self) -> List[str]:
        return list(self._methods)

    def commit(self, forwarders: Iterable[Forwarder]) -> None:
        for fw in forwarders:
            self._sets[fw.event_type] = self.get(fw.event_type).with_handler(fw.phase, fw.fn, fw.owner)
            self._methods[fw.method_name] = fw.owner


def forward_to(impl: Handler) -> Handler:
    """Closure calling the module's own bound method, so the module stays the receiver."""
    @functools.wraps(impl)
    def forward(*args: Any, **kwargs: Any) -> Any:
        return impl(*args, **kwargs)
    return forward


def propagate(
    table: HandlerTable,
    controller: Any,
    module: Any,
    event_types: Sequence[str],
    component: Optional[str] = None,
) -> List[Forwarder]:
    """
    Collect forwarders for every convention handler `module` implements for
    `event_types`. Stops at the first name already taken by the table, by the
    controller itself, or earlier in this same module. The table is left untouched.
    """
    owner = component or type(module).__name__
    staged: Dict[str, Forwarder] = {}
    for event_type in event_types:
        for phase in Phase:
            name = method_name(phase, event_type)
            impl = getattr(module, name, None)
            if not callable(impl):
                continue
            if name in staged or table.has_method(name) or callable(getattr(controller, name, None)):
                raise MethodCollision(name, event_type, owner)
            staged[name] = Forwarder(event_type, phase, name, forward_to(impl), owner)
    return list(staged.values())
