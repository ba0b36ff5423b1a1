# core/events/events.py
from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, Optional

# Dispatched by the store on creation so the root transition function seeds the initial state.
INIT_EVENT_TYPE = "@@statectl/INIT"

Handler = Callable[..., Any]


class Phase(Enum):
    """The three cooperating handler slots of one event type."""
    EMIT = "throw"
    SIDE_EFFECT = "handle"
    APPLY = "reduceOn"

    @property
    def prefix(self) -> str:
        return self.value


@dataclass(frozen=True)
class Event:
    """A dispatched state transition. Frozen: `type` survives every handoff."""
    type: str
    data: Any = None


@dataclass(frozen=True)
class HandlerSet:
    """Handlers registered for a single event type, one optional callable per phase."""
    event_type: str
    emit: Optional[Handler] = None
    side_effect: Optional[Handler] = None
    apply: Optional[Handler] = None
    owners: Dict[Phase, str] = field(default_factory=dict)

    def get(self, phase: Phase) -> Optional[Handler]:
        if phase is Phase.EMIT:
            return self.emit
        if phase is Phase.SIDE_EFFECT:
            return self.side_effect
        return self.apply

    def with_handler(self, phase: Phase, handler: Handler, owner: str) -> "HandlerSet":
        owners = dict(self.owners)
        owners[phase] = owner
        if phase is Phase.EMIT:
            return replace(self, emit=handler, owners=owners)
        if phase is Phase.SIDE_EFFECT:
            return replace(self, side_effect=handler, owners=owners)
        return replace(self, apply=handler, owners=owners)
