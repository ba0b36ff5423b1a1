# core/naming/case.py
from __future__ import annotations

from core.events.events import Phase


def to_pascal(identifier: str) -> str:
    """SOME_ACTION_NAME -> SomeActionName. Empty segments contribute nothing."""
    parts = identifier.lower().split("_")
    return "".join(part[:1].upper() + part[1:] for part in parts)


def method_name(phase: Phase, event_type: str) -> str:
    """Convention name of the handler for one (phase, event type) pair, e.g. reduceOnSomeActionName."""
    return phase.prefix + to_pascal(event_type)


def method_names(event_type: str) -> dict[Phase, str]:
    return {phase: method_name(phase, event_type) for phase in Phase}
