# app/controller/registry.py
from __future__ import annotations
from typing import Iterable, List, Optional, Sequence, Tuple

from app.controller.errors import EventTypeCollision


def claim(existing: Sequence[str], new: Sequence[str], component: Optional[str] = None) -> List[str]:
    """
    Merge a module's owned event types into the declared list.
    Existing types keep their order, new ones are appended as the module declared them.
    Raises EventTypeCollision listing every type that would be declared twice.
    """
    taken = set(existing)
    overlap: List[str] = []
    for event_type in new:
        if event_type in taken and event_type not in overlap:
            overlap.append(event_type)
        taken.add(event_type)
    if overlap:
        raise EventTypeCollision(overlap, new, component)
    return list(existing) + list(new)


def missing_required(required: Iterable[str], declared: Iterable[str]) -> List[str]:
    """Required types (de-duplicated, first-seen order) that nothing declared. Empty means satisfied."""
    declared_set = set(declared)
    return [t for t in _unique(required) if t not in declared_set]


def _unique(items: Iterable[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            out.append(item)
    return out


class EventTypeRegistry:
    """Ordered, duplicate-free list of the event types a controller handles."""
    def __init__(self, own: Sequence[str] = ()):
        self._types: List[str] = claim([], own, component=None)
        self._required: List[str] = []

    @property
    def types(self) -> Tuple[str, ...]:
        return tuple(self._types)

    def __contains__(self, event_type: object) -> bool:
        return event_type in self._types

    def claim(self, new: Sequence[str], component: Optional[str] = None) -> List[str]:
        """Candidate list after joining `new`; nothing changes until commit()."""
        return claim(self._types, new, component)

    def commit(self, merged: Sequence[str], required: Iterable[str] = ()) -> None:
        self._types = list(merged)
        self._required.extend(required)

    def missing_required(self) -> List[str]:
        return missing_required(self._required, self._types)
