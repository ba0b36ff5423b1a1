# app/controller/errors.py
from __future__ import annotations
from typing import Iterable, Optional


class ControllerError(Exception):
    """Base for everything the controller raises or reports."""


class ConfigurationError(ControllerError, TypeError):
    """The application left out something the controller cannot run without."""


class CompositionError(ControllerError):
    """A component module could not be joined. Reported, not raised, unless the controller is strict."""
    code = "composition_error"

    def __init__(self, message: str, component: Optional[str] = None):
        super().__init__(message)
        self.component = component


class EventTypeCollision(CompositionError):
    code = "event_type_collision"

    def __init__(self, overlap: Iterable[str], declared: Iterable[str], component: Optional[str] = None):
        self.overlap = tuple(overlap)
        self.declared = tuple(declared)
        super().__init__(
            f"{list(self.overlap)} part of event types {list(self.declared)} intersects with existing event types",
            component,
        )


class MethodCollision(CompositionError):
    code = "method_collision"

    def __init__(self, method_name: str, event_type: str, component: Optional[str] = None):
        self.method_name = method_name
        self.event_type = event_type
        super().__init__(f'propagated method "{method_name}" has already been initialized', component)


class MissingRequiredEventType(CompositionError):
    code = "missing_required"

    def __init__(self, missing: Iterable[str]):
        self.missing = tuple(missing)
        super().__init__(f"required event types have not been initialized: {list(self.missing)}")


class UnknownEventTypeError(ControllerError, KeyError):
    def __init__(self, event_type: str):
        super().__init__(event_type)
        self.event_type = event_type

    def __str__(self) -> str:
        return f"Event type {self.event_type!r} is not handled by this controller"
