# app/controller/component.py
from __future__ import annotations
import weakref
from typing import TYPE_CHECKING, Any, List, Optional

if TYPE_CHECKING:
    from app.controller.controller import Controller


class ControllerComponent:
    """
    Independently authored slice of a controller.
      - get_event_types(): event types this component owns
      - get_required_event_types(): types it relies on someone else handling
      - throw<Name> / handle<Name> / reduceOn<Name>: optional handlers per owned type
    Handlers run with the component as receiver; the controller is reachable through get_controller().
    """
    name: Optional[str] = None

    def __init__(self) -> None:
        self._controller_ref: Optional[weakref.ReferenceType] = None
        self.init()

    def init(self) -> None:
        pass

    def component_name(self) -> str:
        return self.name or type(self).__name__

    def set_controller(self, controller: "Controller") -> "ControllerComponent":
        self._controller_ref = weakref.ref(controller)
        return self

    def get_controller(self) -> Optional["Controller"]:
        if self._controller_ref is None:
            return None
        return self._controller_ref()

    def get_event_types(self) -> List[str]:
        return []

    def get_required_event_types(self) -> List[str]:
        return []

    # Shortcuts into the controller --------------------------------------
    def _require_controller(self) -> "Controller":
        controller = self.get_controller()
        if controller is None:
            raise RuntimeError(f"Component '{self.component_name()}' is not joined to a controller")
        return controller

    def get_store(self):
        return self._require_controller().get_store()

    def get_state(self) -> Any:
        return self._require_controller().get_state()

    def clone_state(self, state: Any) -> Any:
        return self._require_controller().clone_state(state)

    def get_router(self):
        return self._require_controller().get_router()
