# app/demo/counter.py
from __future__ import annotations
import sys
from typing import Any, Dict, List, Optional, TextIO

from app.controller.component import ControllerComponent
from app.controller.config import ControllerConfig
from app.controller.controller import Controller
from app.router.router import Router


class HistoryComponent(ControllerComponent):
    """Keeps the list of every delta applied to the counter."""
    name = "history"

    def get_event_types(self) -> List[str]:
        return ["RECORD_DELTA", "CLEAR_HISTORY"]

    def get_required_event_types(self) -> List[str]:
        return ["INCREMENT", "DECREMENT"]

    def reduceOnRecordDelta(self, state: Dict[str, Any], delta: int) -> Dict[str, Any]:
        cloned = self.clone_state(state)
        cloned["history"] = [*state["history"], delta]
        return cloned

    def reduceOnClearHistory(self, state: Dict[str, Any], _data: Any) -> Dict[str, Any]:
        cloned = self.clone_state(state)
        cloned["history"] = []
        return cloned


class CounterApp(Controller):
    def __init__(self, out: Optional[TextIO] = None, config: Optional[ControllerConfig] = None):
        self.out = out or sys.stdout
        super().__init__(config=config)

    def get_own_event_types(self) -> List[str]:
        return ["INCREMENT", "DECREMENT", "RESET"]

    def get_controller_components(self):
        return {"history": HistoryComponent()}

    def create_router(self) -> Router:
        return Router("hash")

    def get_state_initial_data(self) -> Dict[str, Any]:
        return {"count": 0, "history": []}

    def render(self) -> None:
        state = self.get_state()
        self.out.write(f"count={state['count']} history={state['history']} at {self.get_router().get_history().location}\n")

    # INCREMENT / DECREMENT
    def throwIncrement(self, step: Optional[int]) -> int:
        return 1 if step is None else step

    def reduceOnIncrement(self, state: Dict[str, Any], step: int) -> Dict[str, Any]:
        cloned = self.clone_state(state)
        cloned["count"] = state["count"] + step
        return cloned

    def handleIncrement(self, step: int) -> None:
        self.throwRecordDelta(step)

    def throwDecrement(self, step: Optional[int]) -> int:
        return 1 if step is None else step

    def reduceOnDecrement(self, state: Dict[str, Any], step: int) -> Dict[str, Any]:
        cloned = self.clone_state(state)
        cloned["count"] = state["count"] - step
        return cloned

    def handleDecrement(self, step: int) -> None:
        self.throwRecordDelta(-step)

    # RESET
    def reduceOnReset(self, state: Dict[str, Any], _data: Any) -> Dict[str, Any]:
        cloned = self.clone_state(state)
        cloned["count"] = 0
        return cloned

    def handleReset(self, _data: Any) -> None:
        self.throwClearHistory()
        self.get_router().navigate("/")
