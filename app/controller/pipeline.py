# app/controller/pipeline.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence

import structlog

from core.events.events import Event, Handler, Phase
from core.naming.case import method_name
from app.controller.propagation import HandlerTable

log = structlog.get_logger()

RootReducer = Callable[[Any, Any], Any]


def _identity(data: Any) -> Any:
    return data


@dataclass(frozen=True)
class Pipeline:
    """Finalized emit -> dispatch -> side-effect chain for one event type."""
    event_type: str
    emit: Handler
    side_effect: Optional[Handler]
    apply: Optional[Handler]
    explicit_emit: bool

    def phases(self) -> Dict[str, bool]:
        return {
            Phase.EMIT.prefix: self.explicit_emit,
            Phase.SIDE_EFFECT.prefix: self.side_effect is not None,
            Phase.APPLY.prefix: self.apply is not None,
        }


class PipelineSynthesizer:
    """
    Turns the joined handler table into one pipeline per event type and builds
    the root transition function the store reduces with.

    Handlers are resolved from the table first (forwarded from modules), then
    from the controller itself (handwritten convention methods).
    """
    def __init__(self, controller: Any, table: HandlerTable, event_types: Callable[[], Sequence[str]], debug: bool = False):
        self.controller = controller
        self.table = table
        self._event_types = event_types
        self.debug = debug
        self._pipelines: Dict[str, Pipeline] = {}

    @property
    def pipelines(self) -> Dict[str, Pipeline]:
        return dict(self._pipelines)

    def resolve(self, phase: Phase, event_type: str) -> Optional[Handler]:
        pipeline = self._pipelines.get(event_type)
        if pipeline is not None:
            return pipeline.emit if phase is Phase.EMIT else (
                pipeline.side_effect if phase is Phase.SIDE_EFFECT else pipeline.apply
            )
        handler = self.table.get(event_type).get(phase)
        if handler is not None:
            return handler
        own = getattr(self.controller, method_name(phase, event_type), None)
        return own if callable(own) else None

    def finalize(self) -> Dict[str, Pipeline]:
        """Build every pipeline and install the convention-named methods on the controller."""
        built: Dict[str, Pipeline] = {}
        # resolve everything before installing: types sharing a convention name
        # must not pick up each other's synthesized emit
        for event_type in self._event_types():
            if event_type in self._pipelines or event_type in built:
                continue
            producer = self.resolve(Phase.EMIT, event_type)
            built[event_type] = Pipeline(
                event_type=event_type,
                emit=self._wrap_emit(event_type, producer or _identity),
                side_effect=self.resolve(Phase.SIDE_EFFECT, event_type),
                apply=self.resolve(Phase.APPLY, event_type),
                explicit_emit=producer is not None,
            )
        self._pipelines.update(built)
        for pipeline in built.values():
            self._install(pipeline)
        return self.pipelines

    def _install(self, pipeline: Pipeline) -> None:
        setattr(self.controller, method_name(Phase.EMIT, pipeline.event_type), pipeline.emit)
        if pipeline.side_effect is not None:
            setattr(self.controller, method_name(Phase.SIDE_EFFECT, pipeline.event_type), pipeline.side_effect)
        if pipeline.apply is not None:
            setattr(self.controller, method_name(Phase.APPLY, pipeline.event_type), pipeline.apply)

    def _wrap_emit(self, event_type: str, producer: Handler) -> Handler:
        synthesizer = self

        def emit(data: Any = None) -> Event:
            event = Event(event_type, producer(data))
            if synthesizer.debug:
                log.debug("controller.emit", type=event_type)
            synthesizer.controller.get_store().dispatch(event)
            side_effect = synthesizer.resolve(Phase.SIDE_EFFECT, event_type)
            if side_effect is not None:
                side_effect(event.data)
            return event

        emit.__name__ = method_name(Phase.EMIT, event_type)
        return emit

    def build_root_reducer(self) -> RootReducer:
        """Root transition function; the store is seeded with the initial state, so `state` is never replaced here."""
        synthesizer = self

        def root_reducer(state: Any, event: Any) -> Any:
            event_type = getattr(event, "type", None)
            # first match in declaration order wins
            for declared in synthesizer._event_types():
                if declared != event_type:
                    continue
                apply = synthesizer.resolve(Phase.APPLY, declared)
                if apply is None:
                    return state
                # apply-to-state only ever sees (state, data), never the event type
                return apply(state, event.data)
            return state

        return root_reducer
