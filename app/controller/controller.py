# app/controller/controller.py
from __future__ import annotations
from collections.abc import Mapping, MutableMapping
from enum import Enum, auto
from typing import Any, Dict, Iterable, List, Optional, Tuple

import structlog

from core.events.events import Event
from core.store.middleware import apply_middleware, logging_middleware, thunk_middleware
from core.store.store import Store, create_store
from app.controller.component import ControllerComponent
from app.controller.config import ControllerConfig
from app.controller.errors import (
    CompositionError, ConfigurationError, EventTypeCollision, MissingRequiredEventType,
    UnknownEventTypeError,
)
from app.controller.pipeline import Pipeline, PipelineSynthesizer
from app.controller.propagation import HandlerTable, propagate
from app.controller.registry import EventTypeRegistry
from app.router.router import Router

log = structlog.get_logger()

_UNSET = object()


class Lifecycle(Enum):
    CONSTRUCTED = auto()
    PROPERTIES_INITIALIZED = auto()
    MODULES_JOINED = auto()
    STORE_INITIALIZED = auto()
    ROUTER_INITIALIZED = auto()
    METHODS_FINALIZED = auto()
    READY = auto()
    RUNNING = auto()


class Controller:
    """
    Composition root of an application.

    Subclasses must provide:
      - get_state_initial_data() -> initial state
      - render() -> called on every state change once run() is invoked
    and may provide:
      - get_own_event_types() / get_controller_components() / create_router()
      - throw<Name> / handle<Name> / reduceOn<Name> for any handled event type

    Construction joins every component (stopping at the first one that
    collides), creates the store around the root transition function,
    initializes the router and finally synthesizes one emit pipeline per event type.
    """
    def __init__(self, config: Optional[ControllerConfig] = None):
        if not callable(getattr(self, "get_state_initial_data", None)):
            raise ConfigurationError(
                f"{type(self).__name__}: you must override get_state_initial_data() in a child of Controller."
            )
        if not callable(getattr(self, "render", None)):
            raise ConfigurationError(
                f"{type(self).__name__}: you must implement render() in a child of Controller."
            )

        self.config = config or self.create_config()
        self.lifecycle = Lifecycle.CONSTRUCTED
        self.store: Optional[Store] = None
        self.router: Any = _UNSET
        self.router_routes: Any = _UNSET
        self._components: Any = _UNSET
        self._composition_errors: List[CompositionError] = []
        self._registry = EventTypeRegistry()
        self._table = HandlerTable()
        self._pipeline = PipelineSynthesizer(
            self, self._table, lambda: self._registry.types, debug=self.config.debug,
        )

        self.init_properties()
        self._advance(Lifecycle.PROPERTIES_INITIALIZED)

        self.init()

        self.after_init()
        self._advance(Lifecycle.READY)

    # Hooks ---------------------------------------------------------------
    def create_config(self) -> ControllerConfig:
        return ControllerConfig()

    def init_properties(self) -> None:
        """Runs before anything is joined; set up attributes components or handlers rely on."""

    def init(self) -> None:
        self._join_components()
        self._init_store()
        self._init_router()

    def after_init(self) -> None:
        self._init_methods()

    def get_own_event_types(self) -> List[str]:
        """Event types handled by the controller itself, declared ahead of every component."""
        return []

    def get_controller_components(self) -> Any:
        """
        Components to join, either a list or a mapping of key -> component:
            {"todos": TodosComponent(), "filters": FiltersComponent()}
        """
        return []

    def create_router(self) -> Optional[Router]:
        """Return a Router to enable routing; None leaves it disabled."""
        return None

    def create_router_routes(self) -> Any:
        return None

    def create_empty_state(self) -> Any:
        return {}

    # Accessors -----------------------------------------------------------
    def get_event_types(self) -> List[str]:
        return list(self._registry.types)

    @property
    def composition_errors(self) -> Tuple[CompositionError, ...]:
        return tuple(self._composition_errors)

    def get_components(self) -> Any:
        if self._components is _UNSET:
            self._components = self.get_controller_components()
        return self._components

    def get_controller_component(self, key: Any) -> Optional[ControllerComponent]:
        components = self.get_components()
        if isinstance(components, Mapping):
            return components.get(key)
        try:
            return components[key]
        except (IndexError, TypeError):
            return None

    def get_router(self) -> Optional[Router]:
        if self.router is _UNSET:
            self.router = self.create_router()
        return self.router

    def get_router_routes(self) -> Any:
        if self.router_routes is _UNSET:
            self.router_routes = self.create_router_routes()
        return self.router_routes

    def get_store(self) -> Optional[Store]:
        return self.store

    def get_state(self) -> Any:
        if self.store is None:
            raise RuntimeError("Store is not initialized")
        return self.store.get_state()

    def get_pipelines(self) -> Dict[str, Pipeline]:
        return self._pipeline.pipelines

    def describe(self) -> Dict[str, Dict[str, bool]]:
        return {event_type: pipeline.phases() for event_type, pipeline in self.get_pipelines().items()}

    # State helpers -------------------------------------------------------
    def clone_state(self, state: Any) -> Any:
        """
        Copy every non-callable field of `state` onto create_empty_state().
        `index` is copied last so it survives whatever the generic copy did with it.
        """
        cloned = self.create_empty_state()
        fields = state.items() if isinstance(state, Mapping) else vars(state).items()
        for key, value in fields:
            if callable(value):
                continue
            _assign(cloned, key, value)
        missing = object()
        index = state.get("index", missing) if isinstance(state, Mapping) else getattr(state, "index", missing)
        if index is not missing:
            _assign(cloned, "index", index)
        return cloned

    # Running -------------------------------------------------------------
    def emit(self, event_type: str, data: Any = None) -> Event:
        pipeline = self._pipeline.pipelines.get(event_type)
        if pipeline is None:
            raise UnknownEventTypeError(event_type)
        return pipeline.emit(data)

    def run(self) -> None:
        if self.lifecycle is Lifecycle.RUNNING:
            log.warning("controller.run.already_running", controller=type(self).__name__)
            return
        store = self.get_store()
        store.subscribe(self.render)
        self._advance(Lifecycle.RUNNING)
        log.info("controller.run", controller=type(self).__name__, event_types=len(self.get_event_types()))
        self.render()

    # Internals -----------------------------------------------------------
    def _join_components(self) -> None:
        own = list(self.get_own_event_types())
        completed = True
        try:
            self._registry = EventTypeRegistry(own)
        except EventTypeCollision as err:
            err.component = type(self).__name__
            self._report(err)
            self._registry = EventTypeRegistry(list(dict.fromkeys(own)))
            completed = False

        components = self.get_components() if completed else []
        items: Iterable = components.items() if isinstance(components, Mapping) else enumerate(components)

        for key, component in items:
            if not isinstance(component, ControllerComponent):
                log.warning("controller.join.skipped", key=key, type=type(component).__name__)
                continue
            try:
                self._join_controller_component(component)
            except CompositionError as err:
                self._report(err)
                completed = False
                break

        if completed:
            missing = self._registry.missing_required()
            if missing:
                self._report(MissingRequiredEventType(missing))

        self._advance(Lifecycle.MODULES_JOINED)
        if self.config.strict and self._composition_errors:
            raise self._composition_errors[0]

    def _join_controller_component(self, component: ControllerComponent) -> None:
        name = component.component_name()
        owned = list(component.get_event_types())
        required = list(component.get_required_event_types())

        # both checks run before anything is committed, so a failed join leaves no trace
        merged = self._registry.claim(owned, name)
        forwarders = propagate(self._table, self, component, owned, name)

        self._registry.commit(merged, required)
        self._table.commit(forwarders)
        component.set_controller(self)
        log.debug(
            "controller.join.ok",
            component=name,
            event_types=owned,
            handlers=[fw.method_name for fw in forwarders],
        )

    def _report(self, err: CompositionError) -> None:
        self._composition_errors.append(err)
        log.error(f"controller.join.{err.code}", component=err.component, error=str(err))

    def _init_store(self) -> None:
        middleware = [thunk_middleware, *self.config.middleware]
        if self.config.debug:
            middleware.append(logging_middleware)
        self._set_store(create_store(
            self._pipeline.build_root_reducer(),
            apply_middleware(*middleware),
            initial_state=self.get_state_initial_data(),
        ))
        self._advance(Lifecycle.STORE_INITIALIZED)

    def _set_store(self, store: Store) -> None:
        self.store = store

    def _init_router(self) -> None:
        router = self.get_router()
        if isinstance(router, Router):
            router.init()
        self._advance(Lifecycle.ROUTER_INITIALIZED)

    def _init_methods(self) -> None:
        self._pipeline.finalize()
        self._advance(Lifecycle.METHODS_FINALIZED)

    def _advance(self, step: Lifecycle) -> None:
        self.lifecycle = step
        log.debug("controller.lifecycle", controller=type(self).__name__, step=step.name)


def _assign(target: Any, key: str, value: Any) -> None:
    if isinstance(target, MutableMapping):
        target[key] = value
    else:
        setattr(target, key, value)
