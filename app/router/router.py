# app/router/router.py
from __future__ import annotations
from typing import List, Optional, Type

import structlog

log = structlog.get_logger()


class History:
    """In-memory navigation stack."""
    kind = "memory"

    def __init__(self, initial: str = "/"):
        self._entries: List[str] = [self.normalize(initial)]

    def normalize(self, url: str) -> str:
        return url if url.startswith("/") else "/" + url

    @property
    def location(self) -> str:
        return self._entries[-1]

    @property
    def entries(self) -> List[str]:
        return list(self._entries)

    def push(self, url: str) -> None:
        self._entries.append(self.normalize(url))

    def replace(self, url: str) -> None:
        self._entries[-1] = self.normalize(url)

    def go_back(self) -> str:
        if len(self._entries) > 1:
            self._entries.pop()
        return self.location


class HashHistory(History):
    kind = "hash"

    def normalize(self, url: str) -> str:
        path = url[1:] if url.startswith("#") else url
        return "#" + super().normalize(path)


class BrowserHistory(History):
    kind = "browser"


HISTORY_TYPES = {"hash": HashHistory, "browser": BrowserHistory}


class Router:
    """Optional navigation collaborator of a controller. Routing starts once init() binds a history."""
    def __init__(self, history_type: str = "hash"):
        self.history_type: Type[History] = _history_class(history_type)
        self.history: Optional[History] = None

    def init(self) -> None:
        self.history = self.history_type()
        log.debug("router.init", history=self.history.kind)

    def set_history_type(self, history_type: str) -> "Router":
        self.history_type = _history_class(history_type)
        return self

    def get_history(self) -> Optional[History]:
        return self.history

    def navigate(self, url: str) -> None:
        if self.history is None:
            raise RuntimeError("Router is not initialized")
        self.history.push(url)
        log.debug("router.navigate", location=self.history.location)

    def location(self, url: str) -> None:
        self.navigate(url)


def _history_class(history_type: str) -> Type[History]:
    try:
        return HISTORY_TYPES[history_type]
    except KeyError:
        raise ValueError(f"Unknown history type '{history_type}', expected one of {sorted(HISTORY_TYPES)}") from None
