from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

from core.store.middleware import Middleware


@dataclass(frozen=True)
class ControllerConfig:
    # raise the first composition error instead of continuing with whatever joined
    strict: bool = False

    # debug-log every emit and store dispatch
    debug: bool = False

    # appended after the thunk middleware
    middleware: Tuple[Middleware, ...] = ()
