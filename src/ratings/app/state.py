from __future__ import annotations

"""Per-category view state in one process-wide container.

Lifecycle: created at startup with ``items=None`` for every category,
written once by fetch completion, sort mode changed by user interaction,
never torn down. Every slot transition happens under ``AppState.lock``.
"""

from concurrent.futures import Future
from dataclasses import dataclass
import threading

from ratings.data.schema.records import Item
from ratings.domain.sorting import SORT_MODES
from ratings.registry.model import HOME, Registry


@dataclass
class ViewState:
    sort_mode: str
    items: tuple[Item, ...] | None = None
    error: str = ""
    loading: bool = False
    future: Future | None = None

    @property
    def loaded(self) -> bool:
        return self.items is not None

    @property
    def requested(self) -> bool:
        return self.future is not None


class AppState:
    def __init__(self, registry: Registry):
        self.registry = registry
        self.lock = threading.RLock()
        self.visible = HOME
        self.views: dict[str, ViewState] = {
            c.key: ViewState(sort_mode=c.default_sort) for c in registry.categories
        }

    def view(self, key: str) -> ViewState:
        return self.views[key]

    def set_sort(self, key: str, mode: str) -> None:
        if mode not in SORT_MODES:
            raise ValueError(f"unknown sort mode {mode!r} (known: {list(SORT_MODES)})")
        with self.lock:
            self.views[key].sort_mode = mode

    def items(self, key: str) -> tuple[Item, ...] | None:
        with self.lock:
            return self.views[key].items
