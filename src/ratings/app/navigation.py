from __future__ import annotations

import logging

from ratings.app.loader import CategoryLoader
from ratings.app.state import AppState
from ratings.registry.model import HOME

logger = logging.getLogger(__name__)


def fragment_for(section: str) -> str:
    return "" if section == HOME else f"#{section}"


class Navigator:
    """Tracks the visible section and triggers the first load of a category.

    Sections are ``home`` plus the registry keys. The visible section is
    mirrored in the URL fragment (cleared on home).
    """

    def __init__(self, state: AppState, loader: CategoryLoader | None = None):
        self.state = state
        self.loader = loader
        self.sections = state.registry.sections

    def resolve(self, section: str | None) -> str:
        s = (section or "").strip()
        return s if s in self.sections else HOME

    def show(self, section: str | None) -> str:
        """Make ``section`` the only visible one and return the new fragment."""
        target = self.resolve(section)
        with self.state.lock:
            self.state.visible = target
        if target != HOME and self.loader is not None:
            self.loader.ensure_loaded(target)
        logger.debug(f"section -> {target}")
        return fragment_for(target)

    def handle_fragment(self, fragment: str | None) -> str:
        """Re-derive the visible section from a URL fragment (load/back/forward)."""
        section = self.resolve((fragment or "").lstrip("#"))
        self.show(section)
        return section

    def visibility(self) -> dict[str, bool]:
        with self.state.lock:
            visible = self.state.visible
        return {s: s == visible for s in self.sections}
