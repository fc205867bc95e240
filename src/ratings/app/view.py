from __future__ import annotations

"""Compose one category view: filter -> sort -> render -> mount.

Re-run on every filter/sort change; never refetches.
"""

from dataclasses import dataclass, field

from ratings.app.state import AppState
from ratings.data.schema.records import Item
from ratings.domain.filters import FilterCriteria, filter_items, year_options
from ratings.domain.sorting import sort_items
from ratings.ui.render import (
    Page,
    render_count,
    render_items,
    render_load_error,
    render_loading,
    render_not_linked,
)


@dataclass(frozen=True)
class CategoryView:
    key: str
    status: str  # loading | error | unlinked | ready
    items: list[Item] = field(default_factory=list)
    years: list[str] = field(default_factory=list)
    count_text: str = ""
    html: str = ""


def compose_items(items: tuple[Item, ...], criteria: FilterCriteria, sort_mode: str, search_fields) -> list[Item]:
    return sort_items(filter_items(items, criteria, search_fields), sort_mode)


def build_view(state: AppState, key: str, criteria: FilterCriteria | None = None) -> CategoryView:
    descriptor = state.registry[key]
    criteria = criteria or FilterCriteria()
    with state.lock:
        vs = state.view(key)
        items, error, sort_mode = vs.items, vs.error, vs.sort_mode

    if error:
        return CategoryView(key, "error", html=render_load_error(descriptor.label))
    if items is None:
        return CategoryView(key, "loading", html=render_loading(descriptor.label))
    if not descriptor.linked:
        return CategoryView(key, "unlinked", html=render_not_linked(descriptor.label))

    shown = compose_items(items, criteria, sort_mode, descriptor.search_fields)
    return CategoryView(
        key,
        "ready",
        items=shown,
        years=year_options(items),
        count_text=render_count(len(shown)),
        html=render_items(shown),
    )


def render_category(page: Page, state: AppState, key: str, criteria: FilterCriteria | None = None) -> CategoryView:
    view = build_view(state, key, criteria)
    page.mount(state.registry[key].mount_id, view.html)
    return view
