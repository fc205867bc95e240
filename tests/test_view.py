from __future__ import annotations

import requests

from ratings.app.loader import CategoryLoader
from ratings.app.state import AppState
from ratings.app.view import build_view, render_category
from ratings.domain.filters import FilterCriteria
from ratings.ui.render import NO_RESULTS_HTML, Page

ROWS = [
    {"Title": "Heat", "Score": "8.5", "Year": "1995", "Director": "Michael Mann", "Score Date": "2024-02-01"},
    {"Title": "Alien", "Score": "9", "Year": "1979", "Director": "Ridley Scott", "Score Date": "2024-03-01"},
    {"Title": "Collateral", "Score": "7", "Year": "2004", "Director": "Michael Mann"},
]


def _loaded_state(registry, fetcher=None) -> AppState:
    state = AppState(registry)
    with CategoryLoader(state, fetcher=fetcher or (lambda urls: ROWS)) as loader:
        loader.wait("movies", timeout=5)
    return state


def test_view_before_load_shows_loading(registry) -> None:
    view = build_view(AppState(registry), "movies")
    assert view.status == "loading"
    assert "Loading Movies" in view.html


def test_default_sort_and_years(registry) -> None:
    state = _loaded_state(registry)
    view = build_view(state, "movies")
    assert view.status == "ready"
    assert [i.title for i in view.items] == ["Collateral", "Heat", "Alien"]
    assert view.years == ["2004", "1995", "1979"]
    assert view.count_text == "3 items"


def test_sort_change_rerenders_without_refetch(registry) -> None:
    calls = []

    def fetcher(urls):
        calls.append(urls)
        return ROWS

    state = _loaded_state(registry, fetcher)
    state.set_sort("movies", "score")
    assert [i.title for i in build_view(state, "movies").items] == ["Alien", "Heat", "Collateral"]
    state.set_sort("movies", "date")
    assert [i.title for i in build_view(state, "movies").items] == ["Alien", "Heat", "Collateral"]
    assert len(calls) == 1


def test_filters_and_mount(registry) -> None:
    state = _loaded_state(registry)
    page = Page([c.mount_id for c in registry.categories])

    view = render_category(page, state, "movies", FilterCriteria(search="mann", min_score="8"))
    assert [i.title for i in view.items] == ["Heat"]
    assert "Heat (1995)" in page.content("moviesContainer")
    assert view.count_text == "1 item"

    view = render_category(page, state, "movies", FilterCriteria(year="1900"))
    assert view.items == []
    assert page.content("moviesContainer") == NO_RESULTS_HTML


def test_failed_category_shows_error_block(registry) -> None:
    def fetcher(urls):
        raise requests.ConnectionError("offline")

    state = _loaded_state(registry, fetcher)
    page = Page(["moviesContainer"])
    view = render_category(page, state, "movies")
    assert view.status == "error"
    assert "Could not load Movies" in page.content("moviesContainer")


def test_unlinked_category_notice(registry) -> None:
    state = AppState(registry)
    with CategoryLoader(state, fetcher=lambda urls: []) as loader:
        loader.wait("mice", timeout=5)
    view = build_view(state, "mice")
    assert view.status == "unlinked"
    assert "not linked yet" in view.html
