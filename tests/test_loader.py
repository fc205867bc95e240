from __future__ import annotations

import threading

import pytest
import requests

from ratings.app.loader import CategoryLoader
from ratings.app.state import AppState
from ratings.data.io.fetch import parse_csv_rows


def test_duplicate_navigation_fetches_once(registry) -> None:
    gate = threading.Event()
    calls = []

    def fetcher(urls):
        calls.append(list(urls))
        gate.wait(5)
        return [{"Title": "Heat", "Score": "8"}]

    state = AppState(registry)
    with CategoryLoader(state, fetcher=fetcher) as loader:
        f1 = loader.ensure_loaded("movies")
        f2 = loader.ensure_loaded("movies")
        assert f1 is f2
        assert state.view("movies").loading
        gate.set()
        items = f1.result(timeout=5)
        f3 = loader.ensure_loaded("movies")

    assert f3 is f1
    assert len(calls) == 1
    assert [i.title for i in items] == ["Heat"]
    assert state.items("movies") == items
    assert not state.view("movies").loading


def test_games_merge_both_sheets(registry) -> None:
    pages = {
        registry.source_urls("games")[0]: [{"Title": "Celeste", "Score": "9"}],
        registry.source_urls("games")[1]: [{"Title": "Factorio", "Score": "10"}, {"Title": "", "Score": "1"}],
    }

    def fetcher(urls):
        rows = []
        for u in urls:
            rows.extend(pages[u])
        return rows

    state = AppState(registry)
    with CategoryLoader(state, fetcher=fetcher) as loader:
        items = loader.wait("games", timeout=5)
    assert [i.title for i in items] == ["Celeste", "Factorio"]


def test_failure_is_isolated_and_final(registry) -> None:
    calls = []

    def fetcher(urls):
        calls.append(list(urls))
        if any("gid=1&" in u for u in urls):
            raise requests.ConnectionError("offline")
        return [{"Title": "Celeste", "Score": "9"}]

    state = AppState(registry)
    with CategoryLoader(state, fetcher=fetcher) as loader:
        assert loader.wait("movies", timeout=5) == ()
        assert loader.wait("games", timeout=5)[0].title == "Celeste"
        # no retry after a failed load
        loader.wait("movies", timeout=5)

    assert state.view("movies").error == "offline"
    assert state.view("movies").items == ()
    assert state.view("games").error == ""
    assert len(calls) == 2


def test_unlinked_category_never_fetches(registry) -> None:
    def fetcher(urls):
        raise AssertionError("must not fetch")

    state = AppState(registry)
    with CategoryLoader(state, fetcher=fetcher) as loader:
        assert loader.wait("mice", timeout=5) == ()
    assert state.view("mice").loaded


def test_row_with_extra_fields_keeps_category(registry) -> None:
    state = AppState(registry)
    with CategoryLoader(state, fetcher=lambda urls: parse_csv_rows("Title,Score\nHeat,8\nAlien,9,oops\n")) as loader:
        items = loader.wait("movies", timeout=5)
    assert [i.title for i in items] == ["Heat", "Alien"]
    assert [i.score for i in items] == [8.0, 9.0]
    assert state.view("movies").error == ""


def test_closed_loader_leaves_slot_untouched(registry) -> None:
    state = AppState(registry)
    loader = CategoryLoader(state, fetcher=lambda urls: [])
    loader.close()
    with pytest.raises(RuntimeError):
        loader.ensure_loaded("movies")
    vs = state.view("movies")
    assert not vs.loading
    assert vs.future is None
    assert not vs.requested
