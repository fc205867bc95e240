from __future__ import annotations

from ratings.app.loader import CategoryLoader
from ratings.app.navigation import Navigator, fragment_for
from ratings.app.state import AppState


def _navigator(registry, calls):
    def fetcher(urls):
        calls.append(list(urls))
        return [{"Title": "Heat", "Score": "8"}]

    state = AppState(registry)
    loader = CategoryLoader(state, fetcher=fetcher)
    return state, loader, Navigator(state, loader)


def test_show_category_sets_fragment_and_loads_once(registry) -> None:
    calls = []
    state, loader, nav = _navigator(registry, calls)
    with loader:
        assert nav.show("movies") == "#movies"
        assert nav.visibility() == {"home": False, "movies": True, "games": False, "mice": False}
        loader.wait("movies", timeout=5)
        nav.show("home")
        nav.show("movies")
    assert len(calls) == 1
    assert state.visible == "movies"


def test_home_clears_fragment(registry) -> None:
    state, loader, nav = _navigator(registry, [])
    with loader:
        assert nav.show("home") == ""
    assert fragment_for("home") == ""
    assert state.visible == "home"


def test_unknown_or_empty_fragment_goes_home(registry) -> None:
    calls = []
    state, loader, nav = _navigator(registry, calls)
    with loader:
        assert nav.handle_fragment("#books") == "home"
        assert nav.handle_fragment("") == "home"
        assert nav.handle_fragment(None) == "home"
        assert nav.handle_fragment("#games") == "games"
        loader.wait("games", timeout=5)
    assert sum(nav.visibility().values()) == 1
    assert len(calls) == 1


def test_home_does_not_load_anything(registry) -> None:
    calls = []
    state, loader, nav = _navigator(registry, calls)
    with loader:
        nav.show("home")
    assert calls == []
    assert all(not v.requested for v in state.views.values())
