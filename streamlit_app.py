"""
Interactive Streamlit client for the rating sheets.

Run locally:
  streamlit run streamlit_app.py

Each category is fetched the first time it is opened and kept for the
session. The visible category is kept in the ``section`` query parameter
so links and back/forward work like the #fragment of the static site.
"""

from __future__ import annotations

import streamlit as st

from ratings.app.loader import CategoryLoader
from ratings.app.navigation import Navigator
from ratings.app.state import AppState
from ratings.app.view import build_view
from ratings.common.logging_setup import setup_logging
from ratings.config.settings import load_settings
from ratings.domain.filters import FilterCriteria
from ratings.domain.sorting import SORT_MODES
from ratings.registry.load import load_registry
from ratings.registry.model import HOME
from ratings.ui.generator import SORT_LABELS
from ratings.ui.render import search_placeholder

st.set_page_config(page_title="Ratings", page_icon="⭐", layout="wide")

CARD_CSS = """
<style>
.grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(180px, 1fr)); gap: 16px; }
.card { background: #1f1f1f; border: 1px solid #2e2e2e; border-radius: 12px; overflow: hidden; }
.poster-wrap { position: relative; aspect-ratio: 2 / 3; background: #3a3a3a; }
.poster-wrap img, .poster-placeholder { width: 100%; height: 100%; object-fit: cover; display: block; }
.score-badge { position: absolute; right: 8px; bottom: 8px; width: var(--badge-size); height: var(--badge-size); border-radius: 50%; background: rgba(0,0,0,.72); color: var(--score-color); display: flex; flex-direction: column; align-items: center; justify-content: center; line-height: 1; }
.score-badge.is-high { box-shadow: 0 0 12px var(--score-color); }
.score-star { font-size: var(--star-size); }
.score-value { font-size: var(--score-size); font-weight: 700; }
.card-content { padding: 10px; display: flex; flex-direction: column; gap: 4px; color: #f1f1f1; }
.card-title { font-weight: 600; }
.card-details { color: #a3a3a3; font-size: 13px; }
.rated-pill { align-self: flex-start; font-size: 11px; padding: 2px 8px; border-radius: 999px; border: 1px solid #2e2e2e; color: #a3a3a3; }
.no-results { text-align: center; color: #a3a3a3; padding: 40px 0; }
</style>
"""


def _session() -> tuple[AppState, CategoryLoader, Navigator]:
    """One state container per browser session (page-lifetime only)."""
    if "ratings_state" not in st.session_state:
        settings = load_settings()
        setup_logging(settings)
        registry = load_registry(settings.categories_path, published_base=settings.published_base)
        state = AppState(registry)
        loader = CategoryLoader(state, max_workers=settings.max_workers, timeout=settings.http_timeout)
        st.session_state["ratings_state"] = state
        st.session_state["ratings_loader"] = loader
        st.session_state["ratings_nav"] = Navigator(state, loader)
    return (
        st.session_state["ratings_state"],
        st.session_state["ratings_loader"],
        st.session_state["ratings_nav"],
    )


def _go(nav: Navigator, section: str) -> None:
    nav.show(section)
    if section == HOME:
        st.query_params.clear()
    else:
        st.query_params["section"] = section


try:
    state, loader, nav = _session()
except (FileNotFoundError, RuntimeError, TypeError) as e:
    st.error(f"Category registry could not be loaded:\n\n{e}")
    st.stop()

registry = state.registry
current = nav.handle_fragment(st.query_params.get("section", ""))

st.markdown(CARD_CSS, unsafe_allow_html=True)

if current == HOME:
    st.title("Ratings")
    cols = st.columns(max(1, len(registry.categories)))
    for col, c in zip(cols, registry.categories):
        if col.button(c.label, key=f"open_{c.key}", use_container_width=True):
            _go(nav, c.key)
            st.rerun()
    st.stop()

descriptor = registry[current]
head_l, head_r = st.columns([1, 8])
if head_l.button("← Back", key="back"):
    _go(nav, HOME)
    st.rerun()
head_r.header(descriptor.label)

# first visit blocks until the fetch is done; later reruns reuse the cache
with st.spinner(f"Loading {descriptor.label}…"):
    loader.wait(current)

view = build_view(state, current)
if view.status != "ready":
    st.markdown(view.html, unsafe_allow_html=True)
    st.stop()

f1, f2, f3, f4 = st.columns([1, 1, 1, 3])
min_raw = f1.text_input("Min score", key=descriptor.controls.min_score)
max_raw = f2.text_input("Max score", key=descriptor.controls.max_score)
year = f3.selectbox(
    "Year",
    [""] + view.years,
    format_func=lambda y: y or "All",
    key=descriptor.controls.year,
)
search = f4.text_input("Search", key=descriptor.controls.search, placeholder=search_placeholder(descriptor))

vs = state.view(current)
mode = st.radio(
    "Sort",
    list(SORT_MODES),
    index=list(SORT_MODES).index(vs.sort_mode),
    format_func=lambda m: SORT_LABELS[m],
    horizontal=True,
    key=f"{current}_sort",
)
if mode != vs.sort_mode:
    state.set_sort(current, mode)

view = build_view(
    state,
    current,
    FilterCriteria(year=year, min_score=min_raw, max_score=max_raw, search=search),
)
st.caption(f"{view.count_text} (of {len(state.items(current) or ())})")
st.markdown(f'<div class="grid">{view.html}</div>', unsafe_allow_html=True)
