from __future__ import annotations

"""HTML renderer for rating cards.

The markup is shared by the static site (pre-rendered cards, see
ratings.ui.generator) and the Streamlit client. The browser script in the
generator builds exactly the same markup when filters change.
"""

import html
import logging
from typing import TYPE_CHECKING, Iterable, Sequence

from ratings.data.schema.records import Item, field_label
from ratings.ui.badge import score_badge

if TYPE_CHECKING:
    from ratings.registry.model import CategoryDescriptor

logger = logging.getLogger(__name__)

NO_RESULTS_HTML = (
    '<div class="no-results"><div class="no-results-icon">🔍</div>'
    "<h3>No results</h3><p>Try changing your filters</p></div>"
)

PLACEHOLDER_COLOR = "#3a3a3a"


def esc(v: object) -> str:
    return html.escape("" if v is None else str(v))


def render_badge(score: float) -> str:
    b = score_badge(score)
    cls = "score-badge is-high" if b.is_high else "score-badge"
    star = '<span class="score-star">★</span>' * b.stars
    return f'<div class="{cls}" style="{b.css_vars()}">{star}<span class="score-value">{esc(b.text)}</span></div>'


def render_title(item: Item) -> str:
    return f"{item.title} ({item.year})" if item.year else item.title


def render_card(item: Item) -> str:
    if item.image_url:
        img = (
            f'<img src="{esc(item.image_url)}" alt="{esc(item.title)}" loading="lazy" '
            f"onerror=\"this.removeAttribute('src');this.style.backgroundColor='{PLACEHOLDER_COLOR}'\">"
        )
    else:
        img = f'<div class="poster-placeholder" style="background-color:{PLACEHOLDER_COLOR}" aria-label="{esc(item.title)}"></div>'

    lines = [f'<div class="card-title">{esc(render_title(item))}</div>']
    lines.append(f'<div class="card-details">{esc(item.attribution)}</div>')
    for d in item.details:
        lines.append(f'<div class="card-details card-extra">{esc(d)}</div>')
    rated = f"Rated: {item.score_date}" if item.score_date else "Rated: —"
    lines.append(f'<div class="rated-pill">{esc(rated)}</div>')

    return (
        '<div class="card">'
        f'<div class="poster-wrap">{img}{render_badge(item.score)}</div>'
        f'<div class="card-content">{"".join(lines)}</div>'
        "</div>"
    )


def render_items(items: Sequence[Item]) -> str:
    """Cards for an ordered list; an empty list renders the no-results block."""
    if not items:
        return NO_RESULTS_HTML
    return "".join(render_card(i) for i in items)


def render_count(n: int) -> str:
    return f"{n} item" if n == 1 else f"{n} items"


def render_load_error(label: str) -> str:
    return (
        '<div class="no-results load-error"><div class="no-results-icon">😕</div>'
        f"<h3>Could not load {esc(label)}</h3><p>Try reloading the page</p></div>"
    )


def render_not_linked(label: str) -> str:
    return (
        '<div class="card"><div class="card-content">'
        f'<div class="card-title">{esc(label)} data not linked yet</div>'
        '<div class="card-details">Add the sheet gid values to configs/categories.json.</div>'
        "</div></div>"
    )


def render_loading(label: str) -> str:
    return f'<div class="no-results loading"><p>Loading {esc(label)}…</p></div>'


def search_placeholder(descriptor: CategoryDescriptor) -> str:
    """Search box hint naming the searched fields, e.g. `Title, Director…`."""
    labels = [field_label(f, descriptor.mapper) for f in descriptor.search_fields]
    return ", ".join(labels) + "…"


def render_year_options(years: Iterable[str], selected: str = "") -> str:
    opts = ['<option value="">All</option>']
    for y in years:
        sel = " selected" if y == selected else ""
        opts.append(f'<option value="{esc(y)}"{sel}>{esc(y)}</option>')
    return "".join(opts)


class Page:
    """Named mount points. Mounting fully replaces previous content."""

    def __init__(self, mount_ids: Iterable[str]):
        self._content: dict[str, str] = {m: "" for m in mount_ids}

    def has(self, mount_id: str) -> bool:
        return mount_id in self._content

    def mount(self, mount_id: str, content: str) -> bool:
        if mount_id not in self._content:
            logger.debug(f"mount point '{mount_id}' missing, skipped")
            return False
        self._content[mount_id] = content
        return True

    def content(self, mount_id: str) -> str:
        return self._content.get(mount_id, "")
