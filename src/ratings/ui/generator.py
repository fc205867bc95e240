from __future__ import annotations

"""Static site generator.

Creates a single self-contained HTML file with:
- Home section + one section per category (hash navigation: #movies, ...)
- Per category: min/max score, year selector, search, scoped sort toggles
- Cards pre-rendered in Python (default sort, no filters) so the page is
  not blank if JS fails
- Embedded data; the browser script only filters, sorts and swaps in the
  pre-rendered cards (sort keys are computed here, not in JS)

Run
---
  python -m ratings.ui.generator
  python -m ratings.ui.generator --category movies --out artifacts/site/movies.html

Output
------
  artifacts/site/index.html
"""

import argparse
from concurrent.futures import wait
from datetime import datetime, timezone
import html
import json
import logging
from pathlib import Path
from typing import Any, Sequence

from ratings._version import __version__, __build__
from ratings.app.loader import CategoryLoader, Fetcher
from ratings.app.state import AppState
from ratings.app.view import CategoryView, build_view
from ratings.common.logging_setup import setup_logging
from ratings.config.settings import Settings, load_settings
from ratings.data.io.paths import resolve
from ratings.data.schema.records import Item
from ratings.domain.sorting import SORT_MODES, parse_score_date, parse_year, title_key
from ratings.registry.load import load_registry
from ratings.registry.model import CategoryDescriptor, Registry
from ratings.ui.render import NO_RESULTS_HTML, render_card, render_year_options, search_placeholder

logger = logging.getLogger(__name__)

SORT_LABELS = {"latest": "Latest", "score": "Score", "date": "Rated date"}


def _item_record(item: Item) -> dict[str, Any]:
    return {
        "title": item.title,
        "score": item.score,
        "year": item.year,
        "score_date": item.score_date,
        "attribution": item.attribution,
        "details": list(item.details),
        # precomputed sort keys (same as ratings.domain.sorting)
        "y": parse_year(item.year),
        "d": parse_score_date(item.score_date),
        "tk": title_key(item.title)[0],
        "card": render_card(item),
    }


def _category_payload(descriptor: CategoryDescriptor, view: CategoryView, items: Sequence[Item]) -> dict[str, Any]:
    return {
        "label": descriptor.label,
        "status": view.status,
        "mount": descriptor.mount_id,
        "controls": {
            "min": descriptor.controls.min_score,
            "max": descriptor.controls.max_score,
            "year": descriptor.controls.year,
            "search": descriptor.controls.search,
        },
        "sort": descriptor.default_sort,
        "searchFields": list(descriptor.search_fields),
        "items": [_item_record(i) for i in items],
    }


def _json_for_script(data: Any) -> str:
    # keep "</script>" inside strings from closing the tag
    return json.dumps(data, ensure_ascii=False).replace("</", "<\\/")


def load_all(loader: CategoryLoader, keys: Sequence[str]) -> None:
    futures = [loader.ensure_loaded(k) for k in keys]
    wait(futures)


def build_site(
    *,
    registry: Registry,
    out_html: str | Path,
    fetcher: Fetcher | None = None,
    settings: Settings | None = None,
) -> Path:
    out_html = resolve(out_html)
    settings = settings or load_settings()

    state = AppState(registry)
    with CategoryLoader(
        state,
        fetcher=fetcher,
        max_workers=settings.max_workers,
        timeout=settings.http_timeout,
    ) as loader:
        load_all(loader, registry.keys)

    sections: list[str] = []
    payload: dict[str, Any] = {}
    for descriptor in registry.categories:
        view = build_view(state, descriptor.key)
        items = state.items(descriptor.key) or ()
        sections.append(_render_section(descriptor, view))
        payload[descriptor.key] = _category_payload(descriptor, view, items)
        if view.status == "error":
            logger.warning(f"⚠️ {descriptor.key}: rendered with load error")

    page = _render_html(
        registry=registry,
        sections_html="\n".join(sections),
        data=payload,
        version=__version__,
        build=__build__,
        generated=datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC"),
    )

    out_html.parent.mkdir(parents=True, exist_ok=True)
    out_html.write_text(page, encoding="utf-8")
    return out_html


def _render_section(descriptor: CategoryDescriptor, view: CategoryView) -> str:
    key = html.escape(descriptor.key)
    c = descriptor.controls
    buttons = []
    for mode in SORT_MODES:
        active = " active" if mode == descriptor.default_sort else ""
        buttons.append(
            f'<button type="button" class="sort-button{active}" data-target="{key}" data-sort="{mode}">'
            f"{SORT_LABELS[mode]}</button>"
        )
    count = html.escape(view.count_text)
    return f"""
  <section id="{key}" class="category-section hidden">
    <div class="section-head">
      <button type="button" class="back-button" data-section="home">← Back</button>
      <h2>{html.escape(descriptor.label)} <span class="count" id="{key}Count">{count}</span></h2>
    </div>
    <div class="filters">
      <label>Min <input type="number" id="{html.escape(c.min_score)}" min="0" max="10" step="0.1" placeholder="0"></label>
      <label>Max <input type="number" id="{html.escape(c.max_score)}" min="0" max="10" step="0.1" placeholder="10"></label>
      <label>Year <select id="{html.escape(c.year)}">{render_year_options(view.years)}</select></label>
      <label class="grow">Search <input type="search" id="{html.escape(c.search)}" placeholder="{html.escape(search_placeholder(descriptor))}"></label>
      <div class="sort-group">{''.join(buttons)}</div>
    </div>
    <div class="grid" id="{html.escape(descriptor.mount_id)}">{view.html}</div>
  </section>"""


def _render_html(*, registry: Registry, sections_html: str, data: dict[str, Any], version: str, build: str, generated: str) -> str:
    home_buttons = "\n".join(
        f'      <button type="button" class="category-button" data-section="{html.escape(c.key)}">{html.escape(c.label)}</button>'
        for c in registry.categories
    )

    # No f-string for the template: CSS/JS are full of curly braces.
    template = """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8"/>
  <meta name="viewport" content="width=device-width, initial-scale=1"/>
  <title>Ratings</title>
  <style>
    :root {
      --bg: #141414;
      --card: #1f1f1f;
      --muted: #a3a3a3;
      --text: #f1f1f1;
      --accent: #ffd54a;
      --border: #2e2e2e;
      --sans: ui-sans-serif, system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial;
    }
    * { box-sizing: border-box; }
    body { margin: 0; font-family: var(--sans); background: var(--bg); color: var(--text); }
    header { padding: 16px 18px; border-bottom: 1px solid var(--border); }
    header h1 { margin: 0; font-size: 20px; }
    main { max-width: 1400px; margin: 0 auto; padding: 18px; }
    .hidden { display: none !important; }
    .home-grid { display: flex; flex-wrap: wrap; gap: 12px; }
    .category-button, .back-button, .sort-button { background: var(--card); color: var(--text); border: 1px solid var(--border); border-radius: 10px; padding: 10px 16px; cursor: pointer; }
    .category-button { font-size: 18px; padding: 24px 32px; }
    .sort-button.active { border-color: var(--accent); color: var(--accent); }
    .section-head { display: flex; align-items: center; gap: 14px; }
    .count { color: var(--muted); font-size: 14px; font-weight: 400; }
    .filters { display: flex; flex-wrap: wrap; gap: 10px; align-items: end; margin: 12px 0 18px; }
    .filters label { display: flex; flex-direction: column; font-size: 12px; color: var(--muted); gap: 4px; }
    .filters .grow { flex: 1 1 220px; }
    .filters input, .filters select { background: var(--card); color: var(--text); border: 1px solid var(--border); border-radius: 8px; padding: 8px; }
    .sort-group { display: flex; gap: 6px; }
    .grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(180px, 1fr)); gap: 16px; }
    .card { background: var(--card); border: 1px solid var(--border); border-radius: 12px; overflow: hidden; }
    .poster-wrap { position: relative; aspect-ratio: 2 / 3; background: #3a3a3a; }
    .poster-wrap img, .poster-placeholder { width: 100%; height: 100%; object-fit: cover; display: block; }
    .score-badge { position: absolute; right: 8px; bottom: 8px; width: var(--badge-size); height: var(--badge-size); border-radius: 50%; background: rgba(0,0,0,.72); color: var(--score-color); display: flex; flex-direction: column; align-items: center; justify-content: center; line-height: 1; }
    .score-badge.is-high { box-shadow: 0 0 12px var(--score-color); }
    .score-star { font-size: var(--star-size); }
    .score-value { font-size: var(--score-size); font-weight: 700; }
    .card-content { padding: 10px; display: flex; flex-direction: column; gap: 4px; }
    .card-title { font-weight: 600; }
    .card-details { color: var(--muted); font-size: 13px; }
    .rated-pill { align-self: flex-start; margin-top: 4px; font-size: 11px; padding: 2px 8px; border-radius: 999px; border: 1px solid var(--border); color: var(--muted); }
    .no-results { grid-column: 1 / -1; text-align: center; color: var(--muted); padding: 40px 0; }
    .no-results-icon { font-size: 32px; }
    footer { color: var(--muted); font-size: 11px; padding: 18px; text-align: center; }
  </style>
</head>
<body>
  <header><h1>Ratings</h1></header>
  <main>
  <section id="home" class="category-section">
    <div class="home-grid">
__HOME_BUTTONS__
    </div>
  </section>
__SECTIONS__
  </main>
  <footer>v__VERSION__ (build __BUILD__) · generated __GENERATED__</footer>

  <script id="DATA" type="application/json">__DATA_JSON__</script>
  <script id="NO_RESULTS" type="application/json">__NO_RESULTS_JSON__</script>

  <script>
  (function() {
    const DATA = JSON.parse(document.getElementById('DATA').textContent || '{}');
    const NO_RESULTS = JSON.parse(document.getElementById('NO_RESULTS').textContent || '""');
    const SECTIONS = ['home'].concat(Object.keys(DATA));
    const NUM_RE = /^\\s*([+-]?(?:\\d+\\.?\\d*|\\.\\d+)(?:[eE][+-]?\\d+)?)/;

    // ---- filter/sort logic (mirrors ratings.domain.filters / sorting) ----
    function el(id) { return id ? document.getElementById(id) : null; }

    function parseBound(v, dflt) {
      const m = NUM_RE.exec((v ?? '').toString().trim());
      if (!m) return dflt;
      const n = parseFloat(m[1]);
      return Number.isNaN(n) ? dflt : n;
    }

    function scoreBounds(minEl, maxEl) {
      let lo = parseBound(minEl && minEl.value, -Infinity);
      let hi = parseBound(maxEl && maxEl.value, Infinity);
      if (lo > hi) { const t = lo; lo = hi; hi = t; }
      return {lo, hi};
    }

    function norm(v) {
      if (Array.isArray(v)) return v.map(norm).join(' \\n');
      return (v ?? '').toString().trim().toLowerCase();
    }

    function filterItems(cat) {
      const c = cat.controls;
      const year = ((el(c.year) || {}).value || '').trim();
      const {lo, hi} = scoreBounds(el(c.min), el(c.max));
      const term = norm((el(c.search) || {}).value);
      return cat.items.filter(it => {
        if (year && it.year !== year) return false;
        if (!(it.score >= lo && it.score <= hi)) return false;
        if (!term) return true;
        return cat.searchFields.some(f => norm(it[f]).includes(term));
      });
    }

    const SORTS = {
      latest: [['y', -1], ['d', -1], ['score', -1], ['tk', 1], ['title', 1]],
      score: [['score', -1], ['y', -1], ['tk', 1], ['title', 1]],
      date: [['d', -1]],
    };

    function sortItems(items, mode) {
      const keys = SORTS[mode] || SORTS.latest;
      return items
        .map((it, i) => [it, i])
        .sort((a, b) => {
          for (const [k, dir] of keys) {
            const va = a[0][k], vb = b[0][k];
            if (va < vb) return -dir;
            if (va > vb) return dir;
          }
          return a[1] - b[1];
        })
        .map(p => p[0]);
    }

    function renderCategory(key) {
      const cat = DATA[key];
      if (!cat || cat.status !== 'ready') return;
      const mount = el(cat.mount);
      if (!mount) return;
      const rows = sortItems(filterItems(cat), cat.sort);
      mount.innerHTML = rows.length ? rows.map(r => r.card).join('') : NO_RESULTS;
      const count = el(key + 'Count');
      if (count) count.textContent = rows.length === 1 ? '1 item' : rows.length + ' items';
    }

    // ---- navigation ----
    function showSection(id) {
      if (!SECTIONS.includes(id)) id = 'home';
      SECTIONS.forEach(sec => {
        const s = el(sec);
        if (s) s.classList.toggle('hidden', sec !== id);
      });
      if (id !== 'home') {
        if (window.location.hash !== '#' + id) window.location.hash = '#' + id;
      } else if (window.location.hash) {
        history.replaceState(null, '', window.location.pathname + window.location.search);
      }
    }

    function handleHashChange() {
      showSection(window.location.hash.replace('#', ''));
    }

    document.querySelectorAll('[data-section]').forEach(btn => {
      btn.addEventListener('click', () => showSection(btn.getAttribute('data-section')));
    });

    document.querySelectorAll('.sort-button').forEach(btn => {
      btn.addEventListener('click', () => {
        const target = btn.getAttribute('data-target');
        const cat = DATA[target];
        if (!cat) return;
        document.querySelectorAll(`.sort-button[data-target="${target}"]`)
          .forEach(b => b.classList.remove('active'));
        btn.classList.add('active');
        cat.sort = btn.getAttribute('data-sort');
        renderCategory(target);
      });
    });

    Object.keys(DATA).forEach(key => {
      const c = DATA[key].controls;
      [c.min, c.max, c.year].forEach(id => {
        const e = el(id);
        if (e) e.addEventListener('change', () => renderCategory(key));
      });
      const s = el(c.search);
      if (s) s.addEventListener('input', () => renderCategory(key));
    });

    handleHashChange();
    window.addEventListener('hashchange', handleHashChange);
  })();
  </script>
</body>
</html>
"""
    return (
        template
        .replace("__HOME_BUTTONS__", home_buttons)
        .replace("__SECTIONS__", sections_html)
        .replace("__VERSION__", html.escape(version))
        .replace("__BUILD__", html.escape(build))
        .replace("__GENERATED__", html.escape(generated))
        .replace("__NO_RESULTS_JSON__", _json_for_script(NO_RESULTS_HTML))
        .replace("__DATA_JSON__", _json_for_script(data))
    )


def main(argv: Sequence[str] | None = None) -> int:
    settings = load_settings()
    ap = argparse.ArgumentParser(description="Build the static ratings site")
    ap.add_argument("--config", default=str(settings.categories_path), help="category registry JSON")
    ap.add_argument("--out", default=r"artifacts/site/index.html")
    ap.add_argument("--category", action="append", default=[], help="only build these categories (repeatable)")
    args = ap.parse_args(argv)

    setup_logging(settings)

    try:
        registry = load_registry(args.config, published_base=settings.published_base)
    except (FileNotFoundError, RuntimeError, TypeError) as e:
        print(f"❌ Registry: {e}")
        return 1

    if args.category:
        unknown = [k for k in args.category if registry.get(k) is None]
        if unknown:
            print(f"❌ Unknown categories: {unknown} (known: {list(registry.keys)})")
            return 1
        registry = Registry(
            published_base=registry.published_base,
            categories=tuple(c for c in registry.categories if c.key in args.category),
        )

    out = build_site(registry=registry, out_html=args.out, settings=settings)
    print(f"✅ Site wrote: {out.as_posix()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
