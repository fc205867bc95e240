from __future__ import annotations

"""Filter engine: year / score interval / free-text search.

Filtering keeps the original relative order; sorting is a separate stage
(ratings.domain.sorting). The same rules run in the browser, see the
embedded script in ratings.ui.generator.
"""

from dataclasses import dataclass
import math
from typing import Any, Iterable, Sequence

from ratings.data.schema.records import Item, clean, parse_number


@dataclass(frozen=True)
class FilterCriteria:
    year: str = ""
    min_score: Any = None
    max_score: Any = None
    search: str = ""


def _bound(value: Any, default: float) -> float:
    v = parse_number(value)
    return default if v is None else v


def score_bounds(min_raw: Any = None, max_raw: Any = None) -> tuple[float, float]:
    """Parse both bounds; missing -> -inf/+inf; swapped if min > max."""
    lo = _bound(min_raw, -math.inf)
    hi = _bound(max_raw, math.inf)
    if lo > hi:
        lo, hi = hi, lo
    return lo, hi


def normalize(value: Any) -> str:
    if isinstance(value, (tuple, list)):
        return " \n".join(normalize(v) for v in value)
    return clean(value).lower()


def matches_search(item: Item, term: str, fields: Sequence[str]) -> bool:
    if not term:
        return True
    return any(term in normalize(getattr(item, f, "")) for f in fields)


def filter_items(items: Iterable[Item], criteria: FilterCriteria, search_fields: Sequence[str]) -> list[Item]:
    lo, hi = score_bounds(criteria.min_score, criteria.max_score)
    year = clean(criteria.year)
    term = normalize(criteria.search)

    out: list[Item] = []
    for item in items:
        if year and item.year != year:
            continue
        if not (lo <= item.score <= hi):
            continue
        if not matches_search(item, term, search_fields):
            continue
        out.append(item)
    return out


def year_options(items: Iterable[Item]) -> list[str]:
    """Distinct non-empty years, descending (string order)."""
    return sorted({i.year for i in items if i.year}, reverse=True)
