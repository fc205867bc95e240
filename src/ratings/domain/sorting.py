from __future__ import annotations

"""Sort engine: fixed comparator chains per sort mode.

latest: year desc -> score date desc -> score desc -> title asc
score:  score desc -> year desc -> title asc
date:   score date desc

Python's sort is stable, so residual ties keep the incoming (filter) order.
"""

from functools import lru_cache
import re
import unicodedata
import warnings
from typing import Callable, Iterable

import pandas as pd

from ratings.data.schema.records import Item

SORT_MODES = ("latest", "score", "date")

_YEAR_RE = re.compile(r"^\s*([+-]?\d+)")

# pandas resolves these against the clock; treated as no date
_RELATIVE_DATES = frozenset({"now", "today", "yesterday", "tomorrow"})


def parse_year(year: str) -> int:
    """Leading integer of the year text, 0 on failure ("2020abc" -> 2020)."""
    m = _YEAR_RE.match(year or "")
    return int(m.group(1)) if m else 0


@lru_cache(maxsize=4096)
def parse_score_date(text: str) -> float:
    """Lenient date parse -> POSIX seconds; empty/invalid -> 0.0 (epoch)."""
    text = (text or "").strip()
    if not text or text.casefold() in _RELATIVE_DATES:
        return 0.0
    # pandas warns when it has to guess the format per element
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", UserWarning)
        try:
            ts = pd.to_datetime(text, errors="coerce")
        except (ValueError, TypeError, OverflowError):
            return 0.0
    if ts is None or pd.isna(ts):
        return 0.0
    return float(ts.timestamp())


def title_key(title: str) -> tuple[str, str]:
    # accent- and case-insensitive first, raw title breaks the tie
    folded = unicodedata.normalize("NFKD", title)
    folded = "".join(ch for ch in folded if not unicodedata.combining(ch)).casefold()
    return folded, title


def _latest_key(i: Item) -> tuple:
    return (-parse_year(i.year), -parse_score_date(i.score_date), -i.score, title_key(i.title))


def _score_key(i: Item) -> tuple:
    return (-i.score, -parse_year(i.year), title_key(i.title))


def _date_key(i: Item) -> tuple:
    return (-parse_score_date(i.score_date),)


SORT_KEYS: dict[str, Callable[[Item], tuple]] = {
    "latest": _latest_key,
    "score": _score_key,
    "date": _date_key,
}


def sort_items(items: Iterable[Item], mode: str) -> list[Item]:
    """Return a new list ordered by ``mode``; the input is left untouched."""
    try:
        key = SORT_KEYS[mode]
    except KeyError:
        raise ValueError(f"unknown sort mode {mode!r} (known: {list(SORT_MODES)})") from None
    return sorted(items, key=key)
