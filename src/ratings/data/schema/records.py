from __future__ import annotations

"""Row -> Item mapping for the published rating sheets.

Every category has an explicit mapping function with fixed column names.
Missing columns and malformed values never raise: strings default to ""
and numbers to 0. Rows without a title are rejected (``None``).
"""

from dataclasses import dataclass
import math
import re
from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping

if TYPE_CHECKING:
    from ratings.registry.model import CategoryDescriptor

Row = Mapping[str, Any]

# leading number like JS parseFloat: "9.5/10" -> 9.5, "8,5" -> 8
_NUMBER_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


@dataclass(frozen=True)
class Item:
    title: str
    score: float = 0.0
    year: str = ""
    score_date: str = ""
    attribution: str = ""
    image_url: str = ""
    details: tuple[str, ...] = ()


# Item attributes that can be searched (used by the registry validation)
SEARCHABLE_FIELDS = ("title", "year", "score_date", "attribution", "details")


def clean(value: Any) -> str:
    """None / NaN -> "", everything else -> trimmed string."""
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()


def parse_number(value: Any) -> float | None:
    """Leading-number parse; None when nothing numeric is found."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        v = float(value)
        return None if math.isnan(v) else v
    m = _NUMBER_RE.match(clean(value))
    if not m:
        return None
    return float(m.group(1))


def parse_score(value: Any) -> float:
    """Tolerant score parse. Never raises, never returns NaN/inf."""
    v = parse_number(value)
    if v is None or not math.isfinite(v):
        return 0.0
    return v


def _core(row: Row, attribution: str, details: tuple[str, ...] = ()) -> Item | None:
    title = clean(row.get("Title"))
    if not title:
        return None
    return Item(
        title=title,
        score=parse_score(row.get("Score")),
        year=clean(row.get("Year")),
        score_date=clean(row.get("Score Date")),
        attribution=attribution,
        image_url=clean(row.get("PosterURL")),
        details=details,
    )


def map_movie_row(row: Row, detail_columns: tuple[str, ...] = ()) -> Item | None:
    return _core(row, clean(row.get("Director")), _details(row, detail_columns))


def map_game_row(row: Row, detail_columns: tuple[str, ...] = ()) -> Item | None:
    return _core(row, clean(row.get("Developers")), _details(row, detail_columns))


def map_peripheral_row(row: Row, detail_columns: tuple[str, ...] = ()) -> Item | None:
    brand_model = " ".join(p for p in (clean(row.get("Brand")), clean(row.get("Model"))) if p)
    return _core(row, brand_model, _details(row, detail_columns))


def _details(row: Row, columns: tuple[str, ...]) -> tuple[str, ...]:
    out = []
    for col in columns:
        v = clean(row.get(col))
        if v:
            out.append(f"{col}: {v}")
    return tuple(out)


Mapper = Callable[[Row, tuple[str, ...]], "Item | None"]

MAPPERS: dict[str, Mapper] = {
    "movie": map_movie_row,
    "game": map_game_row,
    "peripheral": map_peripheral_row,
}


def map_row(row: Row, descriptor: CategoryDescriptor) -> Item | None:
    return MAPPERS[descriptor.mapper](row, descriptor.detail_columns)


def map_rows(rows: Iterable[Row], descriptor: CategoryDescriptor) -> list[Item]:
    """Map all rows of a category, dropping rejected (title-less) rows."""
    mapper = MAPPERS[descriptor.mapper]
    out: list[Item] = []
    for row in rows:
        item = mapper(row, descriptor.detail_columns)
        if item is not None:
            out.append(item)
    return out


# user-facing names of searchable fields; attribution depends on the mapper
FIELD_LABELS = {"title": "Title", "year": "Year", "score_date": "Rated date", "details": "Details"}
ATTRIBUTION_LABELS = {"movie": "Director", "game": "Developer", "peripheral": "Brand / model"}


def field_label(field: str, mapper: str) -> str:
    if field == "attribution":
        return ATTRIBUTION_LABELS.get(mapper, "Credits")
    return FIELD_LABELS.get(field, field.replace("_", " ").capitalize())
