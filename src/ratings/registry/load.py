from __future__ import annotations

"""Load and validate the category registry (configs/categories.json).

Validation collects every problem first (like a contract check) and only
then fails, so a broken config shows all issues at once.
"""

from dataclasses import dataclass
import json
import logging
from pathlib import Path
from typing import Any

from ratings.data.schema.records import MAPPERS, SEARCHABLE_FIELDS
from ratings.domain.sorting import SORT_MODES
from ratings.registry.model import HOME, CategoryDescriptor, ControlIds, Registry, SourceLocator

logger = logging.getLogger(__name__)


@dataclass
class RegistryResult:
    ok: bool
    errors: list[str]
    warnings: list[str]

    def summary(self) -> str:
        if self.ok:
            w = f" (warnings={len(self.warnings)})" if self.warnings else ""
            return f"OK{w}"
        return f"FAIL (errors={len(self.errors)}, warnings={len(self.warnings)})"


def read_config(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(str(p))
    try:
        data = json.loads(p.read_text(encoding="utf-8-sig"))  # BOM-safe
    except json.JSONDecodeError as e:
        raise RuntimeError(f"Registry config is not valid JSON: {p}\n{e}") from e
    if not isinstance(data, dict):
        raise TypeError(f"categories.json must be an object, got: {type(data).__name__} ({p})")
    return data


def _str_tuple(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(v) for v in value)


def _build_category(raw: dict[str, Any]) -> CategoryDescriptor:
    key = str(raw.get("key", "")).strip()
    controls = raw.get("controls") or {}
    sources = tuple(
        SourceLocator(
            name=str(s.get("name", "") or key),
            gid=str(s.get("gid", "") or "").strip(),
            url=str(s.get("url", "") or "").strip(),
        )
        for s in (raw.get("sources") or [])
    )
    return CategoryDescriptor(
        key=key,
        label=str(raw.get("label") or key.title()),
        sources=sources,
        mount_id=str(raw.get("mount_id") or f"{key}Container"),
        controls=ControlIds(
            min_score=str(controls.get("min_score") or f"{key}MinScoreFilter"),
            max_score=str(controls.get("max_score") or f"{key}MaxScoreFilter"),
            year=str(controls.get("year") or f"{key}YearFilter"),
            search=str(controls.get("search") or f"{key}SearchFilter"),
        ),
        default_sort=str(raw.get("default_sort") or "latest"),
        search_fields=_str_tuple(raw.get("search_fields")) or ("title", "attribution"),
        mapper=str(raw.get("mapper") or "movie"),
        detail_columns=_str_tuple(raw.get("detail_columns")),
    )


def build_registry(data: dict[str, Any], *, published_base: str | None = None) -> Registry:
    base = published_base or str(data.get("published_base", "") or "")
    cats = data.get("categories", [])
    if not isinstance(cats, list):
        raise TypeError(f"'categories' must be a list, got {type(cats).__name__}")
    built = []
    for i, raw in enumerate(cats):
        if not isinstance(raw, dict):
            raise TypeError(f"Category #{i+1} must be an object/dict, got {type(raw).__name__}")
        built.append(_build_category(raw))
    return Registry(published_base=base, categories=tuple(built))


def validate_registry(registry: Registry) -> RegistryResult:
    errors: list[str] = []
    warnings: list[str] = []

    if not registry.categories:
        errors.append("no categories configured")

    seen_keys: set[str] = set()
    seen_mounts: set[str] = set()
    for c in registry.categories:
        label = c.key or "<missing key>"
        if not c.key:
            errors.append("category without 'key'")
        elif c.key == HOME:
            errors.append(f"'{HOME}' is reserved and cannot be a category key")
        elif c.key in seen_keys:
            errors.append(f"duplicate category key: {c.key}")
        seen_keys.add(c.key)

        if c.mount_id in seen_mounts:
            errors.append(f"{label}: mount_id '{c.mount_id}' used twice")
        seen_mounts.add(c.mount_id)

        if c.mapper not in MAPPERS:
            errors.append(f"{label}: unknown mapper '{c.mapper}' (known: {sorted(MAPPERS)})")
        if c.default_sort not in SORT_MODES:
            errors.append(f"{label}: unknown default_sort '{c.default_sort}' (known: {list(SORT_MODES)})")
        bad_fields = [f for f in c.search_fields if f not in SEARCHABLE_FIELDS]
        if bad_fields:
            errors.append(f"{label}: unknown search fields {bad_fields} (known: {list(SEARCHABLE_FIELDS)})")

        if not c.sources:
            errors.append(f"{label}: no sources configured")
        unlinked = [s.name for s in c.sources if not s.linked]
        if unlinked:
            warnings.append(f"{label}: sources not linked yet: {unlinked}")
        if any(s.gid and not s.url for s in c.sources) and not registry.published_base:
            errors.append(f"{label}: gid sources need 'published_base'")

    return RegistryResult(ok=not errors, errors=errors, warnings=warnings)


def load_registry(path: str | Path, *, published_base: str | None = None) -> Registry:
    """Read, build and validate the registry. Fails fast on config errors."""
    registry = build_registry(read_config(path), published_base=published_base)
    res = validate_registry(registry)
    if not res.ok:
        msg = "\n".join(["Registry validation failed:"] + [" - " + e for e in res.errors])
        raise RuntimeError(msg)
    for w in res.warnings:
        logger.warning(w)
    logger.info(f"Registry loaded: {', '.join(registry.keys)} ({Path(path).as_posix()})")
    return registry
