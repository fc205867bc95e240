from __future__ import annotations

from dataclasses import dataclass, field

HOME = "home"


@dataclass(frozen=True)
class SourceLocator:
    """One published sheet tab. Empty gid and url means "not linked yet"."""

    name: str
    gid: str = ""
    url: str = ""

    @property
    def linked(self) -> bool:
        return bool(self.url or self.gid)

    def resolve(self, published_base: str) -> str:
        if self.url:
            return self.url
        return build_published_csv_url(published_base, self.gid)


@dataclass(frozen=True)
class ControlIds:
    min_score: str
    max_score: str
    year: str
    search: str


@dataclass(frozen=True)
class CategoryDescriptor:
    key: str
    label: str
    sources: tuple[SourceLocator, ...]
    mount_id: str
    controls: ControlIds
    default_sort: str = "latest"
    search_fields: tuple[str, ...] = ("title", "attribution")
    mapper: str = "movie"
    detail_columns: tuple[str, ...] = ()

    @property
    def linked(self) -> bool:
        return bool(self.sources) and all(s.linked for s in self.sources)


@dataclass(frozen=True)
class Registry:
    published_base: str
    categories: tuple[CategoryDescriptor, ...] = field(default_factory=tuple)

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(c.key for c in self.categories)

    @property
    def sections(self) -> tuple[str, ...]:
        return (HOME,) + self.keys

    def get(self, key: str) -> CategoryDescriptor | None:
        for c in self.categories:
            if c.key == key:
                return c
        return None

    def __getitem__(self, key: str) -> CategoryDescriptor:
        c = self.get(key)
        if c is None:
            raise KeyError(key)
        return c

    def source_urls(self, key: str) -> list[str]:
        return [s.resolve(self.published_base) for s in self[key].sources if s.linked]


def build_published_csv_url(published_base: str, gid: str) -> str:
    return f"{published_base}?gid={gid}&single=true&output=csv"

