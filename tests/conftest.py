from __future__ import annotations

import pytest

from ratings.registry.load import build_registry
from ratings.registry.model import Registry

BASE = "https://sheets.example/pub"

REGISTRY_DATA = {
    "published_base": BASE,
    "categories": [
        {
            "key": "movies",
            "label": "Movies",
            "mapper": "movie",
            "sources": [{"name": "Movies", "gid": "1"}],
            "mount_id": "moviesContainer",
            "controls": {
                "min_score": "minScoreFilter",
                "max_score": "maxScoreFilter",
                "year": "yearFilter",
                "search": "searchFilter",
            },
        },
        {
            "key": "games",
            "label": "Games",
            "mapper": "game",
            "sources": [
                {"name": "Simple Games", "gid": "2"},
                {"name": "Complex Games", "gid": "3"},
            ],
            "mount_id": "gamesContainer",
        },
        {
            "key": "mice",
            "label": "Mice",
            "mapper": "peripheral",
            "sources": [{"name": "Mice", "gid": ""}],
            "default_sort": "score",
            "search_fields": ["title", "attribution", "details"],
            "detail_columns": ["Sensor", "Weight"],
        },
    ],
}


@pytest.fixture
def registry() -> Registry:
    return build_registry(REGISTRY_DATA)
