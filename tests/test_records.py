from __future__ import annotations

import math

from ratings.data.schema.records import Item, clean, map_row, map_rows, parse_score


def test_parse_score_is_tolerant() -> None:
    assert parse_score("9.5") == 9.5
    assert parse_score(" 7 ") == 7.0
    assert parse_score("9.5/10") == 9.5
    assert parse_score("") == 0.0
    assert parse_score(None) == 0.0
    assert parse_score("n/a") == 0.0
    assert parse_score("inf") == 0.0
    assert parse_score("1e999") == 0.0
    assert parse_score(float("nan")) == 0.0
    assert parse_score(8) == 8.0


def test_clean_defaults_to_empty_string() -> None:
    assert clean(None) == ""
    assert clean(float("nan")) == ""
    assert clean("  Nolan ") == "Nolan"
    assert clean(2020) == "2020"


def test_movie_rows_end_to_end(registry) -> None:
    rows = [
        {"Title": "X", "Score": "9.5", "Year": "2020"},
        {"Title": "", "Score": "3"},
    ]
    items = map_rows(rows, registry["movies"])
    assert len(items) == 1
    assert items[0].title == "X"
    assert items[0].score == 9.5
    assert items[0].year == "2020"
    assert items[0].score_date == ""
    assert items[0].image_url == ""


def test_blank_titles_are_dropped(registry) -> None:
    rows = [{"Title": "   ", "Score": "8"}, {"Score": "8"}, {"Title": None}]
    assert map_rows(rows, registry["movies"]) == []


def test_empty_score_maps_to_zero(registry) -> None:
    item = map_row({"Title": "Heat", "Score": ""}, registry["movies"])
    assert item is not None
    assert item.score == 0
    assert math.isfinite(item.score)


def test_category_attribution(registry) -> None:
    movie = map_row({"Title": "Heat", "Director": " Michael Mann ", "PosterURL": "https://img/x.jpg"}, registry["movies"])
    game = map_row({"Title": "Outer Wilds", "Developers": "Mobius Digital"}, registry["games"])
    mouse = map_row(
        {"Title": "Viper", "Brand": "Razer", "Model": "V3 Pro", "Sensor": "Focus Pro", "Weight": ""},
        registry["mice"],
    )
    assert movie == Item(title="Heat", attribution="Michael Mann", image_url="https://img/x.jpg")
    assert game is not None and game.attribution == "Mobius Digital"
    assert mouse is not None
    assert mouse.attribution == "Razer V3 Pro"
    assert mouse.details == ("Sensor: Focus Pro",)


def test_peripheral_with_brand_only(registry) -> None:
    item = map_row({"Title": "Pad", "Brand": "Artisan"}, registry["mice"])
    assert item is not None and item.attribution == "Artisan"
