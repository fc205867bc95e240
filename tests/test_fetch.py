from __future__ import annotations

import pytest
import requests

from ratings.data.io import fetch
from ratings.data.io.fetch import FetchError, fetch_csv_text, fetch_rows, parse_csv_rows


class FakeResponse:
    def __init__(self, text: str, status: int = 200, content_type: str = "text/csv; charset=utf-8"):
        self.text = text
        self.status_code = status
        self.headers = {"Content-Type": content_type}
        self.encoding = None

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


def test_parse_csv_rows_keeps_strings() -> None:
    text = "Title,Score,Year\nHeat,8.5,1995\n007,,\n"
    rows = parse_csv_rows(text)
    assert rows == [
        {"Title": "Heat", "Score": "8.5", "Year": "1995"},
        {"Title": "007", "Score": "", "Year": ""},
    ]


def test_parse_csv_rows_empty_and_header_only() -> None:
    assert parse_csv_rows("") == []
    assert parse_csv_rows("   \n") == []
    assert parse_csv_rows("Title,Score\n") == []


def test_fetch_rows_concatenates_sources(monkeypatch) -> None:
    pages = {
        "u1": "Title,Score\nA,1\n",
        "u2": "Title,Score\nB,2\nA,1\n",
    }
    calls = []

    def fake_get(url, timeout=None):
        calls.append((url, timeout))
        return FakeResponse(pages[url])

    monkeypatch.setattr(fetch.requests, "get", fake_get)
    rows = fetch_rows(["u1", "u2"], timeout=3)
    assert [r["Title"] for r in rows] == ["A", "B", "A"]
    assert calls == [("u1", 3), ("u2", 3)]


def test_http_error_propagates(monkeypatch) -> None:
    monkeypatch.setattr(fetch.requests, "get", lambda url, timeout=None: FakeResponse("", status=500))
    with pytest.raises(requests.HTTPError):
        fetch_csv_text("u")


def test_non_text_response_is_rejected(monkeypatch) -> None:
    monkeypatch.setattr(
        fetch.requests, "get", lambda url, timeout=None: FakeResponse("\x89PNG", content_type="image/png")
    )
    with pytest.raises(FetchError):
        fetch_csv_text("u")


def test_ragged_rows_are_kept() -> None:
    text = "Title,Score,Year\nHeat,8.5,1995\nAlien,9,1979,extra\nX,7\n"
    rows = parse_csv_rows(text)
    assert rows == [
        {"Title": "Heat", "Score": "8.5", "Year": "1995"},
        {"Title": "Alien", "Score": "9", "Year": "1979"},
        {"Title": "X", "Score": "7", "Year": ""},
    ]


def test_ragged_first_row_is_not_an_index() -> None:
    rows = parse_csv_rows("Title,Score\nHeat,8,oops\nAlien,9\n")
    assert rows == [{"Title": "Heat", "Score": "8"}, {"Title": "Alien", "Score": "9"}]
