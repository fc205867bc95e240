from __future__ import annotations

"""Transport: HTTP GET of published sheet CSV exports.

One GET per source locator, no auth, no custom headers. Rows of all
sources of a category are concatenated in source order (no de-dup).
"""

import io
import logging
from typing import Iterable

import pandas as pd
import requests

logger = logging.getLogger(__name__)

_TEXT_TYPES = ("text/", "application/csv", "application/vnd.ms-excel")


class FetchError(RuntimeError):
    """Source returned something that is not CSV text."""


def fetch_csv_text(url: str, *, timeout: float | None = None, session: requests.Session | None = None) -> str:
    getter = session.get if session is not None else requests.get
    r = getter(url, timeout=timeout)
    r.raise_for_status()
    ctype = (r.headers.get("Content-Type") or "").lower()
    if ctype and not ctype.startswith(_TEXT_TYPES):
        raise FetchError(f"unexpected content type {ctype!r} from {url}")
    r.encoding = "utf-8"
    return r.text


def parse_csv_rows(text: str) -> list[dict[str, str]]:
    """Header-row CSV -> list of {column: value}; all values stay strings."""
    text = (text or "").strip()
    if not text:
        return []
    n_cols = len(pd.read_csv(io.StringIO(text), nrows=0, engine="python", index_col=False).columns)
    # surplus fields are cut off, short rows are padded with ""
    df = pd.read_csv(
        io.StringIO(text),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        engine="python",
        index_col=False,
        on_bad_lines=lambda bad: bad[:n_cols],
    )
    df.columns = [str(c).strip() for c in df.columns]
    df = df.fillna("")
    return df.to_dict(orient="records")


def fetch_rows(urls: Iterable[str], *, timeout: float | None = None, session: requests.Session | None = None) -> list[dict[str, str]]:
    rows: list[dict[str, str]] = []
    for url in urls:
        part = parse_csv_rows(fetch_csv_text(url, timeout=timeout, session=session))
        logger.debug(f"{len(part)} rows from {url}")
        rows.extend(part)
    return rows

