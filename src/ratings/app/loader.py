from __future__ import annotations

"""Fetch-and-map per category, at most once.

``ensure_loaded`` checks and sets the in-flight flag under the state lock,
so repeated navigation to a category that is still loading returns the
pending future instead of starting a second fetch. A failed load is final
for the lifetime of the state (no retry).
"""

from concurrent.futures import Future, ThreadPoolExecutor
from functools import partial
import logging
from typing import Callable, Sequence

from ratings.app.state import AppState
from ratings.data.io.fetch import fetch_rows
from ratings.data.schema.records import Item, map_rows

logger = logging.getLogger(__name__)

Fetcher = Callable[[Sequence[str]], list]


class CategoryLoader:
    def __init__(
        self,
        state: AppState,
        *,
        fetcher: Fetcher | None = None,
        max_workers: int = 4,
        timeout: float | None = None,
    ):
        self.state = state
        self.registry = state.registry
        self._fetch = fetcher or partial(fetch_rows, timeout=timeout)
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="ratings-load")

    def __enter__(self) -> CategoryLoader:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def ensure_loaded(self, key: str) -> Future:
        descriptor = self.registry[key]
        with self.state.lock:
            vs = self.state.view(key)
            if vs.future is not None:
                return vs.future

            if not descriptor.linked:
                logger.info(f"{key}: sources not linked yet, nothing to fetch")
                vs.items = ()
                done: Future = Future()
                done.set_result(vs.items)
                vs.future = done
                return done

            # submit raises once the loader is closed; leave the slot untouched then
            future = self._executor.submit(self._load, key)
            vs.loading = True
            vs.future = future
            return future

    def wait(self, key: str, timeout: float | None = None) -> tuple[Item, ...]:
        return self.ensure_loaded(key).result(timeout=timeout)

    def _load(self, key: str) -> tuple[Item, ...]:
        descriptor = self.registry[key]
        urls = self.registry.source_urls(key)
        logger.info(f"🔍 Loading {key} from {len(urls)} source(s)...")
        try:
            rows = self._fetch(urls)
            items = tuple(map_rows(rows, descriptor))
        except Exception as e:
            # one broken category must not take the others down
            logger.exception(f"❌ {descriptor.label} CSV error: {e}")
            with self.state.lock:
                vs = self.state.view(key)
                vs.items = ()
                vs.error = str(e) or type(e).__name__
                vs.loading = False
            return ()

        with self.state.lock:
            vs = self.state.view(key)
            vs.items = items
            vs.loading = False
        dropped = len(rows) - len(items)
        logger.info(f"✅ {key}: {len(items)} items" + (f" ({dropped} rows without title dropped)" if dropped else ""))
        return items
