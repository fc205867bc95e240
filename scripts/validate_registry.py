"""Validate the category registry.

A lightweight gate so a typo in configs/categories.json (unknown mapper,
sort mode or search field, duplicate keys/mount ids) fails before the
site is built instead of producing a half-empty page.

Usage
-----
  python scripts/validate_registry.py
  python scripts/validate_registry.py --config configs/categories.json

Exit codes
----------
0 = OK
1 = FAIL
2 = Not configured (missing config)
"""

from __future__ import annotations

import argparse
from pathlib import Path

from ratings.config.settings import load_settings
from ratings.registry.load import build_registry, read_config, validate_registry


def main(argv: list[str] | None = None) -> int:
    settings = load_settings()
    ap = argparse.ArgumentParser()
    ap.add_argument("--config", default=str(settings.categories_path))
    args = ap.parse_args(argv)

    path = Path(args.config)
    if not path.exists():
        print("❌ Not configured")
        print(f" - missing config: {path.as_posix()}")
        return 2

    try:
        registry = build_registry(read_config(path), published_base=settings.published_base)
    except (RuntimeError, TypeError) as e:
        print(f"❌ Registry FAIL: {path.as_posix()}")
        print(" -", e)
        return 1

    res = validate_registry(registry)
    if res.ok:
        print(f"✅ Registry OK: {path.as_posix()} ({res.summary()})")
        for w in res.warnings:
            print("⚠️", w)
        return 0

    print(f"❌ Registry FAIL: {path.as_posix()} ({res.summary()})")
    for e in res.errors:
        print(" -", e)
    for w in res.warnings:
        print("⚠️", w)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
