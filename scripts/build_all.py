from __future__ import annotations

"""Registry gate, then the static site.

  python scripts/build_all.py [--config PATH] [--out PATH] [--category KEY ...]

The gate's "not configured" result (exit 2) stops the build the same way
a failing registry does. Ctrl+C exits with 2.
"""

import argparse
from dataclasses import dataclass
import subprocess
import sys
import time

from ratings.data.io.paths import project_root


@dataclass
class Step:
    title: str
    cmd: list[str]
    returncode: int | None = None
    seconds: float = 0.0

    def run(self) -> int:
        print(f"\n▶ {self.title}")
        started = time.perf_counter()
        self.returncode = subprocess.run(self.cmd, cwd=project_root(), check=False).returncode
        self.seconds = time.perf_counter() - started
        mark = "✅" if self.returncode == 0 else f"❌ ({self.returncode})"
        print(f"{mark} {self.title} [{self.seconds:.1f}s]")
        return self.returncode


def plan(ns: argparse.Namespace) -> list[Step]:
    py = sys.executable
    cfg = ["--config", ns.config] if ns.config else []
    build = [py, "-m", "ratings.ui.generator", *cfg]
    if ns.out:
        build += ["--out", ns.out]
    for key in ns.category:
        build += ["--category", key]
    return [
        Step("registry gate", [py, "scripts/validate_registry.py", *cfg]),
        Step("static site", build),
    ]


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Validate the registry and build the ratings site")
    ap.add_argument("--config", default=None, help="category registry JSON")
    ap.add_argument("--out", default=None, help="output HTML path")
    ap.add_argument("--category", action="append", default=[], help="only build these categories")
    ns = ap.parse_args(argv)

    try:
        for step in plan(ns):
            if step.run() != 0:
                print(f"\n⛔ Stopped at: {step.title}")
                return 1
    except KeyboardInterrupt:
        print("\n⛔ Interrupted")
        return 2

    print(f"\n✅ Site ready: {ns.out or 'artifacts/site/index.html'}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
