from __future__ import annotations

"""Where the checkout lives: ``configs/``, ``artifacts/`` and relative paths.

The project root is the first directory holding ``pyproject.toml`` next to
``src/``. It is searched upwards from this module (editable install or
plain checkout) and then from the working directory, so a regular
``pip install .`` still finds ``configs/categories.json`` when the CLI is
started inside the checkout.
"""

from pathlib import Path


def _is_root(p: Path) -> bool:
    return (p / "pyproject.toml").is_file() and (p / "src").is_dir()


def find_root(*starts: Path) -> Path | None:
    for start in starts:
        for p in [start, *start.parents]:
            if _is_root(p):
                return p
    return None


def project_root() -> Path:
    return find_root(Path(__file__).resolve().parent, Path.cwd().resolve()) or Path.cwd().resolve()


def resolve(path: str | Path) -> Path:
    """Absolute paths stay as they are, relative ones hang off the project root."""
    p = Path(path)
    return p if p.is_absolute() else project_root() / p


def artifacts_dir() -> Path:
    p = project_root() / "artifacts"
    p.mkdir(parents=True, exist_ok=True)
    return p


def configs_dir() -> Path:
    return project_root() / "configs"
