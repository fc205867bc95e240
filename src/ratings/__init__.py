"""Ratings hub: browse rating sheets (movies, games, peripherals).

Pipeline: fetch published CSV -> map rows to items -> filter -> sort -> render.
Surfaces: static site (ratings.ui.generator) and streamlit_app.py.
"""

from ratings._version import __version__, __build__

__all__ = ["__version__", "__build__"]
