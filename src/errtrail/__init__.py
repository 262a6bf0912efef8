from __future__ import annotations

from .errors import NO_DATA, TrailError, annotate, equal, new, normalize, parse

__version__ = "0.1.0"

__all__ = [
    "NO_DATA",
    "TrailError",
    "annotate",
    "equal",
    "new",
    "normalize",
    "parse",
]
