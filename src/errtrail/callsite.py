from __future__ import annotations

import sys
from types import FrameType

UNKNOWN_CALLER: str = "domain of caller is unknown"
UNNAMED_FUNC: str = "domain of func is unnamed"
UNNAMED_FILE: str = "domain of file is unnamed"


def _last_segment(path: str) -> str:
    return path.replace("\\", "/").rsplit("/", 1)[-1]


def caller(depth: int) -> str:
    """Describe a frame of the active call stack as ``func(file:line)``.

    ``depth`` counts from this function: 0 is ``caller`` itself, 1 the function
    that called it, 2 that function's caller, and so on. When the frame or its
    names are unavailable one of the ``domain of ...`` sentinels is returned.
    """
    if depth < 0:
        return UNKNOWN_CALLER
    try:
        frame: FrameType = sys._getframe(depth)
    except ValueError:
        return UNKNOWN_CALLER
    try:
        func_name: str = getattr(frame.f_code, "co_qualname", "") or frame.f_code.co_name
        file_name: str = _last_segment(frame.f_code.co_filename or "")
        line: int | None = frame.f_lineno
    finally:
        del frame
    if not func_name:
        return UNNAMED_FUNC
    if not file_name:
        return UNNAMED_FILE
    return f"{func_name}({file_name}:{line if line is not None else 0})"
