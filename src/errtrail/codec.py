from __future__ import annotations

import json
import logging
import math
import sys
from dataclasses import dataclass
from typing import Any, Mapping

import jsonschema

from .models import Trail
from .result import Result
from .schema import trail_validator

logger: logging.Logger = logging.getLogger(__name__)

_SEPARATORS: tuple[str, str] = (",", ":")


@dataclass(frozen=True, slots=True)
class DecodeIssue:
    code: str  # "json", "schema" or "shape"
    message: str
    path: str


def _default(obj: object) -> object:
    if isinstance(obj, Trail):
        return obj.to_dict()
    if isinstance(obj, BaseException):
        # nested records keep their own history
        trail: object = getattr(obj, "trail", None)
        if isinstance(trail, Trail):
            return trail.to_dict()
        return str(obj)
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=repr)
    return repr(obj)


def _too_long(number: int) -> bool:
    limit: int = sys.get_int_max_str_digits()
    # at least 3 bits per decimal digit, so this trips before int -> str does
    return limit > 0 and number.bit_length() > 3 * limit


def _json_safe(obj: object) -> object:
    if isinstance(obj, float) and not math.isfinite(obj):
        return repr(obj)  # "nan", "inf", "-inf"
    if isinstance(obj, int) and not isinstance(obj, bool) and _too_long(obj):
        return hex(obj)
    if isinstance(obj, dict):
        return {key: _json_safe(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_json_safe(item) for item in obj]
    return obj


def _dumps(payload: object) -> str:
    return json.dumps(
        payload,
        default=_default,
        sort_keys=True,
        separators=_SEPARATORS,
        allow_nan=False,
    )


def encode(trail: Trail) -> str:
    """Render a trail as compact, strict JSON with sorted keys.

    NaN and infinities are written as the strings ``"nan"``, ``"inf"`` and
    ``"-inf"``, integers too long for ``str()`` as hex strings. Never raises:
    when the payload still cannot be encoded (mixed dict keys, cycles) a plain
    ``str`` dump of the payload is returned instead.
    """
    payload: dict[str, Any] = trail.to_dict()
    try:
        try:
            return _dumps(payload)
        except ValueError:
            return _dumps(_json_safe(payload))
    except (TypeError, ValueError, RecursionError) as exc:
        logger.warning("falling back to text dump for %r: %s", trail.code, exc)
        return f"{payload}"


def decode(src: str) -> Result[Trail, DecodeIssue]:
    try:
        obj: object = json.loads(src)
    except json.JSONDecodeError as exc:
        return Result.failure(DecodeIssue(code="json", message=exc.msg, path=f"{exc.lineno}:{exc.colno}"))
    except (ValueError, RecursionError) as exc:
        # valid syntax the interpreter still refuses, e.g. over-long integers
        return Result.failure(DecodeIssue(code="json", message=str(exc), path="$"))
    try:
        trail_validator().validate(obj)
    except jsonschema.ValidationError as exc:
        return Result.failure(DecodeIssue(code="schema", message=exc.message, path=exc.json_path))
    if not isinstance(obj, Mapping):
        return Result.failure(DecodeIssue(code="shape", message="payload is not an object", path="$"))
    reason: list[list[Any]] = [list(entry) for entry in obj["reason"]]
    where: list[str] = list(obj["where"])
    if len(reason) != len(where):
        return Result.failure(
            DecodeIssue(
                code="shape",
                message=f"{len(reason)} reason entries for {len(where)} locations",
                path="$",
            )
        )
    return Result.success(Trail(code=obj["code"], reason=reason, where=where))
