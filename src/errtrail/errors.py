"""Errors that remember where they have been.

A :class:`TrailError` carries a stable ``code`` (the only thing compared by
:func:`equal`) plus a trail of reasons, one entry per place that annotated it,
each paired with the ``func(file:line)`` of that place::

    def load(key):
        if key not in store:
            raise TrailError("data not found").annotate(key)
        return store[key]

    def fetch(key, default):
        try:
            return load(key)
        except TrailError as err:
            if err == NO_DATA:
                return default
            raise err.annotate(default)
        except OSError as exc:
            raise annotate(exc, key) from exc

``str()`` of a record is its JSON form, so a record that crossed a process
boundary as text is rebuilt with :func:`parse` (or :func:`normalize` when it
arrives wrapped in some other exception) with its history intact.
"""

from __future__ import annotations

import logging
from typing import Any

from .callsite import caller
from .codec import DecodeIssue, decode, encode
from .models import NEW_MARKER, Trail
from .result import Result

logger: logging.Logger = logging.getLogger(__name__)


class TrailError(Exception):
    """Error with a comparable code and an append-only trail of reasons.

    ``TrailError(code)`` starts the trail with ``["new"]`` at the constructing
    call site. Passing ``reason`` and ``where`` rebuilds a record from an
    existing history; both must have the same length.

    Instances are mutable through :meth:`annotate` and are not synchronized:
    share one between threads only behind a lock.
    """

    trail: Trail

    def __init__(
        self,
        code: str,
        reason: list[list[Any]] | None = None,
        where: list[str] | None = None,
    ) -> None:
        super().__init__(code)
        if reason is None and where is None:
            self.trail = Trail(code=code, reason=[[NEW_MARKER]], where=[caller(2)])
            return
        reasons: list[list[Any]] = [list(entry) for entry in reason or ()]
        locations: list[str] = list(where or ())
        if len(reasons) != len(locations):
            raise ValueError(f"{len(reasons)} reason entries for {len(locations)} locations")
        self.trail = Trail(code=code, reason=reasons, where=locations)

    @property
    def code(self) -> str:
        return self.trail.code

    @property
    def reason(self) -> list[list[Any]]:
        return self.trail.reason

    @property
    def where(self) -> list[str]:
        return self.trail.where

    def annotate(self, *items: Any) -> TrailError:
        """Append ``items`` as one reason entry with the caller's location.

        Returns ``self`` so calls chain: ``raise err.annotate(a).annotate(b)``.
        """
        self.trail.append(list(items), caller(2))
        return self

    def equal(self, other: BaseException | None) -> bool:
        return equal(self, other)

    def to_dict(self) -> dict[str, Any]:
        return self.trail.to_dict()

    def to_json(self) -> str:
        return encode(self.trail)

    def __str__(self) -> str:
        return encode(self.trail)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TrailError):
            return NotImplemented
        return self.code == other.code

    def __hash__(self) -> int:
        return hash(self.code)

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self.code, self.reason, self.where))


def new(code: str) -> TrailError:
    return TrailError(code, [[NEW_MARKER]], [caller(2)])


def _from_text(src: str, at: str) -> TrailError:
    opaque: Trail = Trail(code=src, reason=[[NEW_MARKER]], where=[at])
    if not src.startswith("{"):
        return TrailError(opaque.code, opaque.reason, opaque.where)
    decoded: Result[Trail, DecodeIssue] = decode(src)
    issue: DecodeIssue | None = decoded.error
    if issue is not None:
        logger.debug("treating text as an opaque code: %s at %s: %s", issue.code, issue.path, issue.message)
    trail: Trail = decoded.value_or(opaque)
    return TrailError(trail.code, trail.reason, trail.where)


def _from_foreign(err: BaseException, at: str) -> TrailError:
    text: str = str(err)
    if not text:
        # no message, e.g. ``raise KeyboardInterrupt()``
        text = type(err).__name__
    return _from_text(text, at)


def parse(src: str) -> TrailError | None:
    """Rebuild a record from its text form.

    Text that is not a serialized record (no leading ``{``, invalid JSON, or
    the wrong shape) becomes the code of a new record. Empty text gives None.
    """
    if not src:
        return None
    return _from_text(src, caller(2))


def normalize(err: BaseException | None) -> TrailError | None:
    """Return ``err`` itself if it is a :class:`TrailError`, else a new record
    parsed from its message. History of foreign errors is not kept."""
    if err is None:
        return None
    if isinstance(err, TrailError):
        return err
    return _from_foreign(err, caller(2))


def annotate(err: BaseException | None, *items: Any) -> TrailError | None:
    """Append ``items`` to the trail of ``err``.

    A :class:`TrailError` is annotated in place and returned. Any other error is
    first converted with :func:`normalize`, so the result is a new record and
    ``err`` is left untouched.
    """
    if err is None:
        return None
    record: TrailError = err if isinstance(err, TrailError) else _from_foreign(err, caller(2))
    record.trail.append(list(items), caller(2))
    return record


def equal(first: BaseException | None, second: BaseException | None) -> bool:
    """Compare two errors by code.

    The same object (or two Nones) is always equal; None never equals an error.
    Otherwise both sides are normalized and their codes compared, so a
    ``ValueError("timeout")`` equals ``TrailError("timeout")``.
    """
    if first is second:
        return True
    if first is None or second is None:
        return False
    left: TrailError = first if isinstance(first, TrailError) else _from_foreign(first, caller(2))
    right: TrailError = second if isinstance(second, TrailError) else _from_foreign(second, caller(2))
    return left.code == right.code


# Shared by every caller; annotate ``parse(str(NO_DATA))`` rather than this.
NO_DATA: TrailError = TrailError("data not found")
