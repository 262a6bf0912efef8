from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Result(Generic[T, E]):
    """Outcome of a step that reports failure as a value.

    Exactly one of ``value`` and ``error`` is meaningful; ``ok`` is derived from
    ``error`` so a failed result can never carry a value.
    """

    value: T | None
    error: E | None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T, E]":
        return cls(value, None)

    @classmethod
    def failure(cls, error: E) -> "Result[T, E]":
        return cls(None, error)

    def value_or(self, default: T) -> T:
        if self.error is None and self.value is not None:
            return self.value
        return default
