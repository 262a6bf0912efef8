from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

NEW_MARKER: str = "new"


@dataclass(slots=True)
class Trail:
    code: str
    reason: list[list[Any]] = field(default_factory=list)
    where: list[str] = field(default_factory=list)  # one call site per reason entry

    def append(self, items: list[Any], at: str) -> None:
        self.reason.append(items)
        self.where.append(at)

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "reason": self.reason, "where": self.where}
