from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ActionResult:
    """Outcome of an in-place update, shown back to the user on the same page."""

    success: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def succeeded(cls, message: str) -> "ActionResult":
        return cls(success=message)

    @classmethod
    def failed(cls, message: str) -> "ActionResult":
        return cls(error=message)
