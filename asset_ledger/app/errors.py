from __future__ import annotations

from typing import Optional


class ValidationError(ValueError):
    """Raised when an asset cannot be depreciated meaningfully (e.g. zero useful life)."""

    def __init__(self, message: str, *, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict[str, Optional[str]]:
        return {"detail": self.message, "field": self.field}
