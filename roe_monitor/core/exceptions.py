"""Exceptions raised by the series core."""

from typing import Optional


class UnanchoredPointError(ValueError):
    """Raised when a point carries neither a collateral nor a borrow timestamp."""

    def __init__(self, note: Optional[str] = None):
        message = "Point has no collateral or borrow timestamp"
        if note:
            message = f"{message} ({note})"
        super().__init__(message)
        self.note = note
