"""Base exception shared by all VITAE contexts."""

from pathlib import Path
from typing import Optional


class VitaeError(Exception):
    """
    Base class for fatal build errors.

    Attributes:
        message: Error description
        path: File involved in the failure (if any)
        original_error: The underlying exception (if any)
    """

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        original_error: Optional[BaseException] = None,
    ):
        self.message = message
        self.path = path
        self.original_error = original_error

        parts = [message]

        if path is not None:
            parts.append(f"Path: {path}")

        if original_error is not None:
            parts.append(f"Original error: {type(original_error).__name__}: {original_error}")

        super().__init__("\n".join(parts))
