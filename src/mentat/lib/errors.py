# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Error codes and exception classes for Mentat.

Single source of truth for error handling across all mentat modules.
Failures that the routing engine treats as "absent" (unreadable files,
failed fetches) never surface as these exceptions; they are reserved for
the tool boundary and for per-file catalog load failures, which the loader
catches and logs.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any


class MentatErrorCode(str, Enum):
    """Error codes surfaced at the tool boundary."""

    # Boundary errors
    UNKNOWN_TOOL = "UNKNOWN_TOOL"
    INVALID_INPUT = "INVALID_INPUT"
    ENTRY_NOT_FOUND = "ENTRY_NOT_FOUND"

    # Configuration errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # File/IO errors
    IO_ERROR = "IO_ERROR"


class MentatError(Exception):
    """Base exception class for Mentat operations.

    Attributes:
        code: Error code from MentatErrorCode
        message: Human-readable error message
        details: Additional error context
    """

    def __init__(
        self,
        code: MentatErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"MentatError(code={self.code}, message={self.message}, details={self.details})"


class CatalogLoadError(Exception):
    """Raised when a catalog entry file fails to load or validate.

    Attributes:
        path: Path to the entry file that failed.
        cause: The underlying exception that caused the failure.
    """

    def __init__(
        self, message: str, path: Path, cause: Exception | None = None
    ) -> None:
        super().__init__(message)
        self.path = path
        self.cause = cause


__all__ = [
    "CatalogLoadError",
    "MentatError",
    "MentatErrorCode",
]
