"""Errors raised by the inspection engine and its sinks."""

from __future__ import annotations

from pathlib import Path


class InspectionError(Exception):
    """Base exception for inspection failures.

    Attributes:
        path: Path the failing operation was applied to.
        stage: Stage that failed (``stat``, ``read``, or ``write``).
    """

    def __init__(self, path: str | Path, stage: str, message: str | None = None) -> None:
        self.path = str(path)
        self.stage = stage
        super().__init__(message or f"{stage} failed for {self.path}")

    @classmethod
    def from_os_error(cls, path: str | Path, stage: str, exc: OSError) -> "InspectionError":
        """Build an error that keeps the OS error details in its message.

        Args:
            path: Path the failing operation was applied to.
            stage: Stage that failed.
            exc: Underlying OS error.

        Returns:
            InspectionError: Instance of ``cls``; callers chain ``exc`` as the cause.
        """
        reason = exc.strerror or str(exc)
        error = cls(path, stage, f"{stage} failed for {path}: {reason}")
        error.errno = exc.errno  # type: ignore[misc]
        return error


class PathNotFoundError(InspectionError, FileNotFoundError):
    """Raised when the inspected path does not exist or cannot be stat-ed."""


class AccessDeniedError(InspectionError, PermissionError):
    """Raised when metadata or content is not accessible with current privileges."""


class ContentReadError(InspectionError, OSError):
    """Raised when file content cannot be fully read."""


class PersistError(InspectionError, OSError):
    """Raised when a record cannot be written to its destination."""


class UnsupportedPathError(InspectionError):
    """Raised when an operation is asked to read a path kind it cannot handle."""


__all__ = [
    "InspectionError",
    "PathNotFoundError",
    "AccessDeniedError",
    "ContentReadError",
    "PersistError",
    "UnsupportedPathError",
]
