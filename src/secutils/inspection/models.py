"""Data models produced by the inspection engine."""

from __future__ import annotations

import stat
from datetime import datetime
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict


class InspectionModel(BaseModel):
    """Shared configuration for immutable inspection models."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class FileType(InspectionModel):
    """Extension-based classification of a path.

    Attributes:
        extension: Matched extension including the leading dot, or ``unknown``.
        description: Human-readable description of the extension.
    """

    extension: str
    description: str


class Digests(InspectionModel):
    """Content digests computed over a single read of a file."""

    md5: str
    sha1: str
    sha256: str

    def as_tuple(self) -> Tuple[str, str, str]:
        return (self.md5, self.sha1, self.sha256)


_KIND_CHECKS = (
    (stat.S_ISLNK, "symlink"),
    (stat.S_ISDIR, "directory"),
    (stat.S_ISREG, "file"),
    (stat.S_ISFIFO, "fifo"),
    (stat.S_ISSOCK, "socket"),
    (stat.S_ISCHR, "char_device"),
    (stat.S_ISBLK, "block_device"),
)


class FileRecord(InspectionModel):
    """Forensic fingerprint of a single filesystem entry.

    Attributes:
        name: Base name of the inspected path.
        size: Size in bytes as reported by ``lstat``.
        mode: Raw ``st_mode`` bits, including the file-type bits.
        permissions: ``ls``-style permission string such as ``rwxr-xr-x``.
        modified_at: Last modification time in UTC.
        is_directory: Whether the entry is a directory.
        owner: Owning user name, or the numeric uid as a string.
        group: Owning group name, or the numeric gid as a string.
        link_target: Immediate symlink target; empty for non-links.
        absolute_path: Absolute form of the inspected path.
        file_type: Extension classification.
        md5: MD5 hex digest for regular files, otherwise ``None``.
        sha1: SHA-1 hex digest for regular files, otherwise ``None``.
        sha256: SHA-256 hex digest for regular files, otherwise ``None``.
    """

    name: str
    size: int
    mode: int
    permissions: str
    modified_at: datetime
    is_directory: bool
    owner: str
    group: str
    link_target: str = ""
    absolute_path: str
    file_type: FileType
    md5: Optional[str] = None
    sha1: Optional[str] = None
    sha256: Optional[str] = None

    @property
    def kind(self) -> str:
        """Return the entry kind derived from the mode bits."""
        for check, label in _KIND_CHECKS:
            if check(self.mode):
                return label
        return "unknown"

    @property
    def octal_permissions(self) -> str:
        return oct(stat.S_IMODE(self.mode))

    @property
    def has_digests(self) -> bool:
        return self.sha256 is not None


__all__ = ["InspectionModel", "FileType", "Digests", "FileRecord"]
