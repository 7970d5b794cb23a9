"""Assemble forensic records for filesystem paths."""

from __future__ import annotations

import logging
import os
import stat
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .classifier import classify
from .digests import DigestComputer
from .errors import AccessDeniedError, InspectionError, PathNotFoundError
from .models import Digests, FileRecord
from .ownership import resolve_principals

LOGGER = logging.getLogger(__name__)


def _metadata_error(path: str | Path, exc: OSError) -> InspectionError:
    if isinstance(exc, PermissionError):
        return AccessDeniedError.from_os_error(path, "stat", exc)
    return PathNotFoundError.from_os_error(path, "stat", exc)


class FileInspector:
    """Build a :class:`FileRecord` from one pass over a path.

    The inspector holds no per-call state, so one instance can serve many
    concurrent ``inspect`` calls.
    """

    def __init__(
        self,
        digester: DigestComputer | None = None,
        *,
        resolve_owners: bool = True,
    ) -> None:
        self.digester = digester or DigestComputer()
        self.resolve_owners = resolve_owners

    def inspect(self, path: str | Path) -> FileRecord:
        """Return the forensic record for ``path``.

        Symlinks are described, not followed: the record carries the link's
        own metadata and its one-hop target, and never digests. Directories
        and special files are recorded without digests.

        Args:
            path: File, directory, or symlink to inspect.

        Returns:
            FileRecord: Immutable record for the entry.

        Raises:
            PathNotFoundError: If the path does not exist or cannot be stat-ed.
            AccessDeniedError: If metadata or content is not accessible.
            ContentReadError: If a regular file cannot be fully read.
        """
        try:
            info = os.lstat(path)
        except OSError as exc:
            raise _metadata_error(path, exc) from exc
        LOGGER.debug("Inspecting %s (mode=%o)", path, info.st_mode)

        absolute_path = os.path.abspath(path)
        owner, group = resolve_principals(
            info.st_uid, info.st_gid, resolve_names=self.resolve_owners
        )

        link_target = ""
        if stat.S_ISLNK(info.st_mode):
            try:
                link_target = os.readlink(path)
            except OSError as exc:
                raise _metadata_error(path, exc) from exc

        digests: Optional[Digests] = None
        if stat.S_ISREG(info.st_mode):
            digests = self.digester.compute(path)

        return FileRecord(
            name=os.path.basename(absolute_path) or absolute_path,
            size=info.st_size,
            mode=info.st_mode,
            permissions=stat.filemode(info.st_mode)[1:],
            modified_at=datetime.fromtimestamp(info.st_mtime, tz=timezone.utc),
            is_directory=stat.S_ISDIR(info.st_mode),
            owner=owner,
            group=group,
            link_target=os.fspath(link_target),
            absolute_path=absolute_path,
            file_type=classify(path),
            md5=digests.md5 if digests else None,
            sha1=digests.sha1 if digests else None,
            sha256=digests.sha256 if digests else None,
        )


def inspect(path: str | Path) -> FileRecord:
    """Inspect ``path`` with default settings."""
    return FileInspector().inspect(path)


__all__ = ["FileInspector", "inspect"]
