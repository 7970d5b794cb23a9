"""Content digest computation."""

from __future__ import annotations

import errno
import hashlib
import logging
import os
import stat
from pathlib import Path
from typing import Tuple

from .errors import AccessDeniedError, ContentReadError, PathNotFoundError, UnsupportedPathError
from .models import Digests

LOGGER = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


class DigestComputer:
    """Compute MD5, SHA-1 and SHA-256 digests from one pass over a file.

    Every chunk read from the file is fed to all three accumulators, so the
    digests always describe the same byte sequence even if the file changes
    while it is being read.
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be a positive number of bytes.")
        self.chunk_size = chunk_size

    def compute(self, path: str | Path) -> Digests:
        """Return the digests of the file at ``path``.

        Args:
            path: Regular file to read.

        Returns:
            Digests: Lowercase hex digests of the file content.

        Raises:
            PathNotFoundError: If the file does not exist.
            AccessDeniedError: If the file cannot be opened for reading.
            UnsupportedPathError: If the path is not a regular file.
            ContentReadError: If reading fails part way through.
        """
        # O_NONBLOCK keeps a FIFO without writers from stalling the open call.
        # O_NOFOLLOW refuses a symlink swapped in after the caller's lstat.
        flags = (
            os.O_RDONLY
            | getattr(os, "O_NONBLOCK", 0)
            | getattr(os, "O_NOFOLLOW", 0)
            | getattr(os, "O_BINARY", 0)
        )
        try:
            fd = os.open(path, flags)
        except FileNotFoundError as exc:
            raise PathNotFoundError.from_os_error(path, "read", exc) from exc
        except PermissionError as exc:
            raise AccessDeniedError.from_os_error(path, "read", exc) from exc
        except OSError as exc:
            if exc.errno == errno.ELOOP:
                raise UnsupportedPathError(
                    path, "read", f"read failed for {path}: refusing to follow a symlink"
                ) from exc
            raise ContentReadError.from_os_error(path, "read", exc) from exc

        try:
            mode = os.fstat(fd).st_mode
            if not stat.S_ISREG(mode):
                raise UnsupportedPathError(
                    path, "read", f"read failed for {path}: not a regular file"
                )
            handle = os.fdopen(fd, "rb")
        except OSError as exc:
            os.close(fd)
            raise ContentReadError.from_os_error(path, "read", exc) from exc
        except UnsupportedPathError:
            os.close(fd)
            raise

        with handle:
            md5 = hashlib.md5()
            sha1 = hashlib.sha1()
            sha256 = hashlib.sha256()
            total = 0
            try:
                while chunk := handle.read(self.chunk_size):
                    md5.update(chunk)
                    sha1.update(chunk)
                    sha256.update(chunk)
                    total += len(chunk)
            except OSError as exc:
                raise ContentReadError.from_os_error(path, "read", exc) from exc

        LOGGER.debug("Digested %s bytes from %s", total, path)
        return Digests(md5=md5.hexdigest(), sha1=sha1.hexdigest(), sha256=sha256.hexdigest())


def compute_digests(path: str | Path) -> Tuple[str, str, str]:
    """Return ``(md5, sha1, sha256)`` hex digests for ``path``."""
    return DigestComputer().compute(path).as_tuple()


__all__ = ["DEFAULT_CHUNK_SIZE", "DigestComputer", "compute_digests"]
