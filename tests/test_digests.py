"""Tests for the single-pass digest computer."""

from __future__ import annotations

import errno
import hashlib
import os
from pathlib import Path

import pytest

from secutils.inspection import (
    ContentReadError,
    DigestComputer,
    PathNotFoundError,
    UnsupportedPathError,
    compute_digests,
)
from secutils.inspection import digests as digests_module

EMPTY_MD5 = "d41d8cd98f00b204e9800998ecf8427e"
EMPTY_SHA1 = "da39a3ee5e6b4b0d3255bfef95601890afd80709"
EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def _reference(data: bytes) -> tuple[str, str, str]:
    return (
        hashlib.md5(data).hexdigest(),
        hashlib.sha1(data).hexdigest(),
        hashlib.sha256(data).hexdigest(),
    )


def test_empty_file_yields_empty_input_digests(tmp_path: Path) -> None:
    path = tmp_path / "empty.bin"
    path.write_bytes(b"")

    assert compute_digests(path) == (EMPTY_MD5, EMPTY_SHA1, EMPTY_SHA256)


def test_digests_match_reference_across_chunk_boundaries(tmp_path: Path) -> None:
    data = os.urandom(1000) + b"tail"
    path = tmp_path / "blob.bin"
    path.write_bytes(data)

    result = DigestComputer(chunk_size=7).compute(path)

    assert result.as_tuple() == _reference(data)
    assert result.sha256 == result.sha256.lower()


def test_chunk_size_must_be_positive() -> None:
    with pytest.raises(ValueError):
        DigestComputer(chunk_size=0)


def test_missing_file_raises_path_not_found(tmp_path: Path) -> None:
    with pytest.raises(PathNotFoundError) as excinfo:
        compute_digests(tmp_path / "missing.bin")

    assert excinfo.value.stage == "read"
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


def test_directory_is_not_digested(tmp_path: Path) -> None:
    with pytest.raises(UnsupportedPathError) as excinfo:
        compute_digests(tmp_path)

    assert excinfo.value.stage == "read"


@pytest.mark.skipif(not os.path.isdir("/proc/self/fd"), reason="needs /proc/self/fd")
def test_rejected_directory_does_not_leak_descriptors(tmp_path: Path) -> None:
    before = len(os.listdir("/proc/self/fd"))

    for _ in range(20):
        with pytest.raises(UnsupportedPathError):
            compute_digests(tmp_path)

    assert len(os.listdir("/proc/self/fd")) <= before


@pytest.mark.skipif(not hasattr(os, "O_NOFOLLOW"), reason="O_NOFOLLOW unavailable")
def test_symlink_to_regular_file_is_not_followed(tmp_path: Path) -> None:
    target = tmp_path / "target.bin"
    target.write_bytes(b"payload")
    link = tmp_path / "link.bin"
    os.symlink(target, link)

    with pytest.raises(UnsupportedPathError) as excinfo:
        compute_digests(link)

    assert excinfo.value.stage == "read"
    assert compute_digests(target) == _reference(b"payload")


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="FIFOs require POSIX")
def test_fifo_is_rejected_without_blocking(tmp_path: Path) -> None:
    fifo = tmp_path / "pipe"
    os.mkfifo(fifo)

    with pytest.raises(UnsupportedPathError):
        compute_digests(fifo)


def test_read_failure_aborts_without_partial_digests(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    path = tmp_path / "flaky.bin"
    path.write_bytes(b"x" * 100)
    real_fdopen = os.fdopen

    class _ExplodingHandle:
        def __init__(self, handle):
            self._handle = handle

        def fileno(self) -> int:
            return self._handle.fileno()

        def read(self, size: int) -> bytes:
            raise OSError(errno.EIO, "Input/output error")

        def __enter__(self) -> "_ExplodingHandle":
            return self

        def __exit__(self, *exc_info: object) -> None:
            self._handle.close()

    monkeypatch.setattr(
        digests_module.os, "fdopen", lambda fd, mode: _ExplodingHandle(real_fdopen(fd, mode))
    )

    with pytest.raises(ContentReadError) as excinfo:
        DigestComputer().compute(path)

    assert excinfo.value.stage == "read"
    assert "Input/output error" in str(excinfo.value)
    assert isinstance(excinfo.value, OSError)
