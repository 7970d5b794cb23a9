"""Indicator-of-compromise extraction for text based files."""

from __future__ import annotations

import ipaddress
import logging
import re
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

from pydantic import BaseModel, Field

from secutils.inspection.classifier import EXTENSION_DESCRIPTIONS
from secutils.inspection.errors import (
    AccessDeniedError,
    ContentReadError,
    InspectionError,
    PathNotFoundError,
    UnsupportedPathError,
)

LOGGER = logging.getLogger(__name__)

INDICATOR_KINDS = ("ipv4", "url", "email", "domain", "md5", "sha1", "sha256")
BINARY_SNIFF_BYTES = 8192
DEFAULT_MAX_FILE_SIZE = 25 * 1024 * 1024

_DEFANG_REPLACEMENTS = (
    (re.compile(r"hxxp", re.IGNORECASE), "http"),
    (re.compile(r"\[\.\]|\(\.\)|\{\.\}|\[dot\]", re.IGNORECASE), "."),
    (re.compile(r"\[:\]"), ":"),
    (re.compile(r"\[@\]|\[at\]", re.IGNORECASE), "@"),
)

_URL = re.compile(r"\b(?:https?|ftp)://[^\s<>\"'`]+", re.IGNORECASE)
_EMAIL = re.compile(r"\b[A-Za-z0-9._%+-]+@(?:[A-Za-z0-9-]+\.)+[A-Za-z]{2,63}\b")
_IPV4 = re.compile(r"\b(?:\d{1,3}\.){3}\d{1,3}\b")
_DOMAIN = re.compile(
    r"\b(?:[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?\.)+[A-Za-z]{2,63}\b"
)
_HASHES = (
    ("md5", re.compile(r"\b[A-Fa-f0-9]{32}\b")),
    ("sha1", re.compile(r"\b[A-Fa-f0-9]{40}\b")),
    ("sha256", re.compile(r"\b[A-Fa-f0-9]{64}\b")),
)
_URL_TRAILING = ".,;:!?)]}>"

# Names such as "report.pdf" or "notes.txt" look like domains; drop those suffixes
# unless they are also delegated top-level domains.
_DELEGATED_TLD_SUFFIXES = frozenset({".md", ".py", ".rs", ".sh", ".so", ".zip"})
_FILENAME_SUFFIXES = (
    frozenset(ext.lower() for ext in EXTENSION_DESCRIPTIONS)
    | {".ini", ".cfg", ".conf", ".bin", ".dat", ".java", ".ts"}
) - _DELEGATED_TLD_SUFFIXES


class IocReport(BaseModel):
    """Indicators found in one text source, grouped by kind."""

    source: str
    indicators: Dict[str, List[str]] = Field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(len(values) for values in self.indicators.values())


class IocScan(BaseModel):
    """Reports and per-file failures collected from a directory."""

    root: str
    reports: List[IocReport] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)


def refang(text: str) -> str:
    """Undo common defanging such as ``hxxp://`` and ``example[.]com``."""
    for pattern, replacement in _DEFANG_REPLACEMENTS:
        text = pattern.sub(replacement, text)
    return text


def _dedupe(values: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(values))


def _blank_spans(text: str, spans: Iterable[Tuple[int, int]]) -> str:
    chars = list(text)
    for start, end in spans:
        chars[start:end] = " " * (end - start)
    return "".join(chars)


def _valid_ipv4(candidate: str) -> bool:
    try:
        ipaddress.IPv4Address(candidate)
    except ValueError:
        return False
    return True


class IocExtractor:
    """Extract network and hash indicators from text."""

    def __init__(self, max_file_size: int = DEFAULT_MAX_FILE_SIZE) -> None:
        self.max_file_size = max_file_size

    def extract_text(self, text: str, *, source: str = "<text>") -> IocReport:
        """Return the indicators found in ``text``.

        Args:
            text: Text to scan; defanged indicators are refanged first.
            source: Label recorded on the report.

        Returns:
            IocReport: Indicators grouped by kind, de-duplicated in first-seen order.
        """
        text = refang(text)
        found: Dict[str, List[str]] = {kind: [] for kind in INDICATOR_KINDS}

        url_matches = list(_URL.finditer(text))
        found["url"] = _dedupe(match.group(0).rstrip(_URL_TRAILING) for match in url_matches)
        email_matches = list(_EMAIL.finditer(text))
        found["email"] = _dedupe(match.group(0).lower() for match in email_matches)

        remainder = _blank_spans(
            text, [match.span() for match in (*url_matches, *email_matches)]
        )
        found["ipv4"] = _dedupe(
            candidate for candidate in _IPV4.findall(text) if _valid_ipv4(candidate)
        )
        found["domain"] = _dedupe(
            domain.lower()
            for domain in _DOMAIN.findall(remainder)
            if "." + domain.rsplit(".", 1)[-1].lower() not in _FILENAME_SUFFIXES
        )
        for kind, pattern in _HASHES:
            found[kind] = _dedupe(value.lower() for value in pattern.findall(text))

        return IocReport(
            source=source,
            indicators={kind: values for kind, values in found.items() if values},
        )

    def extract_file(self, path: str | Path) -> IocReport:
        """Return the indicators found in the text file at ``path``.

        Raises:
            PathNotFoundError: If the file does not exist.
            AccessDeniedError: If the file cannot be read.
            UnsupportedPathError: If the path is not a regular text file within the size limit.
            ContentReadError: If reading fails.
        """
        file_path = Path(path)
        try:
            info = file_path.stat()
        except FileNotFoundError as exc:
            raise PathNotFoundError.from_os_error(file_path, "stat", exc) from exc
        except PermissionError as exc:
            raise AccessDeniedError.from_os_error(file_path, "stat", exc) from exc
        except OSError as exc:
            raise PathNotFoundError.from_os_error(file_path, "stat", exc) from exc

        if not file_path.is_file():
            raise UnsupportedPathError(
                file_path, "read", f"read failed for {file_path}: not a regular file"
            )
        if info.st_size > self.max_file_size:
            raise UnsupportedPathError(
                file_path,
                "read",
                f"read failed for {file_path}: {info.st_size} bytes exceeds the "
                f"{self.max_file_size} byte limit",
            )

        try:
            data = file_path.read_bytes()
        except PermissionError as exc:
            raise AccessDeniedError.from_os_error(file_path, "read", exc) from exc
        except OSError as exc:
            raise ContentReadError.from_os_error(file_path, "read", exc) from exc

        if b"\x00" in data[:BINARY_SNIFF_BYTES]:
            raise UnsupportedPathError(
                file_path, "read", f"read failed for {file_path}: binary content"
            )

        return self.extract_text(data.decode("utf-8", errors="replace"), source=str(file_path))

    def extract_directory(self, root: str | Path, *, recursive: bool = False) -> IocScan:
        """Scan the regular files under ``root``, recording skipped files as errors."""
        root_path = Path(root)
        candidates = root_path.rglob("*") if recursive else root_path.iterdir()
        reports: List[IocReport] = []
        errors: List[str] = []
        for path in sorted(candidates):
            if path.is_symlink() or not path.is_file():
                continue
            try:
                reports.append(self.extract_file(path))
            except InspectionError as exc:
                LOGGER.warning("Skipping %s: %s", path, exc)
                errors.append(f"{path}: {exc}")
        return IocScan(root=str(root_path), reports=reports, errors=errors)


__all__ = [
    "INDICATOR_KINDS",
    "IocExtractor",
    "IocReport",
    "IocScan",
    "refang",
]
