"""JSON sink for inspection records."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, List

from pydantic import ValidationError

from .errors import AccessDeniedError, ContentReadError, PathNotFoundError, PersistError
from .models import FileRecord


def record_payload(record: FileRecord) -> dict:
    """Return the JSON-compatible mapping written for ``record``."""
    return record.model_dump(mode="json")


def persist(record: FileRecord, destination: str | Path, *, indent: int = 2) -> Path:
    """Write ``record`` as a single JSON object, replacing any existing file.

    Args:
        record: Record to serialize.
        destination: Output file path.
        indent: JSON indentation width.

    Returns:
        Path: The written destination.

    Raises:
        PersistError: If the destination cannot be created or written.
    """
    return _write(destination, record_payload(record), indent=indent)


def persist_many(
    records: Iterable[FileRecord], destination: str | Path, *, indent: int = 2
) -> Path:
    """Write several records as one JSON array."""
    return _write(destination, [record_payload(record) for record in records], indent=indent)


def load_record(source: str | Path) -> FileRecord:
    """Read a record previously written by :func:`persist`.

    Raises:
        PathNotFoundError: If ``source`` does not exist.
        AccessDeniedError: If ``source`` cannot be read.
        ContentReadError: If the document is unreadable or not a valid record.
    """
    path = Path(source)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise PathNotFoundError.from_os_error(path, "read", exc) from exc
    except PermissionError as exc:
        raise AccessDeniedError.from_os_error(path, "read", exc) from exc
    except OSError as exc:
        raise ContentReadError.from_os_error(path, "read", exc) from exc

    try:
        return FileRecord.model_validate(json.loads(text))
    except (json.JSONDecodeError, ValidationError) as exc:
        message = f"read failed for {path}: invalid record: {exc}"
        raise ContentReadError(path, "read", message) from exc


def load_records(source: str | Path) -> List[FileRecord]:
    """Read a JSON array written by :func:`persist_many`."""
    path = Path(source)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ContentReadError.from_os_error(path, "read", exc) from exc
    except json.JSONDecodeError as exc:
        raise ContentReadError(path, "read", f"read failed for {path}: {exc}") from exc
    if not isinstance(data, list):
        raise ContentReadError(path, "read", f"read failed for {path}: expected a JSON array")
    try:
        return [FileRecord.model_validate(item) for item in data]
    except ValidationError as exc:
        message = f"read failed for {path}: invalid record: {exc}"
        raise ContentReadError(path, "read", message) from exc


def _write(destination: str | Path, payload: object, *, indent: int) -> Path:
    path = Path(destination)
    try:
        path.write_text(json.dumps(payload, indent=indent or None) + "\n", encoding="utf-8")
    except OSError as exc:
        raise PersistError.from_os_error(path, "write", exc) from exc
    return path


__all__ = ["persist", "persist_many", "load_record", "load_records", "record_payload"]
