"""Batch inspection across directory trees."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, List

from pydantic import BaseModel, ConfigDict, Field

from .errors import InspectionError
from .inspector import FileInspector
from .models import FileRecord

LOGGER = logging.getLogger(__name__)


def _is_hidden(path: Path) -> bool:
    return any(part.startswith(".") for part in path.parts if part not in (".", ".."))


class InspectionBatch(BaseModel):
    """Records and per-path failures collected from a tree scan."""

    model_config = ConfigDict(frozen=True)

    root: str
    records: List[FileRecord] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)


class PathScanner:
    """Enumerate entries below a root without following directory symlinks."""

    def __init__(self, *, recursive: bool, include_hidden: bool) -> None:
        self.recursive = recursive
        self.include_hidden = include_hidden

    def scan(self, root: Path) -> Iterator[Path]:
        """Yield the entries beneath ``root`` in sorted order."""
        if root.is_symlink() or not root.is_dir():
            return

        for path in sorted(self._iter_paths(root)):
            try:
                relative = path.relative_to(root)
            except ValueError:
                relative = Path(path.name)
            if not self.include_hidden and _is_hidden(relative):
                continue
            yield path

    def _iter_paths(self, root: Path) -> Iterable[Path]:
        if self.recursive:
            yield from root.rglob("*")
        else:
            yield from root.iterdir()


def inspect_tree(
    root: str | Path,
    inspector: FileInspector | None = None,
    *,
    recursive: bool = True,
    include_hidden: bool = False,
) -> InspectionBatch:
    """Inspect ``root`` and the entries below it, collecting failures per path.

    The root itself must be inspectable; failures on entries below it are
    recorded in ``errors`` and the scan continues.

    Raises:
        InspectionError: If the root itself cannot be inspected.
    """
    inspector = inspector or FileInspector()
    root_path = Path(root)
    scanner = PathScanner(recursive=recursive, include_hidden=include_hidden)

    records: List[FileRecord] = [inspector.inspect(root_path)]
    errors: List[str] = []
    for path in scanner.scan(root_path):
        try:
            records.append(inspector.inspect(path))
        except InspectionError as exc:
            LOGGER.warning("Skipping %s: %s", path, exc)
            errors.append(f"{path}: {exc}")

    return InspectionBatch(root=str(root_path), records=records, errors=errors)


__all__ = ["InspectionBatch", "PathScanner", "inspect_tree"]
