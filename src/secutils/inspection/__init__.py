"""File inspection engine: metadata, classification, and content digests."""

from .classifier import EXTENSION_DESCRIPTIONS, UNKNOWN_FILE_TYPE, classify
from .digests import DigestComputer, compute_digests
from .discovery import InspectionBatch, PathScanner, inspect_tree
from .errors import (
    AccessDeniedError,
    ContentReadError,
    InspectionError,
    PathNotFoundError,
    PersistError,
    UnsupportedPathError,
)
from .inspector import FileInspector, inspect
from .models import Digests, FileRecord, FileType
from .persistence import load_record, load_records, persist, persist_many

__all__ = [
    "EXTENSION_DESCRIPTIONS",
    "UNKNOWN_FILE_TYPE",
    "classify",
    "DigestComputer",
    "compute_digests",
    "InspectionBatch",
    "PathScanner",
    "inspect_tree",
    "InspectionError",
    "PathNotFoundError",
    "AccessDeniedError",
    "ContentReadError",
    "PersistError",
    "UnsupportedPathError",
    "FileInspector",
    "inspect",
    "Digests",
    "FileRecord",
    "FileType",
    "persist",
    "persist_many",
    "load_record",
    "load_records",
]
