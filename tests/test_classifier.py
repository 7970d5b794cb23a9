"""Tests for extension-based classification."""

from pathlib import Path

import pytest

from secutils.inspection import EXTENSION_DESCRIPTIONS, UNKNOWN_FILE_TYPE, FileType, classify
from secutils.inspection.classifier import extension_of


def test_known_extension_returns_documented_description() -> None:
    assert classify("/evidence/report.pdf") == FileType(
        extension=".pdf", description="PDF Document"
    )


def test_unknown_extension_returns_sentinel() -> None:
    result = classify("sample.xyzabc")

    assert result == UNKNOWN_FILE_TYPE
    assert result.extension == "unknown"
    assert result.description == "unknown file type"


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("archive.tar.gz", ".gz"),
        ("README", ""),
        (".bashrc", ".bashrc"),
        ("dir.d/notes", ""),
        (Path("keys") / "server.pem", ".pem"),
    ],
)
def test_extension_uses_last_dot_of_final_element(name: str | Path, expected: str) -> None:
    assert extension_of(name) == expected


def test_lookup_is_case_sensitive() -> None:
    assert classify("SCAN.PDF") == UNKNOWN_FILE_TYPE


def test_table_is_read_only_and_complete() -> None:
    with pytest.raises(TypeError):
        EXTENSION_DESCRIPTIONS[".new"] = "New"  # type: ignore[index]

    assert len(EXTENSION_DESCRIPTIONS) == 72
    assert EXTENSION_DESCRIPTIONS[".jceks"] == "Java Cryptography Extension KeyStore File"
    assert EXTENSION_DESCRIPTIONS[".txt"] == "Text File"
