"""Static extension-based file type classification."""

from __future__ import annotations

import os
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from .models import FileType

UNKNOWN_EXTENSION = "unknown"
UNKNOWN_DESCRIPTION = "unknown file type"

# Lookups are exact and case-sensitive; ".PDF" is not ".pdf".
EXTENSION_DESCRIPTIONS: Mapping[str, str] = MappingProxyType(
    {
        ".txt": "Text File",
        ".jpg": "Image File",
        ".png": "Image File",
        ".mp4": "Video File",
        ".mp3": "Audio File",
        ".pdf": "PDF Document",
        ".docx": "Word Document",
        ".xlsx": "Excel Spreadsheet",
        ".pptx": "PowerPoint Presentation",
        ".eml": "Email File",
        ".msg": "Email File",
        ".csv": "CSV File",
        ".html": "HTML File",
        ".css": "CSS File",
        ".js": "JavaScript File",
        ".py": "Python File",
        ".rtf": "RTF Document",
        ".exe": "Windows Executable File",
        ".apk": "Android Package File",
        ".zip": "ZIP Archive",
        ".tar": "TAR Archive",
        ".gz": "GZIP Archive",
        ".bz2": "BZIP2 Archive",
        ".7z": "7-Zip Archive",
        ".rar": "RAR Archive",
        ".iso": "ISO Image File",
        ".dmg": "Disk Image File",
        ".dll": "Dynamic Link Library",
        ".so": "Shared Object File",
        ".class": "Java Class File",
        ".jar": "Java Archive File",
        ".go": "Go Source File",
        ".sh": "Shell Script",
        ".bat": "Batch File",
        ".ps1": "PowerShell Script",
        ".json": "JSON File",
        ".xml": "XML File",
        ".yaml": "YAML File",
        ".yml": "YAML File",
        ".svg": "SVG File",
        ".woff": "Web Open Font Format",
        ".woff2": "Web Open Font Format 2",
        ".ttf": "TrueType Font",
        ".otf": "OpenType Font",
        ".eot": "Embedded OpenType Font",
        ".fnt": "Bitmap Font",
        ".ttc": "TrueType Collection",
        ".pdb": "Program Database File",
        ".mdb": "Microsoft Access Database",
        ".sqlite": "SQLite Database",
        ".db": "Database File",
        ".log": "Log File",
        ".tmp": "Temporary File",
        ".bak": "Backup File",
        ".swp": "Swap File",
        ".swo": "Swap File",
        ".lock": "Lock File",
        ".pid": "Process ID File",
        ".seed": "Seed File",
        ".key": "Key File",
        ".pem": "Privacy Enhanced Mail File",
        ".crt": "Certificate File",
        ".cer": "Certificate File",
        ".csr": "Certificate Signing Request",
        ".p12": "PKCS#12 File",
        ".pfx": "PKCS#12 File",
        ".p7b": "PKCS#7 Certificate File",
        ".p7c": "PKCS#7 Certificate File",
        ".p7s": "PKCS#7 Signature File",
        ".p8": "PKCS#8 Private Key File",
        ".jks": "Java KeyStore File",
        ".jceks": "Java Cryptography Extension KeyStore File",
    }
)

UNKNOWN_FILE_TYPE = FileType(extension=UNKNOWN_EXTENSION, description=UNKNOWN_DESCRIPTION)


def extension_of(path: str | Path) -> str:
    """Return the suffix of the final path element starting at its last dot.

    Dotfiles keep their whole name as the extension (``.bashrc``), and a name
    without a dot yields an empty string.
    """
    name = os.path.basename(os.fspath(path))
    index = name.rfind(".")
    if index == -1:
        return ""
    return name[index:]


def classify(path: str | Path) -> FileType:
    """Classify a path by its extension without touching the filesystem."""
    extension = extension_of(path)
    description = EXTENSION_DESCRIPTIONS.get(extension)
    if description is None:
        return UNKNOWN_FILE_TYPE
    return FileType(extension=extension, description=description)


__all__ = [
    "EXTENSION_DESCRIPTIONS",
    "UNKNOWN_EXTENSION",
    "UNKNOWN_DESCRIPTION",
    "UNKNOWN_FILE_TYPE",
    "classify",
    "extension_of",
]
