"""Import-directory writer and archive packaging."""

from __future__ import annotations

from .archive import ArchiveError, ZipArchiver, archive_name
from .writer import DirectoryWriter, ImportWriteError

__all__ = [
    "ArchiveError",
    "DirectoryWriter",
    "ImportWriteError",
    "ZipArchiver",
    "archive_name",
]
