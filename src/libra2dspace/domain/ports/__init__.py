"""Domain port definitions for adapters."""

from __future__ import annotations

from .lookup import RepositoryLookup
from .output import ImportArchiver, ImportItemWriter, ImportRenderer

__all__ = [
    "ImportArchiver",
    "ImportItemWriter",
    "ImportRenderer",
    "RepositoryLookup",
]
