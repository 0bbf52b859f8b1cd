"""Ports for turning import candidates into files on disk."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from libra2dspace.domain.import_pipeline.context import ImportContext
    from libra2dspace.domain.model import (
        ImportItem,
        OrgUnitImport,
        PersonImport,
        PublicationImport,
        Relationship,
    )


class ImportRenderer(Protocol):
    """Renders each kind of import into the files of one import item."""

    def org_unit(self, key: str, org: OrgUnitImport, *, context: ImportContext) -> ImportItem: ...

    def person(
        self,
        key: str,
        person: PersonImport,
        *,
        relationships: Sequence[Relationship],
        context: ImportContext,
    ) -> ImportItem: ...

    def publication(
        self,
        publication: PublicationImport,
        *,
        context: ImportContext,
    ) -> ImportItem: ...


class ImportItemWriter(Protocol):
    """Writes import items below one import root."""

    @property
    def root(self) -> Path: ...

    def prepare_root(self) -> Path:
        """Remove output of earlier runs and recreate the import root."""
        ...

    def write(self, item: ImportItem) -> Path: ...


class ImportArchiver(Protocol):
    """Packages written import items into archives."""

    def archive(self, root: Path, batches: Sequence[Sequence[str]]) -> list[Path]: ...

    def verify(self, archives: Sequence[Path]) -> bool: ...


__all__ = ["ImportArchiver", "ImportItemWriter", "ImportRenderer"]
