"""Ports for querying what already exists at the destination."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from libra2dspace.domain.import_pipeline.tables import CurrentTable
    from libra2dspace.domain.model import EntityKind


@runtime_checkable
class RepositoryLookup(Protocol):
    """Snapshot provider for entities the destination already holds.

    Collections are keyed by name; org-units and persons by table key.
    """

    def current_table(self, kind: EntityKind) -> CurrentTable: ...


__all__ = ["RepositoryLookup"]
