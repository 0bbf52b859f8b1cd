"""Read-only run context shared by the resolvers and the orchestrator."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from libra2dspace.domain.model import EntityKind

from .tables import CurrentTable

if TYPE_CHECKING:
    from collections.abc import Mapping


def _folded(table: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType({key.casefold(): value for key, value in table.items()})


@dataclass(slots=True, frozen=True)
class TranslationTable:
    """Case-insensitive replacement table for free-text names."""

    entries: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", _folded(self.entries))

    def get(self, name: str | None) -> str | None:
        if not name:
            return None
        return self.entries.get(name.casefold())

    def translate(self, name: str | None) -> str | None:
        """Return the replacement for ``name``, or ``name`` itself."""

        return self.get(name) or name


@dataclass(slots=True, frozen=True)
class Translations:
    institution: TranslationTable = field(default_factory=TranslationTable)
    school: TranslationTable = field(default_factory=TranslationTable)
    department: TranslationTable = field(default_factory=TranslationTable)


@dataclass(slots=True, frozen=True)
class ImportContext:
    """Everything a run reads but never changes.

    Built once per run (translation tables from package data, current tables from
    the destination) and passed down explicitly.
    """

    translations: Translations = field(default_factory=Translations)
    current: Mapping[EntityKind, CurrentTable] = field(default_factory=dict)
    collections: Mapping[EntityKind, str] = field(default_factory=dict)

    def current_table(self, kind: EntityKind) -> CurrentTable:
        return self.current.get(kind) or CurrentTable(kind)

    def collection_handle(self, kind: EntityKind) -> str | None:
        return self.collections.get(kind)
