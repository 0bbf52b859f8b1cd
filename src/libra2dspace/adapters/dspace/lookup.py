"""Current-table lookup against a live DSpace instance or saved snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import TypeAdapter, ValidationError

from libra2dspace.config.storage import get_storage_config
from libra2dspace.domain.import_pipeline import CurrentTable, RemoteEntry
from libra2dspace.domain.model import EntityKind

from .client import DSpaceClient
from .translator import collection_table, org_unit_table, person_table, publication_table

if TYPE_CHECKING:
    from collections.abc import Callable

    from libra2dspace.config.storage import StorageConfig
    from libra2dspace.domain.ports import RepositoryLookup

    from .schema import DSpaceObject

log = getLogger(__name__)

ENTITY_TYPES: dict[EntityKind, str] = {
    EntityKind.ORG_UNIT: "OrgUnit",
    EntityKind.PERSON: "Person",
    EntityKind.PUBLICATION: "Publication",
}

_TRANSLATORS: dict[EntityKind, Callable[[list[DSpaceObject]], CurrentTable]] = {
    EntityKind.ORG_UNIT: org_unit_table,
    EntityKind.PERSON: person_table,
    EntityKind.PUBLICATION: publication_table,
    EntityKind.COLLECTION: collection_table,
}

_SAVED_TABLE = TypeAdapter(dict[str, RemoteEntry])


@dataclass(slots=True)
class DSpaceLookup:
    """Fetches what DSpace already holds, one table per entity kind.

    Every live fetch is saved as JSON below the data directory. With ``fast``
    set, a saved table is read back instead of querying DSpace again.
    """

    client_factory: Callable[[], DSpaceClient] = DSpaceClient
    storage: StorageConfig = field(default_factory=get_storage_config)
    fast: bool = False
    _client: DSpaceClient | None = field(default=None, init=False, repr=False)
    _tables: dict[EntityKind, CurrentTable] = field(default_factory=dict, init=False, repr=False)

    def current_table(self, kind: EntityKind) -> CurrentTable:
        table = self._tables.get(kind)
        if table is None:
            table = self._load(kind) if self.fast else None
            if table is None:
                table = self._fetch(kind)
                self._save(table)
            self._tables[kind] = table
        return table

    @property
    def client(self) -> DSpaceClient:
        if self._client is None:
            self._client = self.client_factory()
        return self._client

    def _fetch(self, kind: EntityKind) -> CurrentTable:
        translate = _TRANSLATORS[kind]
        if kind is EntityKind.COLLECTION:
            return translate(self.client.collections())
        return translate(self.client.entities(ENTITY_TYPES[kind]))

    def _load(self, kind: EntityKind) -> CurrentTable | None:
        path = self.storage.saved_table_path(kind.value, ensure=False)
        if not path.is_file():
            log.info("No saved %s table at %s; querying DSpace", kind, path)
            return None
        try:
            entries = _SAVED_TABLE.validate_json(path.read_bytes())
        except (OSError, ValidationError) as exc:
            log.warning("Ignoring unreadable saved table %s: %s", path, exc)
            return None
        log.info("Using saved %s table (%s entries) from %s", kind, len(entries), path)
        return CurrentTable(kind, entries)

    def _save(self, table: CurrentTable) -> None:
        path = self.storage.saved_table_path(table.kind.value)
        try:
            path.write_bytes(_SAVED_TABLE.dump_json(dict(table.entries), indent=2))
        except OSError as exc:
            log.warning("Could not save %s table to %s: %s", table.kind, path, exc)
        else:
            log.debug("Saved %s table to %s", table.kind, path)


if TYPE_CHECKING:
    _lookup_check: RepositoryLookup = DSpaceLookup()
