"""Import tables (what this run will create) and current tables (what exists)."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from logging import getLogger
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from libra2dspace.domain.model import EntityKind

if TYPE_CHECKING:
    from .context import ImportContext
    from .entity_ops import EntityOps

log = getLogger(__name__)


@dataclass(slots=True, frozen=True)
class RemoteEntry:
    """An entity already present at the destination."""

    uuid: str
    handle: str | None = None
    name: str | None = None


@dataclass(slots=True, frozen=True)
class CurrentTable(Mapping[str, RemoteEntry]):
    """Read-only snapshot of destination entities keyed by table key."""

    kind: EntityKind
    entries: Mapping[str, RemoteEntry] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def __getitem__(self, key: str) -> RemoteEntry:
        return self.entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def reference(self, key: str, folder_name: str) -> str:
        """Destination UUID for ``key``, else a forward reference to ``folder_name``."""

        entry = self.entries.get(key)
        return entry.uuid if entry is not None else f"folderName:{folder_name}"


@dataclass(slots=True)
class ImportTable[T](Mapping[str, T]):
    """Deduplicated candidates of one entity kind, keyed by table key."""

    ops: EntityOps[T]
    context: ImportContext
    entries: dict[str, T] = field(default_factory=dict)

    @property
    def kind(self) -> EntityKind:
        return self.ops.kind

    def __getitem__(self, key: str) -> T:
        return self.entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def key_for(self, data: Any) -> str | None:
        return self.ops.key_for(self.ops.normalize(data, self.context))

    def add(self, data: Any, key: str | None = None) -> str | None:
        """Insert ``data`` or merge it into the entry that shares its key.

        Returns the key, or ``None`` when ``data`` has nothing identifying.
        """

        value = self.ops.normalize(data, self.context)
        key = key or self.ops.key_for(value)
        if key is None:
            log.debug("%s: no key for %r", self.kind, data)
            return None
        current = self.entries.get(key)
        if current is None:
            self.entries[key] = value
        else:
            self.entries[key] = self.ops.merge(current, value, key=key)
        return key

    def add_import(self, data: Any, *, force: bool = False) -> str | None:
        """Add ``data`` unless the destination already has it (or ``force``)."""

        value = self.ops.normalize(data, self.context)
        key = self.ops.key_for(value)
        if key is None:
            log.debug("%s: no key for %r", self.kind, data)
            return None
        if not force and key in self.context.current_table(self.kind):
            log.info("%s %s: already in DSpace", self.kind, key)
            return None
        return self.add(value, key=key)
