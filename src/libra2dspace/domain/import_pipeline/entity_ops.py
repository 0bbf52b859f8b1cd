"""Central registry for per-kind import operations."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from libra2dspace.domain.model import ORG_PREFIX, PERSON_PREFIX, EntityKind

from .org_units import merge_org_units, normalize_org_unit, org_unit_key
from .persons import merge_persons, normalize_person, person_key

if TYPE_CHECKING:
    from .context import ImportContext


@dataclass(slots=True, frozen=True)
class EntityOps[T]:
    kind: EntityKind
    folder_prefix: str
    normalize: Callable[[Any, ImportContext], T]
    key_for: Callable[[T], str | None]
    merge: Callable[..., T]

    def folder_name(self, key: str) -> str:
        """Import directory name of the entry at ``key``."""

        return f"{self.folder_prefix}{key}"


_REGISTRY: dict[EntityKind, EntityOps[Any]] = {
    EntityKind.ORG_UNIT: EntityOps(
        kind=EntityKind.ORG_UNIT,
        folder_prefix=ORG_PREFIX,
        normalize=normalize_org_unit,
        key_for=org_unit_key,
        merge=merge_org_units,
    ),
    EntityKind.PERSON: EntityOps(
        kind=EntityKind.PERSON,
        folder_prefix=PERSON_PREFIX,
        normalize=normalize_person,
        key_for=person_key,
        merge=merge_persons,
    ),
}


def ops_for(kind: EntityKind) -> EntityOps[Any]:
    try:
        return _REGISTRY[kind]
    except KeyError as exc:
        raise RuntimeError(f"No ops registered for {kind}") from exc
