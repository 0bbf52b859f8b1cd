"""Import candidates and the items written for the DSpace batch importer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from .export import Embargo, WorkMetadata

ORG_PREFIX: Final[str] = "org-"
PERSON_PREFIX: Final[str] = "person-"
IMPORT_PREFIX: Final[str] = "import-"
EMAIL_DOMAIN: Final[str] = "virginia.edu"


@dataclass(slots=True, frozen=True)
class OrgUnitImport:
    """A normalized organizational unit waiting to be created."""

    department: str | None = None
    institution: str | None = None
    title_name: str | None = None
    description: tuple[str, ...] = ()
    table_key_override: str | None = None


@dataclass(slots=True, frozen=True)
class PersonImport:
    """A normalized person waiting to be created."""

    computing_id: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    department: str | None = None
    institution: str | None = None
    orcid: str | None = None
    orgs: tuple[OrgUnitImport, ...] = ()

    @property
    def title_name(self) -> str | None:
        parts = [part for part in (self.last_name, self.first_name) if part]
        return ", ".join(parts) or None

    @property
    def email(self) -> str | None:
        cid = self.computing_id
        if not cid:
            return None
        return cid if "@" in cid else f"{cid}@{EMAIL_DOMAIN}"


type EntityImport = OrgUnitImport | PersonImport


@dataclass(slots=True, frozen=True)
class Relationship:
    """One line of an item's ``relationships`` file."""

    relation: str
    target: str

    def render(self) -> str:
        return f"relation.{self.relation} {self.target}"


@dataclass(slots=True, frozen=True)
class ContentFile:
    name: str
    source: Path


@dataclass(slots=True, frozen=True)
class PublicationImport:
    """Everything needed to write one ``import-<id>`` item."""

    external_id: str
    work: WorkMetadata
    author_keys: tuple[str, ...] = ()
    org_keys: tuple[str, ...] = ()
    contributors: tuple[str, ...] = ()
    relationships: tuple[Relationship, ...] = ()
    content: tuple[ContentFile, ...] = ()
    read_group: str | None = None
    embargo: Embargo | None = None

    @property
    def name(self) -> str:
        return f"{IMPORT_PREFIX}{self.external_id}"


@dataclass(slots=True, frozen=True)
class ImportItem:
    """A single directory of the batch import, before it is written."""

    name: str
    files: Mapping[str, str] = field(default_factory=dict)
    content: Mapping[str, Path] = field(default_factory=dict)
