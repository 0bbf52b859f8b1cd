"""Typed view of one LibraOpen export record."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING

from .enums import ExportFileRole

if TYPE_CHECKING:
    from pathlib import Path

    from .imports import OrgUnitImport

EXPORT_PREFIX = "export-"


@dataclass(slots=True, frozen=True)
class PersonDescriptor:
    """An author or contributor as listed by one export record."""

    first_name: str | None = None
    last_name: str | None = None
    computing_id: str | None = None
    department: str | None = None
    institution: str | None = None
    orcid: str | None = None


@dataclass(slots=True, frozen=True)
class FilesetDescriptor:
    """Names the content file that belongs at this position of the item."""

    name: str | None
    source: Path | None = None


@dataclass(slots=True, frozen=True)
class Embargo:
    during: str | None = None
    after: str | None = None
    release: date | None = None
    deactivated: date | None = None

    def active(self, today: date | None = None) -> bool:
        if self.deactivated is not None or self.release is None:
            return False
        return self.release > (today or date.today())

    def terms(self, today: date | None = None) -> str | None:
        """Visibility that applies to the content right now."""

        return self.during if self.active(today) else self.after

    @property
    def lift(self) -> date | None:
        return self.deactivated or self.release


@dataclass(slots=True, frozen=True)
class WorkMetadata:
    """Fields of ``work.json`` that carry over to the publication."""

    title: tuple[str, ...] = ()
    language: tuple[str, ...] = ()
    rights: tuple[str, ...] = ()
    keyword: tuple[str, ...] = ()
    related_url: tuple[str, ...] = ()
    sponsoring_agency: tuple[str, ...] = ()
    notes: tuple[str, ...] = ()
    resource_type: str | None = None
    publisher: str | None = None
    published_date: str | None = None
    identifier: str | None = None
    doi: str | None = None
    source_citation: str | None = None
    date_modified: str | None = None
    abstract: str | None = None
    depositor: str | None = None
    author_orcid_url: str | None = None


@dataclass(slots=True, eq=False)
class ExportRecord:
    """One exported work.

    Identity and file lists are fixed by the scanner; ``orgs`` is filled in while
    authors and contributors are registered.
    """

    external_id: str
    directory: Path
    files: dict[ExportFileRole, list[Path]] = field(default_factory=dict)
    work: WorkMetadata = field(default_factory=WorkMetadata)
    authors: tuple[PersonDescriptor, ...] = ()
    contributors: tuple[PersonDescriptor, ...] = ()
    filesets: tuple[FilesetDescriptor, ...] = ()
    visibility: str | None = None
    embargo: Embargo | None = None
    orgs: dict[str, list[OrgUnitImport]] = field(default_factory=dict)
    orcid: dict[str, str] = field(default_factory=dict)

    @property
    def import_name(self) -> str:
        return f"import-{self.external_id}"

    @property
    def content(self) -> list[Path]:
        return self.files.get(ExportFileRole.CONTENT, [])

    @property
    def descriptors(self) -> tuple[PersonDescriptor, ...]:
        return (*self.authors, *self.contributors)

    def attach_orgs(self, person_key: str, orgs: list[OrgUnitImport]) -> None:
        """Associate the org-units of the person at ``person_key`` with this record."""

        entries = self.orgs.setdefault(person_key, [])
        for org in orgs:
            if org not in entries:
                entries.append(org)
