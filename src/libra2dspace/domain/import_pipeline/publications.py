"""Assemble one publication import per export record."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final

from libra2dspace.domain.model import ContentFile, EntityKind, PublicationImport, Relationship

from .org_units import org_unit_key

if TYPE_CHECKING:
    from datetime import date
    from pathlib import Path

    from libra2dspace.domain.model import ExportRecord, OrgUnitImport, PersonImport

    from .context import ImportContext
    from .tables import ImportTable

log = getLogger(__name__)

ACCESS_GROUPS: Final[dict[str, str]] = {
    "authenticated": "Authenticated Users",
    "restricted": "Submitter Only",
}

# LibraOpen exports replace "?" and ":" in file names with private-use characters.
_PLACEHOLDERS = str.maketrans({"\uf03f": "?", "\uf03a": ":"})
_ZIP_UNSAFE = str.maketrans({"?": "_", ":": "_"})


def decode_filename(name: str) -> str:
    return name.strip().translate(_PLACEHOLDERS)


def safe_filename(name: str) -> str:
    return name.strip().translate(_ZIP_UNSAFE)


def order_content(record: ExportRecord) -> tuple[ContentFile, ...]:
    """Content files in fileset order, renamed to names the archive accepts.

    Files that no fileset lists, and filesets whose file is absent, are
    reported and left out.
    """

    available: dict[str, Path] = {decode_filename(path.name): path for path in record.content}
    ordered: dict[str, Path] = {}
    missing: list[str] = []
    for fileset in record.filesets:
        if not fileset.name:
            log.warning("%s: fileset without a file name", fileset.source or record.directory)
            continue
        path = available.get(fileset.name)
        if path is None:
            missing.append(fileset.name)
        else:
            ordered[fileset.name] = path
    unlisted = [name for name in available if name not in ordered]
    if unlisted:
        log.error("%s: unlisted content files: %s", record.directory, unlisted)
    if missing:
        log.error("%s: missing content files: %s", record.directory, missing)
    return tuple(ContentFile(safe_filename(name), path) for name, path in ordered.items())


def read_group(record: ExportRecord, today: date | None = None) -> str | None:
    """DSpace group allowed to read the content, ``None`` when it is public."""

    visibility = record.visibility
    if record.embargo is not None:
        visibility = record.embargo.terms(today) or visibility
    if visibility is None:
        return None
    return ACCESS_GROUPS.get(visibility.strip().lower())


def _unique(keys: list[str | None]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(key for key in keys if key))


def assemble_publication(
    record: ExportRecord,
    *,
    persons: ImportTable[PersonImport],
    org_units: ImportTable[OrgUnitImport],
    context: ImportContext,
    today: date | None = None,
) -> PublicationImport:
    author_keys: list[str | None] = []
    for descriptor in record.authors:
        key = persons.key_for(descriptor)
        if key is None:
            log.error("%s: author without computing_id or name: %r", record.external_id, descriptor)
        author_keys.append(key)

    contributors: dict[str, str] = {}
    for descriptor in record.contributors:
        person = persons.ops.normalize(descriptor, context)
        key = persons.ops.key_for(person)
        if key is None or person.title_name is None:
            log.error("%s: contributor without name: %r", record.external_id, descriptor)
            continue
        if key in contributors:
            log.debug("%s: contributor %s overrides %r", record.external_id, key, contributors[key])
        contributors[key] = person.title_name

    org_keys = _unique([org_unit_key(org) for orgs in record.orgs.values() for org in orgs])
    authors = _unique(author_keys)

    current_persons = context.current_table(EntityKind.PERSON)
    current_orgs = context.current_table(EntityKind.ORG_UNIT)
    relationships = (
        *(
            Relationship(
                "isAuthorOfPublication",
                current_persons.reference(key, persons.ops.folder_name(key)),
            )
            for key in authors
        ),
        *(
            Relationship(
                "isOrgUnitOfPublication",
                current_orgs.reference(key, org_units.ops.folder_name(key)),
            )
            for key in org_keys
        ),
    )
    return PublicationImport(
        external_id=record.external_id,
        work=record.work,
        author_keys=authors,
        org_keys=org_keys,
        contributors=tuple(contributors.values()),
        relationships=relationships,
        content=order_content(record),
        read_group=read_group(record, today),
        embargo=record.embargo,
    )
