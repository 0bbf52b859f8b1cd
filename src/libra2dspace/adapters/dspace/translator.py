"""Translate DSpace API objects into current-table entries."""

from __future__ import annotations

import re
from logging import getLogger
from typing import TYPE_CHECKING

from libra2dspace.domain.import_pipeline import (
    CurrentTable,
    RemoteEntry,
    is_home_institution,
    normalize_cid,
    org_unit_key,
    person_key,
)
from libra2dspace.domain.model import EntityKind, OrgUnitImport, PersonImport

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .schema import DSpaceObject

log = getLogger(__name__)

_NAME_SPLIT = re.compile(r"\s*,\s*")


def _remote_entry(item: DSpaceObject) -> RemoteEntry:
    return RemoteEntry(uuid=item.uuid, handle=item.handle, name=item.name)


def org_unit_entry_key(item: DSpaceObject, parents: dict[str, str | None]) -> str | None:
    """Table key of an OrgUnit object.

    OrgUnits written by this tool carry their key as ``organization.identifier``;
    others are keyed from their legal name and parent organization.
    """

    if key := item.first_value("organization.identifier"):
        return key
    name = item.first_value("organization.legalName") or item.name
    parent = item.first_value("organization.parentOrganization")
    if parent:
        institution = parents.get(parent, parent)
        if is_home_institution(institution):
            institution = None
        org = OrgUnitImport(department=name, institution=institution, title_name=name)
    else:
        org = OrgUnitImport(institution=name, title_name=name)
    return org_unit_key(org)


def person_entry_key(item: DSpaceObject) -> str | None:
    """Table key of a Person object, by computing id or else by name."""

    first = item.first_value("person.givenName")
    last = item.first_value("person.familyName")
    title = item.first_value("dc.title") or item.name
    if title and not (first and last):
        parts = _NAME_SPLIT.split(title.strip(), maxsplit=1)
        last = last or parts[0] or None
        if len(parts) > 1:
            first = first or parts[1] or None
    person = PersonImport(
        computing_id=normalize_cid(item.first_value("person.identifier")),
        first_name=first,
        last_name=last,
    )
    return person_key(person)


def org_unit_table(items: Iterable[DSpaceObject]) -> CurrentTable:
    objects = list(items)
    names = {
        item.uuid: item.first_value("organization.legalName") or item.name for item in objects
    }
    entries: dict[str, RemoteEntry] = {}
    for item in objects:
        key = org_unit_entry_key(item, names)
        if key is None:
            log.warning("OrgUnit %s: no table key", item.uuid)
            continue
        entries.setdefault(key, _remote_entry(item))
    return CurrentTable(EntityKind.ORG_UNIT, entries)


def person_table(items: Iterable[DSpaceObject]) -> CurrentTable:
    entries: dict[str, RemoteEntry] = {}
    for item in items:
        key = person_entry_key(item)
        if key is None:
            log.warning("Person %s: no table key", item.uuid)
            continue
        entries.setdefault(key, _remote_entry(item))
    return CurrentTable(EntityKind.PERSON, entries)


def publication_table(items: Iterable[DSpaceObject]) -> CurrentTable:
    return CurrentTable(EntityKind.PUBLICATION, {item.uuid: _remote_entry(item) for item in items})


def collection_table(items: Iterable[DSpaceObject]) -> CurrentTable:
    entries: dict[str, RemoteEntry] = {}
    for item in items:
        if item.name:
            entries.setdefault(item.name, _remote_entry(item))
    return CurrentTable(EntityKind.COLLECTION, entries)
