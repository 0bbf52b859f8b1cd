"""Derive canonical persons from author and contributor descriptors."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from libra2dspace.domain.model import ORG_PREFIX, PersonImport, Relationship

from .keys import key_from, normalize_value, squish
from .merge import merge_fields
from .org_units import normalize_org_unit, org_unit_key

if TYPE_CHECKING:
    from libra2dspace.domain.model import OrgUnitImport, PersonDescriptor

    from .context import ImportContext
    from .tables import CurrentTable

_HOME_EMAIL = re.compile(r"@(\w+\.)*virginia\.edu$")
_COURTESY_TITLE = re.compile(r"^Dr\.? +")
_ORCID_PREFIX = re.compile(r"^https?://(\w+\.)*orcid\.org/", re.IGNORECASE)


def normalize_cid(value: str | None) -> str | None:
    """Computing id without the home email domain (``js1@virginia.edu`` -> ``js1``)."""

    if value is None:
        return None
    cid = _HOME_EMAIL.sub("", value.strip().lower())
    return cid or None


def normalize_first_name(value: str | None) -> str | None:
    text = squish(value)
    if text is None:
        return None
    return normalize_value(_COURTESY_TITLE.sub("", text))


def normalize_orcid(value: str | None) -> str | None:
    text = squish(value)
    if text is None:
        return None
    return _ORCID_PREFIX.sub("", text) or None


def normalize_person(
    data: PersonDescriptor | PersonImport,
    context: ImportContext,
) -> PersonImport:
    if isinstance(data, PersonImport):
        return data
    first_name = normalize_first_name(data.first_name)
    last_name = normalize_value(data.last_name)
    department = normalize_value(data.department)
    institution = normalize_value(data.institution)
    if not first_name and not last_name:
        last_name = department or institution
    org = normalize_org_unit(data, context)
    return PersonImport(
        computing_id=normalize_cid(data.computing_id),
        first_name=first_name,
        last_name=last_name,
        department=department,
        institution=institution,
        orcid=normalize_orcid(data.orcid),
        orgs=(org,) if org_unit_key(org) else (),
    )


def person_key(person: PersonImport) -> str | None:
    return (
        key_from(person.computing_id)
        or key_from(person.last_name, person.first_name)
        or key_from(person.institution, person.department)
    )


def merge_orgs(
    old: tuple[OrgUnitImport, ...],
    new: tuple[OrgUnitImport, ...],
) -> tuple[OrgUnitImport, ...]:
    """Union by org-unit key, keeping first-seen order."""

    merged = list(old)
    seen = {org_unit_key(org) for org in old}
    for org in new:
        key = org_unit_key(org)
        if key not in seen:
            seen.add(key)
            merged.append(org)
    return tuple(merged)


def merge_persons(old: PersonImport, new: PersonImport, *, key: str) -> PersonImport:
    return merge_fields(old, new, key=key, policies={"orgs": merge_orgs})


def person_relationships(
    person: PersonImport,
    current_orgs: CurrentTable,
) -> tuple[Relationship, ...]:
    """``isOrgUnitOfPerson`` lines, by UUID for org-units the destination has."""

    lines: list[Relationship] = []
    for org in person.orgs:
        key = org_unit_key(org)
        if key is None:
            continue
        target = current_orgs.reference(key, f"{ORG_PREFIX}{key}")
        lines.append(Relationship("isOrgUnitOfPerson", target))
    return tuple(lines)
