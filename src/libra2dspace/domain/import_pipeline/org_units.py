"""Derive canonical organizational units from free-text department names.

Most descriptors name a department of the home institution, often with a
school code in front ("EN-Mech Eng Dept"). The code is resolved through the
school table, then class/degree decorations are stripped and the remaining
name is looked up in the department table. Departments of other institutions
are only lightly cleaned.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from libra2dspace.domain.model import OrgUnitImport

from .keys import key_from, normalize_value, squish
from .merge import merge_fields

if TYPE_CHECKING:
    from libra2dspace.domain.model import PersonDescriptor

    from .context import ImportContext, TranslationTable, Translations

HOME_INSTITUTION: Final[str] = "University of Virginia"
HOME_ALIASES: Final[frozenset[str]] = frozenset(
    name.casefold()
    for name in (
        HOME_INSTITUTION,
        "Univ. of Virginia",
        "UVA",
        "Academic Preservation Trust",
        "University of Virginia Library",
        "UVa School of Nursing",
    )
)
MEDICAL_SCHOOL_CODE: Final[str] = "MD"

_MEDICAL_DEPARTMENT = re.compile(r"^(MD)-DMED *(.*)$", re.IGNORECASE)
_MEDICAL_UNIT = re.compile(r"^(UPG-)?(MD)-[A-Z]{4} *(.*)$")
_DEANS_OFFICE = re.compile(r"^([A-Z][A-Z])- *Dean'?s Office", re.IGNORECASE)
_SCHOOL_CODE = re.compile(r"^([A-Z][A-Z])- *(.*)$", re.IGNORECASE)
_DECORATIONS = (
    re.compile(r"^Masters? of *"),
    re.compile(r", *UPG-MD-[A-Z]{4}$"),
    re.compile(r" +\([A-Z]{3,4}\)$"),
    re.compile(r"-[a-z]{3,4} *$"),
)
_TRAILING = re.compile(r"[ .,;:]+$")
_LEADING_UNIT = re.compile(r"^(Department|Dept\.|Dept|School|College) (of|for) ", re.IGNORECASE)
_LEVEL_SUFFIX = re.compile(r" (under)?grad(uate)?$", re.IGNORECASE)
_DEPT_SUFFIX = re.compile(r" Dept$", re.IGNORECASE)


def is_home_institution(name: str | None) -> bool:
    return name is not None and name.casefold() in HOME_ALIASES


def normalize_institution(name: str | None, translations: Translations) -> str | None:
    """Other institutions by their canonical name; the home institution is ``None``."""

    name = normalize_value(name)
    if not name or is_home_institution(name):
        return None
    name = translations.institution.translate(name)
    return None if is_home_institution(name) else name


def normalize_school(code: str | None, schools: TranslationTable) -> str | None:
    if not code:
        return None
    return schools.get(code.strip().upper())


def _school_name(code: str, schools: TranslationTable) -> str:
    # Unlisted codes stand in for the school name.
    return normalize_school(code, schools) or code.strip().upper()


def normalize_department(
    name: str | None,
    translations: Translations,
    *,
    translate: bool = True,
) -> str | None:
    text = squish(name)
    if not text:
        return None
    text = _TRAILING.sub("", text)
    text = _LEADING_UNIT.sub("", text)
    text = _LEVEL_SUFFIX.sub("", text)
    text = _DEPT_SUFFIX.sub("", text).strip()
    if text and translate:
        text = translations.department.translate(text)
    return text or None


def resolve_home_department(
    department: str,
    translations: Translations,
) -> tuple[str | None, str | None]:
    """Split a home-institution department into (school name, department name)."""

    schools = translations.school
    school: str | None = None
    if name := normalize_school(department, schools):
        department = name
    elif match := _MEDICAL_DEPARTMENT.match(department):
        school = _school_name(MEDICAL_SCHOOL_CODE, schools)
        department = f"Medical {match[2]}"
    elif match := _MEDICAL_UNIT.match(department):
        school = _school_name(MEDICAL_SCHOOL_CODE, schools)
        department = match[3]
    elif match := _DEANS_OFFICE.match(department):
        school = _school_name(match[1], schools)
        department = f"Dean's Office, {school}"
    elif match := _SCHOOL_CODE.match(department):
        school = _school_name(match[1], schools)
        department = match[2]
    for pattern in _DECORATIONS:
        department = pattern.sub("", department)
    return school, normalize_department(department, translations)


def normalize_org_unit(
    data: PersonDescriptor | OrgUnitImport,
    context: ImportContext,
) -> OrgUnitImport:
    """Build the org-unit named by a descriptor's department and institution."""

    if isinstance(data, OrgUnitImport):
        return data
    translations = context.translations
    raw_department = normalize_value(data.department)
    raw_institution = normalize_value(data.institution)
    if raw_institution and raw_institution == raw_department:
        raw_institution = None
    institution = normalize_institution(raw_institution, translations)

    if not raw_department:
        return OrgUnitImport(institution=institution, title_name=institution or HOME_INSTITUTION)

    if institution:
        department = normalize_department(raw_department, translations, translate=False)
        title = f"{institution} - {department}" if department else institution
        return OrgUnitImport(
            department=department,
            institution=institution,
            title_name=title,
            description=(institution, raw_department),
        )

    school, department = resolve_home_department(raw_department, translations)
    description = tuple(line for line in (HOME_INSTITUTION, school, raw_department) if line)
    return OrgUnitImport(
        department=department,
        title_name=department or HOME_INSTITUTION,
        description=description,
    )


def org_unit_key(org: OrgUnitImport) -> str | None:
    if org.table_key_override:
        return org.table_key_override
    return key_from(org.institution, org.department) or key_from(org.title_name)


def merge_org_units(old: OrgUnitImport, new: OrgUnitImport, *, key: str) -> OrgUnitImport:
    return merge_fields(old, new, key=key)
