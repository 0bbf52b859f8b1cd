"""Translate LibraOpen export payloads into domain objects."""

from __future__ import annotations

import re
from datetime import date, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from libra2dspace.domain.model import Embargo, FilesetDescriptor, PersonDescriptor, WorkMetadata

if TYPE_CHECKING:
    from pathlib import Path

    from .schema import (
        EmbargoPayload,
        FilesetPayload,
        PersonPayload,
        RightsPayload,
        WorkPayload,
    )

log = getLogger(__name__)

_DEACTIVATED = re.compile(r"^An active embargo was deactivated on (\S+)\.")


def parse_date(value: str | None) -> date | None:
    """Calendar date of an ISO date or timestamp; ``None`` when unparseable."""

    if not value:
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        log.warning("Ignoring unparseable date %r", value)
        return None


def translate_person(payload: PersonPayload) -> PersonDescriptor:
    return PersonDescriptor(
        first_name=payload.first_name,
        last_name=payload.last_name,
        computing_id=payload.computing_id,
        department=payload.department,
        institution=payload.institution,
        orcid=payload.orcid,
    )


def translate_fileset(payload: FilesetPayload, source: Path | None = None) -> FilesetDescriptor:
    name = payload.file_name
    return FilesetDescriptor(name=name.strip() if name else None, source=source)


def translate_embargo(payload: EmbargoPayload) -> Embargo:
    deactivated = parse_date(payload.deactivated)
    if deactivated is None and payload.embargo_history:
        match = _DEACTIVATED.match(payload.embargo_history[-1])
        if match:
            deactivated = parse_date(match[1])
    return Embargo(
        during=payload.during,
        after=payload.after,
        release=parse_date(payload.release),
        deactivated=deactivated,
    )


def translate_work(payload: WorkPayload, rights: RightsPayload | None = None) -> WorkMetadata:
    work_rights = payload.rights or (rights.rights if rights is not None else [])
    return WorkMetadata(
        title=tuple(payload.title),
        language=tuple(payload.language),
        rights=tuple(work_rights),
        keyword=tuple(payload.keyword),
        related_url=tuple(payload.related_url),
        sponsoring_agency=tuple(payload.sponsoring_agency),
        notes=tuple(payload.notes),
        resource_type=payload.resource_type,
        publisher=payload.publisher,
        published_date=payload.published_date,
        identifier=payload.id,
        doi=payload.doi,
        source_citation=payload.source_citation,
        date_modified=payload.date_modified,
        abstract=payload.abstract,
        depositor=payload.depositor,
        author_orcid_url=payload.author_orcid_url,
    )
