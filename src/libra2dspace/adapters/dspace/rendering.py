"""Render import candidates as DSpace Simple Archive Format items."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from lxml import etree

from libra2dspace.domain.import_pipeline.publications import ACCESS_GROUPS
from libra2dspace.domain.model import ORG_PREFIX, PERSON_PREFIX, EntityKind, ImportItem

from . import dublin_core as dc

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence
    from datetime import date
    from pathlib import Path

    from libra2dspace.domain.import_pipeline.context import ImportContext
    from libra2dspace.domain.model import (
        Embargo,
        OrgUnitImport,
        PersonImport,
        PublicationImport,
        Relationship,
    )
    from libra2dspace.domain.ports import ImportRenderer

    type Transform = Callable[[str], str | list[str] | None]

DUBLIN_CORE: Final[str] = "dublin_core.xml"
COLLECTIONS: Final[str] = "collections"
RELATIONSHIPS: Final[str] = "relationships"
CONTENTS: Final[str] = "contents"

_XML_UNSAFE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


def schema_file(schema: str) -> str:
    return f"metadata_{schema}.xml"


@dataclass(slots=True)
class DublinCoreXml:
    """A ``<dublin_core>`` document of ``<dcvalue>`` elements.

    Blank values are skipped, so callers may pass fields as they are.
    """

    schema: str | None = None
    values: list[tuple[str, str | None, str]] = field(default_factory=list)

    def single(
        self,
        value: str | None,
        element: str,
        qualifier: str | None = None,
        transform: Transform | None = None,
    ) -> DublinCoreXml:
        text = value.strip() if value else None
        if text and transform is not None:
            result = transform(text)
            for item in result if isinstance(result, list) else [result]:
                self._add(item, element, qualifier)
        else:
            self._add(text, element, qualifier)
        return self

    def multi(
        self,
        values: Iterable[str | None],
        element: str,
        qualifier: str | None = None,
        transform: Transform | None = None,
    ) -> DublinCoreXml:
        for value in values:
            self.single(value, element, qualifier, transform)
        return self

    def _add(self, value: str | None, element: str, qualifier: str | None) -> None:
        text = _XML_UNSAFE.sub("", value).strip() if value else None
        if text:
            self.values.append((element, qualifier, text))

    def to_xml(self) -> str:
        root = etree.Element("dublin_core")
        if self.schema:
            root.set("schema", self.schema)
        for element, qualifier, text in self.values:
            node = etree.SubElement(root, "dcvalue", element=element)
            if qualifier:
                node.set("qualifier", qualifier)
            node.text = text
        return etree.tostring(
            root, pretty_print=True, xml_declaration=True, encoding="UTF-8"
        ).decode("utf-8")


def entity_xml(entity_type: str) -> str:
    return DublinCoreXml(schema="dspace").single(entity_type, "entity", "type").to_xml()


def collections_file(handle: str | None) -> str | None:
    return f"{handle}\n" if handle else None


def relationships_file(relationships: Sequence[Relationship]) -> str | None:
    lines = [relationship.render() for relationship in relationships]
    return "".join(f"{line}\n" for line in lines) or None


def access_group(term: str | None) -> str | None:
    if term is None:
        return None
    return ACCESS_GROUPS.get(term.strip().lower())


@dataclass(slots=True)
class DSpaceRenderer:
    """Builds the files of org-unit, person and publication import items."""

    today: date | None = None

    def org_unit(self, key: str, org: OrgUnitImport, *, context: ImportContext) -> ImportItem:
        organization = (
            DublinCoreXml(schema="organization")
            .single(org.title_name, "legalName")
            .single(key, "identifier")
        )
        metadata = (
            DublinCoreXml().single(org.title_name, "title").multi(org.description, "description")
        )
        files = {
            schema_file("organization"): organization.to_xml(),
            schema_file("dspace"): entity_xml("OrgUnit"),
            DUBLIN_CORE: metadata.to_xml(),
            COLLECTIONS: collections_file(context.collection_handle(EntityKind.ORG_UNIT)),
        }
        return _item(f"{ORG_PREFIX}{key}", files)

    def person(
        self,
        key: str,
        person: PersonImport,
        *,
        relationships: Sequence[Relationship],
        context: ImportContext,
    ) -> ImportItem:
        profile = (
            DublinCoreXml(schema="person")
            .single(person.computing_id, "identifier")
            .single(person.orcid, "identifier", "orcid")
            .single(person.first_name, "givenName")
            .single(person.last_name, "familyName")
            .single(person.email, "email")
        )
        metadata = (
            DublinCoreXml().single(person.title_name, "title").single(person.email, "identifier")
        )
        files = {
            schema_file("person"): profile.to_xml(),
            schema_file("dspace"): entity_xml("Person"),
            DUBLIN_CORE: metadata.to_xml(),
            COLLECTIONS: collections_file(context.collection_handle(EntityKind.PERSON)),
            RELATIONSHIPS: relationships_file(relationships),
        }
        return _item(f"{PERSON_PREFIX}{key}", files)

    def publication(self, publication: PublicationImport, *, context: ImportContext) -> ImportItem:
        files = {
            schema_file("dspace"): entity_xml("Publication"),
            DUBLIN_CORE: publication_metadata(publication).to_xml(),
            schema_file("local"): self._embargo(publication.embargo),
            COLLECTIONS: collections_file(context.collection_handle(EntityKind.PUBLICATION)),
            RELATIONSHIPS: relationships_file(publication.relationships),
            CONTENTS: contents_file(publication),
        }
        content = {item.name: item.source for item in publication.content}
        return _item(publication.name, files, content)

    def _embargo(self, embargo: Embargo | None) -> str | None:
        if embargo is None:
            return None
        lift = embargo.lift
        local = (
            DublinCoreXml(schema="local")
            .single(access_group(embargo.terms(self.today)), "embargo", "terms")
            .single(lift.isoformat() if lift else None, "embargo", "lift")
        )
        return local.to_xml() if local.values else None


def publication_metadata(publication: PublicationImport) -> DublinCoreXml:
    """``dublin_core.xml`` of a publication.

    Authors are linked through relationships only, never as
    ``contributor.author`` values.
    """

    work = publication.work
    return (
        DublinCoreXml()
        .multi(work.title, "title")
        .multi(publication.contributors, "contributor")
        .multi(work.language, "language")
        .multi(work.language, "language", "iso", dc.language_iso)
        .multi(work.rights, "rights", transform=dc.rights)
        .multi(work.rights, "rights", "uri", dc.rights_uri)
        .multi(work.keyword, "subject", transform=dc.subject)
        .multi(work.related_url, "relation")
        .multi(work.sponsoring_agency, "description", "sponsorship")
        .single(work.resource_type, "type", transform=dc.resource_type)
        .single(work.publisher, "publisher")
        .single(work.published_date, "date", "issued", dc.issue_date)
        .single(work.identifier, "identifier")
        .single(work.doi, "identifier", "doi", dc.doi)
        .single(work.doi, "identifier", "uri", dc.doi_uri)
        .single(work.source_citation, "identifier", "citation")
        .multi(work.notes, "description")
        .single(work.date_modified, "description", transform=dc.submit_date)
        .single(work.abstract, "description", "abstract")
    )


def contents_file(publication: PublicationImport) -> str | None:
    """Content manifest, one file per line with its read permission."""

    group = publication.read_group
    lines = [
        f"{item.name}\tpermissions:-r '{group}'" if group else item.name
        for item in publication.content
    ]
    return "".join(f"{line}\n" for line in lines) or None


def _item(
    name: str,
    files: dict[str, str | None],
    content: dict[str, Path] | None = None,
) -> ImportItem:
    return ImportItem(
        name=name,
        files={file: text for file, text in files.items() if text},
        content=content or {},
    )


if TYPE_CHECKING:
    _renderer_check: ImportRenderer = DSpaceRenderer()
