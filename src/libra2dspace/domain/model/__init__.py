"""Domain model for the LibraOpen to DSpace import."""

from __future__ import annotations

from .enums import BlockReason, EntityKind, ExportFileRole, Phase, Resolution
from .export import (
    EXPORT_PREFIX,
    Embargo,
    ExportRecord,
    FilesetDescriptor,
    PersonDescriptor,
    WorkMetadata,
)
from .imports import (
    IMPORT_PREFIX,
    ORG_PREFIX,
    PERSON_PREFIX,
    ContentFile,
    EntityImport,
    ImportItem,
    OrgUnitImport,
    PersonImport,
    PublicationImport,
    Relationship,
)

__all__ = [
    "EXPORT_PREFIX",
    "IMPORT_PREFIX",
    "ORG_PREFIX",
    "PERSON_PREFIX",
    "BlockReason",
    "ContentFile",
    "Embargo",
    "EntityImport",
    "EntityKind",
    "ExportFileRole",
    "ExportRecord",
    "FilesetDescriptor",
    "ImportItem",
    "OrgUnitImport",
    "PersonDescriptor",
    "PersonImport",
    "Phase",
    "PublicationImport",
    "Relationship",
    "WorkMetadata",
]
