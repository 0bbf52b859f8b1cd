"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class Phase(IntEnum):
    """Operator-selected stage gating which entity kind a run materializes."""

    ALL = 0
    ORG_UNIT = 1
    PERSON = 2
    PUBLICATION = 3


class EntityKind(StrEnum):
    ORG_UNIT = "org_unit"
    PERSON = "person"
    PUBLICATION = "publication"
    COLLECTION = "collection"


class ExportFileRole(StrEnum):
    """Classification of a file inside one export record directory."""

    METADATA = "metadata"
    RIGHTS = "rights"
    EMBARGO = "embargo"
    VISIBILITY = "visibility"
    AUTHOR = "author"
    CONTRIBUTOR = "contributor"
    FILESET = "fileset"
    CONTENT = "content"


class Resolution(StrEnum):
    """Outcome of resolving one conflicting field during a merge."""

    PRESERVE = "preserve"
    REPLACE = "replace"
    MERGE = "merge"


class BlockReason(StrEnum):
    NOTHING_PENDING = "nothing_pending"
    OVER_BATCH_LIMIT = "over_batch_limit"
    ORG_UNITS_PENDING = "org_units_pending"
    PERSONS_PENDING = "persons_pending"
