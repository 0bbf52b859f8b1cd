"""Entity resolution and phase orchestration for the DSpace import.

Author and contributor descriptors of every export record are resolved into
deduplicated org-unit and person tables (``ImportTable``), checked against
what the destination already holds (``CurrentTable``), and written as import
items for the phase the operator selected (``PhaseOrchestrator``). All
read-only inputs travel in one ``ImportContext``.
"""

from __future__ import annotations

from .context import ImportContext, TranslationTable, Translations
from .entity_ops import EntityOps, ops_for
from .keys import key_from, normalize_value
from .orchestrator import (
    ImportRun,
    PendingCounts,
    PhaseOrchestrator,
    PhaseOutcome,
    materialized_kinds,
    register_descriptors,
)
from .org_units import is_home_institution, org_unit_key
from .persons import normalize_cid, person_key
from .publications import assemble_publication
from .tables import CurrentTable, ImportTable, RemoteEntry

__all__ = [
    "CurrentTable",
    "EntityOps",
    "ImportContext",
    "ImportRun",
    "ImportTable",
    "PendingCounts",
    "PhaseOrchestrator",
    "PhaseOutcome",
    "RemoteEntry",
    "TranslationTable",
    "Translations",
    "assemble_publication",
    "is_home_institution",
    "key_from",
    "materialized_kinds",
    "normalize_cid",
    "normalize_value",
    "ops_for",
    "org_unit_key",
    "person_key",
    "register_descriptors",
]
