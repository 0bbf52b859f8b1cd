"""Phase-gated orchestration of one import run.

DSpace needs org-units before the persons that belong to them and persons
before the publications they wrote. Each run is told which phase to build;
between runs the operator imports the result, so the next run finds the new
entities in the current tables and no longer counts them as pending.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from logging import getLogger
from typing import TYPE_CHECKING, Any

from libra2dspace.domain.batching import DEFAULT_BATCH_LIMIT
from libra2dspace.domain.model import BlockReason, EntityKind, Phase

from .entity_ops import ops_for
from .persons import normalize_cid, person_relationships
from .publications import assemble_publication
from .tables import ImportTable

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence
    from datetime import date

    from libra2dspace.domain.model import (
        ExportRecord,
        ImportItem,
        OrgUnitImport,
        PersonDescriptor,
        PersonImport,
    )
    from libra2dspace.domain.ports import ImportItemWriter, ImportRenderer

    from .context import ImportContext

log = getLogger(__name__)

_MATERIALIZED: dict[Phase, frozenset[EntityKind]] = {
    Phase.ALL: frozenset({EntityKind.ORG_UNIT, EntityKind.PERSON, EntityKind.PUBLICATION}),
    Phase.ORG_UNIT: frozenset({EntityKind.ORG_UNIT}),
    Phase.PERSON: frozenset({EntityKind.PERSON}),
    Phase.PUBLICATION: frozenset({EntityKind.PUBLICATION}),
}


def materialized_kinds(phase: Phase) -> frozenset[EntityKind]:
    """Entity kinds whose import items a run at ``phase`` writes."""

    return _MATERIALIZED[phase]


@dataclass(slots=True, frozen=True)
class PendingCounts:
    org_units: int = 0
    persons: int = 0
    publications: int = 0

    @property
    def total(self) -> int:
        return self.org_units + self.persons + self.publications

    def for_phase(self, phase: Phase) -> int:
        if phase is Phase.ORG_UNIT:
            return self.org_units
        if phase is Phase.PERSON:
            return self.persons
        if phase is Phase.PUBLICATION:
            return self.publications
        return self.total


@dataclass(slots=True, frozen=True)
class PhaseOutcome:
    """Result of a run: the items written, or why nothing was written."""

    phase: Phase
    pending: PendingCounts
    reason: BlockReason | None = None
    message: str | None = None
    blocked_kind: EntityKind | None = None
    blocked_table: Mapping[str, Any] = field(default_factory=dict)
    written: tuple[str, ...] = ()

    @property
    def success(self) -> bool:
        return self.reason is None


@dataclass(slots=True)
class ImportRun:
    """Records of one scan plus the org-unit and person tables derived from them."""

    records: list[ExportRecord]
    org_units: ImportTable[OrgUnitImport]
    persons: ImportTable[PersonImport]

    @property
    def pending(self) -> PendingCounts:
        return PendingCounts(
            org_units=len(self.org_units),
            persons=len(self.persons),
            publications=len(self.records),
        )


def _with_orcid(descriptor: PersonDescriptor, record: ExportRecord) -> PersonDescriptor:
    if descriptor.orcid or not record.orcid:
        return descriptor
    orcid = record.orcid.get(normalize_cid(descriptor.computing_id) or "")
    return replace(descriptor, orcid=orcid) if orcid else descriptor


def register_descriptors(
    records: Iterable[ExportRecord],
    phase: Phase,
    context: ImportContext,
    *,
    force: bool = False,
) -> ImportRun:
    """Feed every author and contributor into the org-unit and person tables."""

    run = ImportRun(
        records=list(records),
        org_units=ImportTable(ops_for(EntityKind.ORG_UNIT), context),
        persons=ImportTable(ops_for(EntityKind.PERSON), context),
    )
    kinds = materialized_kinds(phase)
    force_orgs = force and EntityKind.ORG_UNIT in kinds
    force_persons = force and EntityKind.PERSON in kinds
    with_persons = phase is not Phase.ORG_UNIT
    with_publications = EntityKind.PUBLICATION in kinds

    for record in run.records:
        for descriptor in record.descriptors:
            descriptor = _with_orcid(descriptor, record)
            run.org_units.add_import(descriptor, force=force_orgs)
            if with_persons:
                run.persons.add_import(descriptor, force=force_persons)
            if with_publications:
                person = run.persons.ops.normalize(descriptor, context)
                key = run.persons.ops.key_for(person)
                if key is not None:
                    record.attach_orgs(key, list(person.orgs))
    return run


@dataclass(slots=True)
class PhaseOrchestrator:
    """Decides what a run may build and writes the import items for its phase."""

    context: ImportContext
    renderer: ImportRenderer
    writer: ImportItemWriter
    batch_limit: int = DEFAULT_BATCH_LIMIT
    force: bool = False
    today: date | None = None

    def run(self, records: Sequence[ExportRecord], phase: Phase) -> PhaseOutcome:
        run = register_descriptors(records, phase, self.context, force=self.force)
        pending = run.pending
        log.info(
            "Pending: org_units=%s, persons=%s, publications=%s",
            pending.org_units,
            pending.persons,
            pending.publications,
        )
        blocked = self._blocked(run, phase)
        if blocked is not None:
            log.warning("Nothing written: %s", blocked.message)
            return blocked
        written = self._materialize(run, phase)
        log.info("Wrote %s import items for phase %s", len(written), phase.name)
        return PhaseOutcome(phase=phase, pending=pending, written=written)

    def _blocked(self, run: ImportRun, phase: Phase) -> PhaseOutcome | None:
        pending = run.pending
        if phase is Phase.ALL:
            if pending.total == 0:
                return self._block(phase, pending, BlockReason.NOTHING_PENDING, "nothing to import")
            if pending.total > self.batch_limit:
                if pending.org_units:
                    hint = Phase.ORG_UNIT
                elif pending.persons:
                    hint = Phase.PERSON
                else:
                    hint = Phase.PUBLICATION
                message = (
                    f"{pending.total} items exceed the batch limit of {self.batch_limit}; "
                    f"run with --phase {int(hint)} ({hint.name}) first"
                )
                return self._block(phase, pending, BlockReason.OVER_BATCH_LIMIT, message)
            return None

        if pending.for_phase(phase) == 0:
            message = f"no pending {phase.name} items"
            return self._block(phase, pending, BlockReason.NOTHING_PENDING, message)
        if phase > Phase.ORG_UNIT and pending.org_units:
            message = f"{pending.org_units} org-units must be imported before {phase.name}"
            return self._block(
                phase,
                pending,
                BlockReason.ORG_UNITS_PENDING,
                message,
                kind=EntityKind.ORG_UNIT,
                table=run.org_units,
            )
        if phase > Phase.PERSON and pending.persons:
            message = f"{pending.persons} persons must be imported before {phase.name}"
            return self._block(
                phase,
                pending,
                BlockReason.PERSONS_PENDING,
                message,
                kind=EntityKind.PERSON,
                table=run.persons,
            )
        return None

    @staticmethod
    def _block(
        phase: Phase,
        pending: PendingCounts,
        reason: BlockReason,
        message: str,
        *,
        kind: EntityKind | None = None,
        table: Mapping[str, Any] | None = None,
    ) -> PhaseOutcome:
        return PhaseOutcome(
            phase=phase,
            pending=pending,
            reason=reason,
            message=message,
            blocked_kind=kind,
            blocked_table=dict(table or {}),
        )

    def _materialize(self, run: ImportRun, phase: Phase) -> tuple[str, ...]:
        kinds = materialized_kinds(phase)
        context = self.context
        self.writer.prepare_root()
        written: list[str] = []

        if EntityKind.ORG_UNIT in kinds:
            for key, org in run.org_units.items():
                written.append(self._write(self.renderer.org_unit(key, org, context=context)))

        if EntityKind.PERSON in kinds:
            current_orgs = context.current_table(EntityKind.ORG_UNIT)
            for key, person in run.persons.items():
                item = self.renderer.person(
                    key,
                    person,
                    relationships=person_relationships(person, current_orgs),
                    context=context,
                )
                written.append(self._write(item))

        if EntityKind.PUBLICATION in kinds:
            for record in run.records:
                publication = assemble_publication(
                    record,
                    persons=run.persons,
                    org_units=run.org_units,
                    context=context,
                    today=self.today,
                )
                written.append(self._write(self.renderer.publication(publication, context=context)))

        return tuple(written)

    def _write(self, item: ImportItem) -> str:
        self.writer.write(item)
        return item.name
