from __future__ import annotations

from typing import TYPE_CHECKING

from libra2dspace.domain.import_pipeline import (
    ImportContext,
    PhaseOrchestrator,
    register_descriptors,
)
from libra2dspace.domain.model import (
    BlockReason,
    EntityKind,
    ExportRecord,
    ImportItem,
    PersonDescriptor,
    Phase,
)
from tests.helpers.dates import TODAY
from tests.helpers.fakes import MemoryWriter, current_table

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from libra2dspace.domain.import_pipeline import Translations
    from libra2dspace.domain.model import (
        OrgUnitImport,
        PersonImport,
        PublicationImport,
        Relationship,
    )

JANE = PersonDescriptor(
    first_name="Jane",
    last_name="Doe",
    computing_id="jd1",
    department="CS-Comp Science Dept",
    institution="University of Virginia",
)


class StubRenderer:
    def org_unit(self, key: str, org: OrgUnitImport, *, context: ImportContext) -> ImportItem:
        return ImportItem(name=f"org-{key}")

    def person(
        self,
        key: str,
        person: PersonImport,
        *,
        relationships: Sequence[Relationship],
        context: ImportContext,
    ) -> ImportItem:
        lines = "\n".join(line.render() for line in relationships)
        return ImportItem(name=f"person-{key}", files={"relationships": lines})

    def publication(
        self, publication: PublicationImport, *, context: ImportContext
    ) -> ImportItem:
        return ImportItem(name=publication.name)


def _records(tmp_path: Path, *descriptors: PersonDescriptor) -> list[ExportRecord]:
    return [
        ExportRecord(
            external_id="w1",
            directory=tmp_path / "export-w1",
            authors=descriptors or (JANE,),
        )
    ]


def _context(
    translations: Translations,
    *,
    orgs: Sequence[str] = (),
    persons: Sequence[str] = (),
) -> ImportContext:
    return ImportContext(
        translations=translations,
        current={
            EntityKind.ORG_UNIT: current_table(EntityKind.ORG_UNIT, *orgs),
            EntityKind.PERSON: current_table(EntityKind.PERSON, *persons),
        },
    )


def _orchestrator(
    context: ImportContext,
    *,
    batch_limit: int = 1000,
    force: bool = False,
) -> tuple[PhaseOrchestrator, MemoryWriter]:
    writer = MemoryWriter()
    orchestrator = PhaseOrchestrator(
        context=context,
        renderer=StubRenderer(),
        writer=writer,
        batch_limit=batch_limit,
        force=force,
        today=TODAY,
    )
    return orchestrator, writer


def test_phase_all_writes_every_kind(tmp_path: Path, translations: Translations) -> None:
    orchestrator, writer = _orchestrator(_context(translations))

    outcome = orchestrator.run(_records(tmp_path), Phase.ALL)

    assert outcome.success
    assert outcome.written == ("org-computer_science", "person-jd1", "import-w1")
    assert list(writer.items) == list(outcome.written)
    assert writer.prepared == 1
    relationships = writer.items["person-jd1"].files["relationships"]
    assert relationships == "relation.isOrgUnitOfPerson folderName:org-computer_science"


def test_org_unit_phase_writes_only_org_units(tmp_path: Path, translations: Translations) -> None:
    orchestrator, _ = _orchestrator(_context(translations))

    outcome = orchestrator.run(_records(tmp_path), Phase.ORG_UNIT)

    assert outcome.written == ("org-computer_science",)
    assert outcome.pending.persons == 0


def test_person_phase_links_existing_org_units(
    tmp_path: Path, translations: Translations
) -> None:
    orchestrator, writer = _orchestrator(_context(translations, orgs=["computer_science"]))

    outcome = orchestrator.run(_records(tmp_path), Phase.PERSON)

    assert outcome.written == ("person-jd1",)
    relationships = writer.items["person-jd1"].files["relationships"]
    assert relationships == "relation.isOrgUnitOfPerson uuid-computer_science"


def test_publication_phase_blocked_by_pending_org_units(
    tmp_path: Path, translations: Translations
) -> None:
    orchestrator, writer = _orchestrator(_context(translations, persons=["jd1"]))

    outcome = orchestrator.run(_records(tmp_path), Phase.PUBLICATION)

    assert not outcome.success
    assert outcome.reason is BlockReason.ORG_UNITS_PENDING
    assert outcome.blocked_kind is EntityKind.ORG_UNIT
    assert list(outcome.blocked_table) == ["computer_science"]
    assert writer.prepared == 0


def test_publication_phase_blocked_by_pending_persons(
    tmp_path: Path, translations: Translations
) -> None:
    orchestrator, _ = _orchestrator(_context(translations, orgs=["computer_science"]))

    outcome = orchestrator.run(_records(tmp_path), Phase.PUBLICATION)

    assert outcome.reason is BlockReason.PERSONS_PENDING
    assert list(outcome.blocked_table) == ["jd1"]


def test_publication_phase_when_dependencies_exist(
    tmp_path: Path, translations: Translations
) -> None:
    context = _context(translations, orgs=["computer_science"], persons=["jd1"])
    orchestrator, _ = _orchestrator(context)

    outcome = orchestrator.run(_records(tmp_path), Phase.PUBLICATION)

    assert outcome.written == ("import-w1",)


def test_nothing_pending(tmp_path: Path, translations: Translations) -> None:
    orchestrator, writer = _orchestrator(_context(translations, orgs=["computer_science"]))

    outcome = orchestrator.run(_records(tmp_path), Phase.ORG_UNIT)

    assert outcome.reason is BlockReason.NOTHING_PENDING
    assert writer.prepared == 0


def test_force_rebuilds_existing_entities(tmp_path: Path, translations: Translations) -> None:
    orchestrator, _ = _orchestrator(_context(translations, orgs=["computer_science"]), force=True)

    outcome = orchestrator.run(_records(tmp_path), Phase.ORG_UNIT)

    assert outcome.written == ("org-computer_science",)


def test_over_batch_limit_suggests_first_phase(
    tmp_path: Path, translations: Translations
) -> None:
    orchestrator, writer = _orchestrator(_context(translations), batch_limit=2)

    outcome = orchestrator.run(_records(tmp_path), Phase.ALL)

    assert outcome.reason is BlockReason.OVER_BATCH_LIMIT
    assert outcome.message is not None
    assert "--phase 1" in outcome.message
    assert writer.prepared == 0


def test_depositor_orcid_is_attached(tmp_path: Path, translations: Translations) -> None:
    records = _records(tmp_path)
    records[0].orcid["jd1"] = "0000-0001-2345-6789"

    run = register_descriptors(records, Phase.PERSON, _context(translations))

    assert run.persons["jd1"].orcid == "0000-0001-2345-6789"


def test_person_phase_blocked_by_pending_org_units(
    tmp_path: Path, translations: Translations
) -> None:
    orchestrator, writer = _orchestrator(_context(translations))

    outcome = orchestrator.run(_records(tmp_path), Phase.PERSON)

    assert outcome.reason is BlockReason.ORG_UNITS_PENDING
    assert outcome.written == ()
    assert writer.items == {}
