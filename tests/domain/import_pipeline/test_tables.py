from __future__ import annotations

from typing import TYPE_CHECKING

from libra2dspace.domain.import_pipeline import ImportContext, ImportTable, ops_for
from libra2dspace.domain.model import EntityKind, PersonDescriptor
from tests.helpers.fakes import current_table

if TYPE_CHECKING:
    from libra2dspace.domain.import_pipeline import Translations


def test_add_merges_entries_sharing_a_key(context: ImportContext) -> None:
    table = ImportTable(ops_for(EntityKind.ORG_UNIT), context)

    first = table.add(PersonDescriptor(department="Physics", institution="VCU"))
    second = table.add(PersonDescriptor(department="Dept. of Physics", institution="VCU"))

    assert first == second == "virginia_commonwealth_university+physics"
    assert len(table) == 1
    assert table[first].description == ("Virginia Commonwealth University", "Physics")


def test_add_without_identity_returns_none(context: ImportContext) -> None:
    table = ImportTable(ops_for(EntityKind.PERSON), context)

    assert table.add(PersonDescriptor()) is None
    assert len(table) == 0


def test_add_import_skips_entities_already_present(translations: Translations) -> None:
    context = ImportContext(
        translations=translations,
        current={EntityKind.ORG_UNIT: current_table(EntityKind.ORG_UNIT, "physics")},
    )
    table = ImportTable(ops_for(EntityKind.ORG_UNIT), context)
    descriptor = PersonDescriptor(department="Physics", institution="University of Virginia")

    assert table.add_import(descriptor) is None
    assert "physics" not in table

    assert table.add_import(descriptor, force=True) == "physics"
    assert "physics" in table


def test_key_for_does_not_insert(context: ImportContext) -> None:
    table = ImportTable(ops_for(EntityKind.PERSON), context)

    assert table.key_for(PersonDescriptor(computing_id="ab1@virginia.edu")) == "ab1"
    assert len(table) == 0


def test_current_table_reference() -> None:
    table = current_table(EntityKind.PERSON, "ab1")

    assert table.reference("ab1", "person-ab1") == "uuid-ab1"
    assert table.reference("cd2", "person-cd2") == "folderName:person-cd2"
    assert list(table) == ["ab1"]


def test_folder_names() -> None:
    assert ops_for(EntityKind.ORG_UNIT).folder_name("physics") == "org-physics"
    assert ops_for(EntityKind.PERSON).folder_name("ab1") == "person-ab1"
