from __future__ import annotations

from typing import TYPE_CHECKING

from libra2dspace.domain.import_pipeline.persons import (
    merge_persons,
    normalize_cid,
    normalize_person,
    person_key,
    person_relationships,
)
from libra2dspace.domain.model import EntityKind, OrgUnitImport, PersonDescriptor, PersonImport
from tests.helpers.fakes import current_table

if TYPE_CHECKING:
    from libra2dspace.domain.import_pipeline import ImportContext


def test_normalize_person_cleans_every_field(context: ImportContext) -> None:
    descriptor = PersonDescriptor(
        first_name="Dr. Jane ",
        last_name="Doe",
        computing_id="JD1@virginia.edu",
        department="CS-Comp Science Dept",
        institution="University of Virginia",
        orcid="https://orcid.org/0000-0001-2345-6789",
    )

    person = normalize_person(descriptor, context)

    assert person.computing_id == "jd1"
    assert person.first_name == "Jane"
    assert person.last_name == "Doe"
    assert person.orcid == "0000-0001-2345-6789"
    assert person.title_name == "Doe, Jane"
    assert person.email == "jd1@virginia.edu"
    assert [org.department for org in person.orgs] == ["Computer Science"]
    assert person_key(person) == "jd1"


def test_normalize_cid_only_strips_home_domain() -> None:
    assert normalize_cid("ab3c@cs.virginia.edu") == "ab3c"
    assert normalize_cid("someone@example.org") == "someone@example.org"
    assert normalize_cid("  ") is None


def test_person_key_falls_back_to_name(context: ImportContext) -> None:
    person = normalize_person(PersonDescriptor(first_name="Jane", last_name="Doe"), context)

    assert person_key(person) == "doe+jane"
    assert person.email is None


def test_nameless_person_is_named_after_department(context: ImportContext) -> None:
    descriptor = PersonDescriptor(department="Dept. of Physics", institution="VCU")

    person = normalize_person(descriptor, context)

    assert person.last_name == "Dept. of Physics"
    assert person_key(person) == "dept._of_physics"


def test_merge_unions_orgs_in_first_seen_order() -> None:
    physics = OrgUnitImport(department="Physics", title_name="Physics")
    history = OrgUnitImport(department="History", title_name="History")
    old = PersonImport(computing_id="jd1", last_name="Doe", orgs=(physics,))
    new = PersonImport(
        computing_id="jd1", first_name="Jane", last_name="Doe", orgs=(history, physics)
    )

    merged = merge_persons(old, new, key="jd1")

    assert merged.orgs == (physics, history)
    assert merged.first_name == "Jane"


def test_relationships_use_uuid_for_known_orgs() -> None:
    physics = OrgUnitImport(department="Physics", title_name="Physics")
    history = OrgUnitImport(department="History", title_name="History")
    person = PersonImport(computing_id="jd1", orgs=(physics, history))
    orgs = current_table(EntityKind.ORG_UNIT, "physics")

    lines = [line.render() for line in person_relationships(person, orgs)]

    assert lines == [
        "relation.isOrgUnitOfPerson uuid-physics",
        "relation.isOrgUnitOfPerson folderName:org-history",
    ]


def test_same_person_with_and_without_computing_id_gives_two_keys(
    context: ImportContext,
) -> None:
    without_cid = normalize_person(PersonDescriptor(first_name="Jane", last_name="Smith"), context)
    with_cid = normalize_person(
        PersonDescriptor(first_name="Jane", last_name="Smith", computing_id="js1"), context
    )

    assert person_key(without_cid) == "smith+jane"
    assert person_key(with_cid) == "js1"
