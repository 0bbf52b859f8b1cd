from __future__ import annotations

from libra2dspace.adapters.libra.schema import (
    EmbargoPayload,
    FilesetPayload,
    PersonPayload,
    WorkPayload,
)


def test_person_fields_are_cleaned() -> None:
    payload = PersonPayload.model_validate(
        {
            "first_name": ["", " Jane "],
            "last_name": "Doe",
            "computing_id": "",
            "orcid_url": "https://orcid.org/0000-0001",
            "index": 2,
        }
    )

    assert payload.first_name == "Jane"
    assert payload.computing_id is None
    assert payload.orcid == "https://orcid.org/0000-0001"
    assert payload.index == 2


def test_fileset_name_prefers_title() -> None:
    both = FilesetPayload.model_validate({"title": ["a.pdf"], "label": "b.pdf"})

    assert both.file_name == "a.pdf"
    assert FilesetPayload.model_validate({"title": [], "label": ["b.pdf"]}).file_name == "b.pdf"
    assert FilesetPayload.model_validate({}).file_name is None


def test_embargo_accepts_export_field_names() -> None:
    payload = EmbargoPayload.model_validate(
        {"visibility_during_embargo": "restricted", "embargo_release_date": ["2030-01-01"]}
    )

    assert payload.during == "restricted"
    assert payload.release == "2030-01-01"
    assert payload.embargo_history == []


def test_work_lists_and_values() -> None:
    payload = WorkPayload.model_validate(
        {
            "id": 42,
            "title": "Only Title",
            "keyword": ["one", " ", "two"],
            "publisher": [],
            "extra": {"ignored": True},
        }
    )

    assert payload.id == "42"
    assert payload.title == ["Only Title"]
    assert payload.keyword == ["one", "two"]
    assert payload.publisher is None
