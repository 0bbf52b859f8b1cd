"""Pydantic models describing the JSON documents of a LibraOpen export."""

from __future__ import annotations

from collections.abc import Sequence
from typing import cast

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    return value


def _first_value(value: object) -> object:
    if isinstance(value, Sequence) and not isinstance(value, str):
        items = [item for item in cast(Sequence[object], value) if _blank_to_none(item)]
        value = items[0] if items else None
    return _blank_to_none(value)


def _as_list(value: object) -> list[object]:
    if value is None:
        return []
    if isinstance(value, Sequence) and not isinstance(value, str):
        items = cast(Sequence[object], value)
    else:
        items = [value]
    return [item for item in map(_blank_to_none, items) if item is not None]


class LibraBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class PersonPayload(LibraBaseModel):
    """``author-*.json`` / ``contributor-*.json``."""

    first_name: str | None = None
    last_name: str | None = None
    computing_id: str | None = None
    department: str | None = None
    institution: str | None = None
    orcid: str | None = Field(
        default=None,
        validation_alias=AliasChoices("orcid", "orcid_url", "author_orcid_url"),
    )
    index: int | None = None

    _normalize_text = field_validator(
        "first_name",
        "last_name",
        "computing_id",
        "department",
        "institution",
        "orcid",
        mode="before",
    )(_first_value)


class FilesetPayload(LibraBaseModel):
    """``fileset-*.json``: names the content file at this position."""

    title: list[str] = Field(default_factory=list)
    label: str | None = None

    _normalize_title = field_validator("title", mode="before")(_as_list)
    _normalize_label = field_validator("label", mode="before")(_first_value)

    @property
    def file_name(self) -> str | None:
        return self.title[0] if self.title else self.label


class EmbargoPayload(LibraBaseModel):
    during: str | None = Field(
        default=None,
        validation_alias=AliasChoices("during", "visibility_during_embargo"),
    )
    after: str | None = Field(
        default=None,
        validation_alias=AliasChoices("after", "visibility_after_embargo"),
    )
    release: str | None = Field(
        default=None,
        validation_alias=AliasChoices("release", "embargo_release_date"),
    )
    deactivated: str | None = None
    embargo_history: list[str] = Field(default_factory=list)

    _normalize_values = field_validator(
        "during", "after", "release", "deactivated", mode="before"
    )(_first_value)
    _normalize_history = field_validator("embargo_history", mode="before")(_as_list)


class VisibilityPayload(LibraBaseModel):
    visibility: str | None = None

    _normalize_visibility = field_validator("visibility", mode="before")(_first_value)


class RightsPayload(LibraBaseModel):
    rights: list[str] = Field(default_factory=list)

    _normalize_rights = field_validator("rights", mode="before")(_as_list)


class WorkPayload(LibraBaseModel):
    """``work.json``; only the fields that carry over to DSpace are modelled."""

    id: str | None = None
    title: list[str] = Field(default_factory=list)
    language: list[str] = Field(default_factory=list)
    rights: list[str] = Field(default_factory=list)
    keyword: list[str] = Field(default_factory=list)
    related_url: list[str] = Field(default_factory=list)
    sponsoring_agency: list[str] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)
    resource_type: str | None = None
    publisher: str | None = None
    published_date: str | None = None
    doi: str | None = None
    source_citation: str | None = None
    date_modified: str | None = None
    abstract: str | None = None
    depositor: str | None = None
    author_orcid_url: str | None = None

    _normalize_lists = field_validator(
        "title",
        "language",
        "rights",
        "keyword",
        "related_url",
        "sponsoring_agency",
        "notes",
        mode="before",
    )(_as_list)
    _normalize_values = field_validator(
        "id",
        "resource_type",
        "publisher",
        "published_date",
        "doi",
        "source_citation",
        "date_modified",
        "abstract",
        "depositor",
        "author_orcid_url",
        mode="before",
    )(_first_value)
