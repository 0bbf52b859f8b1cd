"""Pydantic models describing the DSpace REST API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DSpaceBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class MetadataValue(DSpaceBaseModel):
    value: str | None = None


class DSpaceObject(DSpaceBaseModel):
    uuid: str
    name: str | None = None
    handle: str | None = None
    metadata: dict[str, list[MetadataValue]] = Field(default_factory=dict)

    def first_value(self, name: str) -> str | None:
        """First value of the metadata field ``name``."""

        for item in self.metadata.get(name, ()):
            if item.value:
                return item.value
        return None


class PageInfo(DSpaceBaseModel):
    size: int = 0
    total_elements: int = Field(default=0, alias="totalElements")
    total_pages: int = Field(default=1, alias="totalPages")
    number: int = 0


class IndexableEmbedded(DSpaceBaseModel):
    indexable_object: DSpaceObject = Field(alias="indexableObject")


class SearchObject(DSpaceBaseModel):
    embedded: IndexableEmbedded = Field(alias="_embedded")


class SearchObjects(DSpaceBaseModel):
    objects: list[SearchObject] = Field(default_factory=list)


class SearchResult(DSpaceBaseModel):
    embedded: SearchObjects = Field(default_factory=SearchObjects, alias="_embedded")
    page: PageInfo = Field(default_factory=PageInfo)


class SearchEmbedded(DSpaceBaseModel):
    search_result: SearchResult = Field(default_factory=SearchResult, alias="searchResult")


class SearchResponse(DSpaceBaseModel):
    embedded: SearchEmbedded = Field(default_factory=SearchEmbedded, alias="_embedded")

    @property
    def objects(self) -> list[DSpaceObject]:
        objects = self.embedded.search_result.embedded.objects
        return [item.embedded.indexable_object for item in objects]

    @property
    def total_pages(self) -> int:
        return self.embedded.search_result.page.total_pages


class CollectionsEmbedded(DSpaceBaseModel):
    collections: list[DSpaceObject] = Field(default_factory=list)


class CollectionsResponse(DSpaceBaseModel):
    embedded: CollectionsEmbedded = Field(default_factory=CollectionsEmbedded, alias="_embedded")
    page: PageInfo = Field(default_factory=PageInfo)

    @property
    def objects(self) -> list[DSpaceObject]:
        return self.embedded.collections

    @property
    def total_pages(self) -> int:
        return self.page.total_pages


type PagedResponse = SearchResponse | CollectionsResponse
