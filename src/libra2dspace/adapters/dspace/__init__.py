"""Public interface for the DSpace adapter."""

from __future__ import annotations

from .client import DSpaceAPIError, DSpaceClient
from .lookup import DSpaceLookup
from .rendering import DSpaceRenderer, DublinCoreXml
from .schema import CollectionsResponse, DSpaceObject, SearchResponse
from .translator import collection_table, org_unit_table, person_table

__all__ = [
    "CollectionsResponse",
    "DSpaceAPIError",
    "DSpaceClient",
    "DSpaceLookup",
    "DSpaceObject",
    "DSpaceRenderer",
    "DublinCoreXml",
    "SearchResponse",
    "collection_table",
    "org_unit_table",
    "person_table",
]
