"""DSpace destination configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import optional_env_var, require_env_vars
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, ShouldCacheHook

DSPACE_TIMEOUT_SECONDS: Final[float] = 60.0
DSPACE_PAGE_SIZE: Final[int] = 100


@dataclass(frozen=True, slots=True)
class CollectionNames:
    """Names of the destination collections that receive each entity kind."""

    org_unit: str | None = None
    person: str | None = None
    publication: str | None = None


@dataclass(frozen=True, slots=True)
class DSpaceConfig:
    """Holds DSpace REST API configuration values."""

    api_host: str
    collections: CollectionNames
    resilience: ResilienceConfig
    page_size: int = DSPACE_PAGE_SIZE


def api_base_url(host: str) -> str:
    host = host.rstrip("/")
    if "://" not in host:
        host = f"https://{host}"
    return f"{host}/server/api/"


def get_collection_names() -> CollectionNames:
    return CollectionNames(
        org_unit=optional_env_var("ORG_COLLECTION"),
        person=optional_env_var("USR_COLLECTION"),
        publication=optional_env_var("PUB_COLLECTION"),
    )


def get_dspace_config(
    *,
    resilience: ResilienceConfig | None = None,
    cache_predicate: ShouldCacheHook | None = None,
) -> DSpaceConfig:
    values = require_env_vars(("DSPACE_API",))
    host = values["DSPACE_API"]
    return DSpaceConfig(
        api_host=host,
        collections=get_collection_names(),
        resilience=resilience
        or ResilienceConfig(
            name="dspace",
            base_url=api_base_url(host),
            timeout_seconds=DSPACE_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=8, per_seconds=1.0),
            cache=CacheConfig(backend="memory", should_cache=cache_predicate),
            default_headers={"Accept": "application/json"},
        ),
    )
