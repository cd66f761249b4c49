"""Catalog cache — TTL-bounded caching of the remote catalog responses.

Two remote resources are cached:

- ``{store_url}/api/v1/platform/{version}/apps.json`` under ``apps_{version}``
- ``{store_url}/api/v1/categories.json`` under ``categories``

The platform version in both the key and the URL is truncated to three
components, so every patch release of the host shares one cache entry.

A cache hit is trusted without revalidation until its TTL runs out; the
server sends no invalidation signal.  When the cache store reports itself
unavailable the query goes straight to the server and nothing is stored.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError

from extmarket.bridge.protocols import CacheStore, HttpClient
from extmarket.config import MarketConfig
from extmarket.core.errors import TransportError
from extmarket.core.versions import PlatformVersion, normalize_versions
from extmarket.models.catalog import CatalogEntry

logger = logging.getLogger(__name__)

# Catalog granularity: platform versions are truncated to this many components
_KEY_REFERENCE_VERSION = "1.2.3"

_CATALOG_ADAPTER = TypeAdapter(list[CatalogEntry])
_CATEGORIES_ADAPTER = TypeAdapter(list[str])


def catalog_version(platform_version: PlatformVersion | str) -> str:
    """Truncate a platform version to the catalog's versioning granularity.

    >>> catalog_version("10.2.1.7")
    '10.2.1'
    >>> catalog_version("9")
    '9'
    """
    version, _ = normalize_versions(str(platform_version), _KEY_REFERENCE_VERSION)
    return version


class CatalogCache:
    """Fetches catalog and category lists, caching them behind a TTL.

    Parameters
    ----------
    http:
        Transport used for remote fetches.
    store:
        Cache backend.  Its ``available()`` is checked on every query.
    config:
        Supplies the store URL and TTL.

    Examples
    --------
    >>> from extmarket.bridge.cache_store import MemoryCacheStore
    >>> cache = CatalogCache(http, MemoryCacheStore(), MarketConfig())  # doctest: +SKIP
    >>> cache.get_catalog(PlatformVersion.parse("10.2.1"))  # doctest: +SKIP
    [CatalogEntry(id='files_antivirus', ...), ...]
    """

    def __init__(
        self,
        http: HttpClient,
        store: CacheStore,
        config: MarketConfig,
    ) -> None:
        self._http = http
        self._store = store
        self._config = config

    def get_catalog(self, platform_version: PlatformVersion | str) -> list[CatalogEntry]:
        """Return the catalog for *platform_version*, in server order."""
        version = catalog_version(platform_version)
        return self._query(
            f"apps_{version}", self._config.apps_url(version), _CATALOG_ADAPTER
        )

    def get_categories(self) -> list[str]:
        return self._query(
            "categories", self._config.categories_url(), _CATEGORIES_ADAPTER
        )

    # -- Internals ----------------------------------------------------------

    def _query(self, key: str, url: str, adapter: TypeAdapter[Any]) -> Any:
        """Return the validated payload for *key*, fetching *url* on a miss.

        Only bodies that decode and validate against *adapter* are cached.
        """
        use_cache = self._store.available()

        if use_cache:
            cached = self._store.get(key)
            if cached is not None:
                try:
                    data = adapter.validate_json(cached)
                except ValidationError:
                    logger.warning(
                        "Cached payload for '%s' is unusable; refetching.", key
                    )
                else:
                    logger.debug("Catalog cache hit for '%s'.", key)
                    return data

        body = self._http.get(url)
        try:
            data = adapter.validate_json(body)
        except ValidationError as exc:
            raise TransportError(f"Malformed response from {url}: {exc}") from exc

        if use_cache:
            self._store.set(key, body, self._config.cache_ttl_seconds)
            logger.info(
                "Cached '%s' for %d seconds.", key, self._config.cache_ttl_seconds
            )
        return data
