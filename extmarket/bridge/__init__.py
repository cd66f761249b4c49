"""Bridges to the collaborators outside the marketplace client.

The host application, the HTTP stack, and the cache backend live behind
the Protocols in ``extmarket.bridge.protocols``.  This package also ships
the default httpx transport and two local cache stores.
"""

from extmarket.bridge.cache_store import MemoryCacheStore, NullCacheStore
from extmarket.bridge.protocols import (
    CacheStore,
    ExtensionManager,
    HttpClient,
    PlatformVersionProvider,
    RequirementAnalyzer,
    StaticPlatformVersion,
)
from extmarket.bridge.transport import HttpTransport

__all__ = [
    "CacheStore",
    "ExtensionManager",
    "HttpClient",
    "HttpTransport",
    "MemoryCacheStore",
    "NullCacheStore",
    "PlatformVersionProvider",
    "RequirementAnalyzer",
    "StaticPlatformVersion",
]
