"""Collaborator protocols — the host-side seams of the marketplace client.

The marketplace client never talks to the host application directly.  It
depends on these Protocols instead, so any host (or test double) that
provides the methods below can be plugged in:

1. **ExtensionManager** — enumerates installed extensions and performs the
   actual install/update from a downloaded package.
2. **CacheStore** — generic key/value store with TTL, usually a remote
   cache.  ``available()`` is consulted on every catalog query.
3. **HttpClient** — GET with auth headers, and streaming download to a file.
4. **RequirementAnalyzer** — black box returning unmet requirements.
5. **PlatformVersionProvider** — the host's own version.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from extmarket.core.versions import PlatformVersion
from extmarket.models.installed import InstalledInfo


@runtime_checkable
class ExtensionManager(Protocol):
    """Protocol for the host's extension manager.

    Handles returned by ``list_installed`` are opaque host-local
    identifiers (often a directory name); they are used as keys of the
    bulk-scan result.
    """

    def list_installed(self) -> Sequence[str]:
        ...

    def info_of(self, handle: str) -> InstalledInfo | None:
        """Return what the host knows about *handle*, or ``None``."""
        ...

    def install(self, package_path: Path) -> None:
        ...

    def update(self, package_path: Path) -> None:
        ...


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for the key/value cache backing catalog responses."""

    def available(self) -> bool:
        ...

    def get(self, key: str) -> bytes | None:
        ...

    def set(self, key: str, value: bytes, ttl_seconds: int) -> None:
        ...


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for marketplace HTTP access.

    Implementations raise ``TransportError`` on any failure and make
    exactly one attempt per call.
    """

    def get(self, url: str) -> bytes:
        ...

    def download(self, url: str, dest: Path) -> None:
        ...


@runtime_checkable
class RequirementAnalyzer(Protocol):
    def analyze(self, metadata: Mapping[str, Any]) -> list[str]:
        """Return human-readable descriptions of unmet requirements."""
        ...


@runtime_checkable
class PlatformVersionProvider(Protocol):
    def current_version(self) -> PlatformVersion:
        ...


class StaticPlatformVersion:
    """``PlatformVersionProvider`` that always reports one fixed version.

    Useful when the host passes its version in at construction time
    rather than exposing a live lookup.
    """

    def __init__(self, version: str | PlatformVersion) -> None:
        if isinstance(version, str):
            version = PlatformVersion.parse(version)
        self._version = version

    def current_version(self) -> PlatformVersion:
        return self._version
