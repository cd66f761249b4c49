"""Shared test fixtures for Extmarket."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from extmarket.bridge.cache_store import MemoryCacheStore
from extmarket.bridge.protocols import StaticPlatformVersion
from extmarket.config import MarketConfig
from extmarket.core.catalog_cache import CatalogCache
from extmarket.core.errors import TransportError
from extmarket.marketplace.service import MarketplaceService
from extmarket.models.installed import InstalledInfo

STORE_URL = "https://market.test"


# ---------------------------------------------------------------------------
# Fakes for host-side collaborators
# ---------------------------------------------------------------------------


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeHttp:
    """In-memory ``HttpClient`` that serves canned bodies and records calls."""

    def __init__(self, routes: dict[str, bytes] | None = None) -> None:
        self.routes: dict[str, bytes] = dict(routes or {})
        self.calls: list[str] = []
        self.downloads: list[tuple[str, Path]] = []
        self.fail_downloads = False

    def get(self, url: str) -> bytes:
        self.calls.append(url)
        if url not in self.routes:
            raise TransportError(f"GET {url} failed: 404")
        return self.routes[url]

    def download(self, url: str, dest: Path) -> None:
        self.calls.append(url)
        self.downloads.append((url, dest))
        dest.write_bytes(b"partial")
        if self.fail_downloads:
            raise TransportError(f"Download of {url} failed: connection reset")
        dest.write_bytes(b"PK\x03\x04package")


class FakeExtensionManager:
    """Host extension manager backed by a dict of handle -> info."""

    def __init__(self, installed: dict[str, InstalledInfo | None] | None = None) -> None:
        self.installed: dict[str, InstalledInfo | None] = dict(installed or {})
        self.install_calls: list[Path] = []
        self.update_calls: list[Path] = []
        self.seen_bytes: list[bytes] = []

    def list_installed(self) -> list[str]:
        return list(self.installed)

    def info_of(self, handle: str) -> InstalledInfo | None:
        return self.installed.get(handle)

    def install(self, package_path: Path) -> None:
        self.install_calls.append(package_path)
        self.seen_bytes.append(package_path.read_bytes())

    def update(self, package_path: Path) -> None:
        self.update_calls.append(package_path)
        self.seen_bytes.append(package_path.read_bytes())


class FakeAnalyzer:
    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        self.seen: list[Any] = []

    def analyze(self, metadata: Any) -> list[str]:
        self.seen.append(metadata)
        return self.missing


# ---------------------------------------------------------------------------
# Catalog data
# ---------------------------------------------------------------------------


def sample_catalog() -> list[dict[str, Any]]:
    return [
        {
            "id": "files_antivirus",
            "name": "Antivirus",
            "categories": ["security", "tools"],
            "releases": [
                {
                    "version": "1.0.0",
                    "platformMin": None,
                    "platformMax": "8",
                    "download": f"{STORE_URL}/files/files_antivirus-1.0.0.tar.gz",
                },
                {
                    "version": "2.0.0",
                    "platformMin": "9",
                    "platformMax": None,
                    "download": f"{STORE_URL}/files/files_antivirus-2.0.0.tar.gz",
                },
            ],
        },
        {
            "id": "calendar",
            "name": "Calendar",
            "categories": ["productivity"],
            "releases": [
                {
                    "version": "1.5.2",
                    "platformMin": "9.0",
                    "platformMax": "10",
                    "download": f"{STORE_URL}/files/calendar-1.5.2.tar.gz",
                },
            ],
            "dependencies": {"php": {"min-version": "7.0"}},
        },
    ]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def market_config(tmp_path: Path) -> MarketConfig:
    """Config pointing at the fake store, downloading into a temp dir."""
    return MarketConfig(store_url=STORE_URL, download_dir=tmp_path / "downloads")


@pytest.fixture
def make_http() -> Callable[..., FakeHttp]:
    """Factory fixture: FakeHttp serving the sample catalog for a version."""

    def _factory(
        catalog: list[dict[str, Any]] | None = None,
        version: str = "9.1.5",
        categories: list[str] | None = None,
    ) -> FakeHttp:
        body = json.dumps(sample_catalog() if catalog is None else catalog).encode()
        return FakeHttp(
            {
                f"{STORE_URL}/api/v1/platform/{version}/apps.json": body,
                f"{STORE_URL}/api/v1/categories.json": json.dumps(
                    categories or ["security", "tools", "productivity"]
                ).encode(),
            }
        )

    return _factory


@pytest.fixture
def http(make_http: Callable[..., FakeHttp]) -> FakeHttp:
    return make_http()


@pytest.fixture
def store(clock: FakeClock) -> MemoryCacheStore:
    return MemoryCacheStore(clock=clock)


@pytest.fixture
def catalog_cache(
    http: FakeHttp, store: MemoryCacheStore, market_config: MarketConfig
) -> CatalogCache:
    return CatalogCache(http, store, market_config)


@pytest.fixture
def manager() -> FakeExtensionManager:
    return FakeExtensionManager()


@pytest.fixture
def make_service(
    http: FakeHttp,
    catalog_cache: CatalogCache,
    market_config: MarketConfig,
) -> Callable[..., MarketplaceService]:
    """Factory fixture: MarketplaceService wired to the fakes."""

    def _factory(
        manager: FakeExtensionManager,
        platform: str = "9.1.5",
        **overrides: Any,
    ) -> MarketplaceService:
        kwargs: dict[str, Any] = {
            "manager": manager,
            "catalog": catalog_cache,
            "http": http,
            "platform": StaticPlatformVersion(platform),
            "config": market_config,
        }
        kwargs.update(overrides)
        return MarketplaceService(**kwargs)

    return _factory
