"""Marketplace service — install, update, and browse remote extensions.

Orchestrates the catalog cache, release resolver, and update detector,
and is the only component that talks to the host's collaborators:

- the **extension manager** for installed state and the final
  install/update hand-off,
- the **HTTP client** for package downloads,
- the **requirement analyzer** for dependency checks,
- the **platform version provider** for the host's own version.

Install and update are all-or-nothing: the package is fully downloaded
before the extension manager is touched, and a failed download leaves no
temp file behind.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path, PurePosixPath
from typing import Any

import httpx

from extmarket.bridge.protocols import (
    ExtensionManager,
    HttpClient,
    PlatformVersionProvider,
    RequirementAnalyzer,
)
from extmarket.config import MarketConfig
from extmarket.config import config as default_config
from extmarket.core.catalog_cache import CatalogCache
from extmarket.core.errors import (
    AlreadyInstalledError,
    MarketplaceError,
    NotInstalledError,
)
from extmarket.core.release_resolver import ReleaseResolver
from extmarket.core.update_detector import UpdateDetector
from extmarket.models.catalog import CatalogEntry, Release, find_entry
from extmarket.models.installed import InstalledInfo, UpdateCandidate

logger = logging.getLogger(__name__)


class MarketplaceService:
    """Marketplace operations for one host application.

    Parameters
    ----------
    manager:
        The host's extension manager.
    catalog:
        Catalog cache shared by every operation.  It is owned by the
        caller and keyed by platform version, so one instance can serve
        hosts of differing versions.
    http:
        Transport used for package downloads.
    platform:
        Reports the host's current platform version.
    config:
        Marketplace configuration (download dir, scan fan-out).  Defaults
        to the module-level ``extmarket.config.config``.
    analyzer:
        Optional requirement analyzer for :meth:`get_missing_requirements`.

    Examples
    --------
    >>> service = MarketplaceService(manager, catalog, http, platform)  # doctest: +SKIP
    >>> service.install("files_antivirus")  # doctest: +SKIP
    >>> service.scan_for_updates()  # doctest: +SKIP
    {'files_antivirus': UpdateCandidate(version='1.2.0', id='files_antivirus')}
    """

    def __init__(
        self,
        manager: ExtensionManager,
        catalog: CatalogCache,
        http: HttpClient,
        platform: PlatformVersionProvider,
        config: MarketConfig | None = None,
        analyzer: RequirementAnalyzer | None = None,
    ) -> None:
        self._manager = manager
        self._catalog = catalog
        self._http = http
        self._platform = platform
        self._config = config if config is not None else default_config
        self._analyzer = analyzer
        self._resolver = ReleaseResolver()
        self._detector = UpdateDetector(max_workers=self._config.scan_workers)

    # -- Installed state ----------------------------------------------------

    def installed_info(self, ext_id: str) -> InstalledInfo | None:
        """Return the host's info for the extension declaring *ext_id*."""
        for handle in self._manager.list_installed():
            info = self._manager.info_of(handle)
            if info is not None and info.id == ext_id:
                return info
        return None

    def is_installed(self, ext_id: str) -> bool:
        return self.installed_info(ext_id) is not None

    # -- Install / update ---------------------------------------------------

    def install(self, ext_id: str) -> None:
        """Download the compatible release of *ext_id* and install it.

        Raises
        ------
        AlreadyInstalledError
            If the host already has the extension.
        UnknownExtensionError
            If the catalog has no entry for *ext_id*.
        NoMatchingReleaseError
            If no release is compatible with the host platform.
        TransportError
            If the catalog query or download fails.
        """
        if self.is_installed(ext_id):
            raise AlreadyInstalledError(ext_id)

        package = self._download_package(ext_id)
        try:
            self._manager.install(package)
        finally:
            package.unlink(missing_ok=True)
        logger.info("Installed '%s' from marketplace.", ext_id)

    def update(self, ext_id: str) -> None:
        """Download the compatible release of *ext_id* and update to it.

        Raises
        ------
        NotInstalledError
            If the host does not have the extension.
        UnknownExtensionError, NoMatchingReleaseError, TransportError
            As for :meth:`install`.
        """
        if not self.is_installed(ext_id):
            raise NotInstalledError(ext_id)

        package = self._download_package(ext_id)
        try:
            self._manager.update(package)
        finally:
            package.unlink(missing_ok=True)
        logger.info("Updated '%s' from marketplace.", ext_id)

    def resolve_release(self, ext_id: str) -> Release:
        """Return the release of *ext_id* that would be installed right now."""
        version = self._platform.current_version()
        entry = find_entry(self._catalog.get_catalog(version), ext_id)
        return self._resolver.resolve(entry, version, ext_id)

    # -- Updates ------------------------------------------------------------

    def available_update(self, ext_id: str) -> str | None:
        """Return the version *ext_id* could be updated to, or ``None``.

        Raises
        ------
        NotInstalledError
            If the host does not have the extension.
        UnknownExtensionError
            If the catalog has no entry for *ext_id*.
        """
        info = self.installed_info(ext_id)
        if info is None:
            raise NotInstalledError(ext_id)
        entry = find_entry(self._current_catalog(), ext_id)
        return self._detector.available_update(info.version, entry, ext_id)

    def scan_for_updates(self) -> dict[str, UpdateCandidate]:
        """Check every installed extension for an available update.

        Returns a mapping from host-local handle to the update found.
        Extensions unknown to the marketplace are skipped.
        """
        installed = [
            (handle, self._manager.info_of(handle))
            for handle in self._manager.list_installed()
        ]
        return self._detector.scan(installed, self._current_catalog())

    # -- Browsing -----------------------------------------------------------

    def list_apps(self, category: str | None = None) -> list[CatalogEntry]:
        """Return the catalog for the host platform, optionally by category."""
        apps = self._current_catalog()
        if category is not None:
            apps = [app for app in apps if app.has_category(category)]
        return apps

    def get_categories(self) -> list[str]:
        return self._catalog.get_categories()

    def get_missing_requirements(
        self, metadata: CatalogEntry | Mapping[str, Any]
    ) -> list[str]:
        """Return the unmet requirements reported by the analyzer, unmodified."""
        if self._analyzer is None:
            raise MarketplaceError("No requirement analyzer configured.")
        if isinstance(metadata, CatalogEntry):
            metadata = metadata.model_dump(by_alias=True)
        return self._analyzer.analyze(metadata)

    # -- Internals ----------------------------------------------------------

    def _current_catalog(self) -> list[CatalogEntry]:
        return self._catalog.get_catalog(self._platform.current_version())

    def _download_package(self, ext_id: str) -> Path:
        release = self.resolve_release(ext_id)
        suffix = PurePosixPath(httpx.URL(release.download_url).path).suffix

        download_dir = self._config.download_dir
        if download_dir is not None:
            download_dir.mkdir(parents=True, exist_ok=True)
        fd, name = tempfile.mkstemp(suffix=suffix, dir=download_dir)
        os.close(fd)
        path = Path(name)

        try:
            self._http.download(release.download_url, path)
        except BaseException:
            path.unlink(missing_ok=True)
            raise
        logger.info(
            "Downloaded '%s' v%s to %s.", ext_id, release.version, path
        )
        return path
