"""Update detection for installed extensions.

An update exists when the catalog lists a release whose version is
strictly greater than the installed one.  Versions are compared in full
(no truncation), so ``2.1.0.1`` is newer than ``2.1.0``.  As with release
resolution, the first newer release *in catalog order* is reported, which
is not necessarily the highest version.

The bulk scan walks every installed extension and collects the available
updates.  Extensions that are missing from the catalog (or report no id)
are skipped silently; most installed extensions are expected to be
unknown to the marketplace.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor

from extmarket.core.errors import (
    ExtensionLookupError,
    InvalidVersionError,
    NotInstalledError,
    UnknownExtensionError,
)
from extmarket.core.versions import version_key
from extmarket.models.catalog import CatalogEntry, find_entry
from extmarket.models.installed import InstalledInfo, UpdateCandidate

logger = logging.getLogger(__name__)


class UpdateDetector:
    """Finds newer catalog releases for installed extensions.

    Parameters
    ----------
    max_workers:
        Number of threads used by :meth:`scan`.  ``1`` scans sequentially.
    """

    def __init__(self, max_workers: int = 1) -> None:
        self._max_workers = max(1, max_workers)

    def available_update(
        self,
        installed_version: str | None,
        entry: CatalogEntry | None,
        ext_id: str | None = None,
    ) -> str | None:
        """Return the version of the first newer release, or ``None``.

        Raises
        ------
        NotInstalledError
            If *installed_version* is ``None``.
        UnknownExtensionError
            If *entry* is ``None``.
        """
        label = ext_id or (entry.id if entry is not None else "<unknown>")
        if installed_version is None:
            raise NotInstalledError(label)
        if entry is None:
            raise UnknownExtensionError(label)

        current = version_key(installed_version)
        for release in entry.releases:
            try:
                newer = version_key(release.version) > current
            except InvalidVersionError:
                logger.warning(
                    "Skipping release of '%s' with unparseable version %r.",
                    entry.id,
                    release.version,
                )
                continue
            if newer:
                return release.version
        return None

    def scan(
        self,
        installed: Iterable[tuple[str, InstalledInfo | None]],
        catalog: Sequence[CatalogEntry],
    ) -> dict[str, UpdateCandidate]:
        """Collect available updates for every installed extension.

        Parameters
        ----------
        installed:
            ``(handle, info)`` pairs from the host's extension manager.
        catalog:
            One catalog snapshot, shared read-only by every lookup.

        Returns
        -------
        dict[str, UpdateCandidate]
            Keyed by host-local handle; only extensions with an update.
        """
        pairs = [(h, i) for h, i in installed if i is not None and i.id is not None]

        if self._max_workers == 1 or len(pairs) < 2:
            found = [self._check(h, i, catalog) for h, i in pairs]
        else:
            with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
                found = list(pool.map(lambda p: self._check(p[0], p[1], catalog), pairs))

        result = {handle: candidate for handle, candidate in found if candidate is not None}
        logger.info(
            "Update scan: %d installed extension(s) checked, %d update(s) available.",
            len(pairs),
            len(result),
        )
        return result

    def _check(
        self,
        handle: str,
        info: InstalledInfo,
        catalog: Sequence[CatalogEntry],
    ) -> tuple[str, UpdateCandidate | None]:
        ext_id = info.id
        try:
            version = self.available_update(info.version, find_entry(catalog, ext_id), ext_id)
        except ExtensionLookupError as exc:
            logger.debug("Skipping '%s' in update scan: %s", handle, exc)
            return handle, None
        except InvalidVersionError:
            logger.warning(
                "Skipping '%s': installed version %r is not a dotted version.",
                handle,
                info.version,
            )
            return handle, None
        if version is None:
            return handle, None
        return handle, UpdateCandidate(version=version, id=ext_id)
