"""Release resolution — pick the release of an extension that fits the host.

A release admits a platform version when the version is not below
``platform_min`` and not above ``platform_max`` (both compared after
truncation, see :mod:`extmarket.core.versions`).  Absent bounds never
disqualify.

The *first* admissible release in catalog order wins.  Releases are not
re-sorted by version: the catalog's order is the server's preference.
"""

from __future__ import annotations

import logging

from extmarket.core.errors import (
    InvalidVersionError,
    NoMatchingReleaseError,
    UnknownExtensionError,
)
from extmarket.core.versions import PlatformVersion, compare
from extmarket.models.catalog import CatalogEntry, Release

logger = logging.getLogger(__name__)


def admits(release: Release, platform_version: str) -> bool:
    """Return ``True`` if *release* is installable on *platform_version*.

    A release with an unparseable bound is treated as not admitting
    anything.
    """
    try:
        too_small = release.platform_min is not None and compare(
            platform_version, release.platform_min, "<"
        )
        too_big = release.platform_max is not None and compare(
            platform_version, release.platform_max, ">"
        )
    except InvalidVersionError as exc:
        logger.warning("Ignoring release %s with bad platform bound: %s", release.version, exc)
        return False
    return not too_small and not too_big


class ReleaseResolver:
    """Selects the applicable release of a catalog entry for a platform."""

    def candidates(
        self,
        entry: CatalogEntry,
        platform_version: PlatformVersion | str,
    ) -> list[Release]:
        """All releases admitting *platform_version*, in catalog order."""
        version = str(platform_version)
        return [r for r in entry.releases if admits(r, version)]

    def resolve(
        self,
        entry: CatalogEntry | None,
        platform_version: PlatformVersion | str,
        ext_id: str | None = None,
    ) -> Release:
        """Return the first release of *entry* that admits *platform_version*.

        Parameters
        ----------
        entry:
            The catalog entry, or ``None`` when the catalog has no entry
            for the extension.
        platform_version:
            The host platform version.
        ext_id:
            Extension id used in error messages when *entry* is ``None``.

        Raises
        ------
        UnknownExtensionError
            If *entry* is ``None``.
        NoMatchingReleaseError
            If no release admits *platform_version*.
        """
        if entry is None:
            raise UnknownExtensionError(ext_id or "<unknown>")

        matches = self.candidates(entry, platform_version)
        if not matches:
            raise NoMatchingReleaseError(entry.id, str(platform_version))
        return matches[0]
