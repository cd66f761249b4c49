"""Error taxonomy for marketplace operations.

Every error here reaches the direct caller of ``MarketplaceService``.
The only place errors are swallowed is the bulk update scan, which skips
extensions raising an ``ExtensionLookupError``.
"""

from __future__ import annotations


class MarketplaceError(RuntimeError):
    """Base class for marketplace client failures."""


class InvalidVersionError(ValueError):
    """Raised when a dotted version string cannot be parsed."""


class AlreadyInstalledError(MarketplaceError):
    """Raised when installing an extension the host already has."""

    def __init__(self, ext_id: str) -> None:
        super().__init__(f"Extension '{ext_id}' is already installed.")
        self.ext_id = ext_id


class ExtensionLookupError(MarketplaceError):
    """An extension could not be found on the host or in the catalog."""

    def __init__(self, ext_id: str, message: str) -> None:
        super().__init__(message)
        self.ext_id = ext_id


class NotInstalledError(ExtensionLookupError):
    def __init__(self, ext_id: str) -> None:
        super().__init__(ext_id, f"Extension '{ext_id}' is not installed.")


class UnknownExtensionError(ExtensionLookupError):
    def __init__(self, ext_id: str) -> None:
        super().__init__(
            ext_id, f"Extension '{ext_id}' is not known at the marketplace."
        )


class NoMatchingReleaseError(MarketplaceError):
    """The catalog knows the extension but no release admits the platform."""

    def __init__(self, ext_id: str, platform_version: str) -> None:
        super().__init__(
            f"No release of '{ext_id}' is compatible with platform "
            f"version {platform_version}."
        )
        self.ext_id = ext_id
        self.platform_version = platform_version


class TransportError(MarketplaceError):
    """Raised when an HTTP request to the marketplace fails."""
