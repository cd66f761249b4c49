"""Extmarket: marketplace client for host-installed extensions.

Queries a remote extension catalog, picks the release that is compatible
with the running host's platform version, detects available updates for
installed extensions, and hands downloaded packages to the host's
extension manager.
"""

__version__ = "0.1.0"

from extmarket.marketplace.service import MarketplaceService

__all__ = ["MarketplaceService", "__version__"]
