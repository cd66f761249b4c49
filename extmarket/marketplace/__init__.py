"""Marketplace orchestration — the public entry point of the client."""

from extmarket.marketplace.service import MarketplaceService

__all__ = ["MarketplaceService"]
