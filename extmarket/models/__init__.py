"""Extmarket data models — all Pydantic v2, all frozen (immutable)."""

from extmarket.models.catalog import CatalogEntry, Release, find_entry
from extmarket.models.installed import InstalledInfo, UpdateCandidate

__all__ = [
    # catalog
    "CatalogEntry",
    "Release",
    "find_entry",
    # installed
    "InstalledInfo",
    "UpdateCandidate",
]
