"""Catalog models — the remote marketplace's view of an extension.

Field aliases follow the marketplace JSON (``platformMin``, ``platformMax``,
``download``).  Unknown fields are kept on the model so an entry can be
handed to the requirement analyzer without losing its declared
dependencies.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field


class Release(BaseModel):
    """One downloadable version of an extension.

    ``platform_min`` / ``platform_max`` of ``None`` mean "no bound".

    Examples
    --------
    >>> r = Release.model_validate(
    ...     {"version": "1.2.0", "platformMin": 9, "platformMax": None,
    ...      "download": "https://market.example/files/app-1.2.0.tar.gz"}
    ... )
    >>> r.platform_min
    '9'
    """

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    version: str
    platform_min: str | None = Field(default=None, alias="platformMin")
    platform_max: str | None = Field(default=None, alias="platformMax")
    download_url: str = Field(default="", alias="download")


class CatalogEntry(BaseModel):
    """One extension in a catalog snapshot.

    ``releases`` keeps the order the server sent; nothing in this package
    re-sorts it.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    id: str
    name: str = ""
    categories: tuple[str, ...] = ()
    releases: tuple[Release, ...] = ()

    def has_category(self, category: str) -> bool:
        return category in self.categories


def find_entry(entries: Iterable[CatalogEntry], ext_id: str) -> CatalogEntry | None:
    """Return the first catalog entry with id *ext_id*, or ``None``."""
    for entry in entries:
        if entry.id == ext_id:
            return entry
    return None
