"""Host-side models — what the extension manager reports."""

from pydantic import BaseModel, ConfigDict


class InstalledInfo(BaseModel):
    """State of one installed extension as reported by the host.

    ``id`` is ``None`` when the extension does not declare a marketplace
    id; such extensions are invisible to the marketplace.
    """

    model_config = ConfigDict(frozen=True, extra="allow", coerce_numbers_to_str=True)

    id: str | None = None
    version: str


class UpdateCandidate(BaseModel):
    """An available update found by the bulk scan."""

    model_config = ConfigDict(frozen=True)

    version: str
    id: str
