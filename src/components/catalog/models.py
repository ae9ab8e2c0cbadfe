"""
Catalog component - Data models.

Resolution results for part references held on compositions.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.domain.entities import PartCatalogEntry

# --- Degradation Marker ---


@dataclass(frozen=True)
class UnresolvedReference:
    """A part reference that matched nothing in the catalog snapshot."""

    ref: str
    label: str
    code: str = "unresolved_reference"

    @property
    def message(self) -> str:
        return f"Part '{self.label}' not found in catalog"


# --- Output Models ---


@dataclass(frozen=True)
class ResolvedPart:
    """A catalog entry matched to a part reference."""

    entry: PartCatalogEntry
    matched_by: str  # "id" or "name"


@dataclass(frozen=True)
class ResolvedInstance:
    """A part instance paired with its catalog entry and effective option level."""

    label: str
    entry: PartCatalogEntry | None
    option_level: int
    quantity: int
    unresolved: UnresolvedReference | None = None

    @property
    def resolved(self) -> bool:
        return self.entry is not None
