"""
Catalog component - Port interfaces.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from src.domain.entities import PartCatalogEntry


class CatalogSnapshotPort(Protocol):
    """Supplies immutable catalog snapshots from the reference-data store."""

    def get_version(self) -> str:
        """Version key; changes whenever the catalog contents change."""
        ...

    def get_entries(self) -> Sequence[PartCatalogEntry]:
        """All catalog entries in the snapshot."""
        ...
