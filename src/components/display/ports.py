"""
Display component - Port interfaces.

The deriver consumes a catalog snapshot source and the rules configuration.
"""

from __future__ import annotations

from src.components.catalog.ports import CatalogSnapshotPort
from src.rules.ports import RulesPort

__all__ = ["CatalogSnapshotPort", "RulesPort"]
