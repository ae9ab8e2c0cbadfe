"""
Catalog component - Part reference resolution against catalog snapshots.
"""

from .component import (
    CatalogIndex,
    CatalogLike,
    as_index,
    clamp_option_level,
    clean_label,
    resolve,
    resolve_all,
    resolve_instance,
)
from .models import ResolvedInstance, ResolvedPart, UnresolvedReference
from .ports import CatalogSnapshotPort

__all__ = [
    # Entry points
    "resolve",
    "resolve_instance",
    "resolve_all",
    "clamp_option_level",
    "clean_label",
    "as_index",
    # Index
    "CatalogIndex",
    "CatalogLike",
    # Output models
    "ResolvedPart",
    "ResolvedInstance",
    "UnresolvedReference",
    # Ports
    "CatalogSnapshotPort",
]
