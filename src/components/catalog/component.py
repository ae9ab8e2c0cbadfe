"""
Catalog component - Part reference resolution.

Resolves the part references stored on compositions against a catalog
snapshot. Compositions may predate catalog ids, or point at parts that were
renamed or deleted since, so lookup is by id first and then by name.

Invariants:
- I1: Exact id match wins over name match
- I2: Name match is case-insensitive and exact
- I3: A miss is returned as UnresolvedReference, never raised
- I4: The snapshot is never mutated
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from src.domain.entities import PartCatalogEntry, PartInstance

from .models import ResolvedInstance, ResolvedPart, UnresolvedReference

logger = logging.getLogger(__name__)

# Matches "(Opt2 3)" style annotations left in stored labels
_OPTION_ANNOTATION = re.compile(r"\s*\(\s*opt\s*\d+\s+\d+\s*\)", re.IGNORECASE)


# --- Index ---


class CatalogIndex:
    """
    Id and lowercase-name indices over one catalog snapshot.

    Built once per snapshot and shared by every derivation against it.
    The first entry wins when ids or names collide.
    """

    __slots__ = ("_by_id", "_by_name", "_entries")

    def __init__(self, entries: Iterable[PartCatalogEntry]) -> None:
        self._entries: tuple[PartCatalogEntry, ...] = tuple(entries)
        by_id: dict[str, PartCatalogEntry] = {}
        by_name: dict[str, PartCatalogEntry] = {}
        for entry in self._entries:
            by_id.setdefault(entry.id, entry)
            by_name.setdefault(entry.name.strip().lower(), entry)
        self._by_id = by_id
        self._by_name = by_name

    @classmethod
    def from_entries(
        cls, entries: Iterable[PartCatalogEntry | Mapping[str, Any]]
    ) -> CatalogIndex:
        """Build an index, validating raw mappings into catalog entries."""
        return cls(
            e if isinstance(e, PartCatalogEntry) else PartCatalogEntry.model_validate(e)
            for e in entries
        )

    def get_by_id(self, part_id: str) -> PartCatalogEntry | None:
        return self._by_id.get(str(part_id).strip())

    def get_by_name(self, name: str) -> PartCatalogEntry | None:
        return self._by_name.get(name.strip().lower())

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[PartCatalogEntry]:
        return iter(self._entries)


CatalogLike = CatalogIndex | Iterable[PartCatalogEntry | Mapping[str, Any]]


def as_index(catalog: CatalogLike | None) -> CatalogIndex:
    """Return `catalog` as an index, building one if needed."""
    if isinstance(catalog, CatalogIndex):
        return catalog
    return CatalogIndex.from_entries(catalog or ())


# --- Label Helpers ---


def clean_label(text: str) -> str:
    """Strip option-level annotations such as "(Opt2 3)" from a stored label."""
    return _OPTION_ANNOTATION.sub("", text).strip()


# --- Resolution ---


def resolve(ref: str | int, catalog: CatalogLike) -> ResolvedPart | UnresolvedReference:
    """
    Resolve a part reference by id, then by case-insensitive name.
    """
    index = as_index(catalog)
    key = str(ref).strip()

    entry = index.get_by_id(key)
    if entry is not None:
        return ResolvedPart(entry=entry, matched_by="id")

    entry = index.get_by_name(key)
    if entry is not None:
        return ResolvedPart(entry=entry, matched_by="name")

    return UnresolvedReference(ref=key, label=clean_label(key))


def clamp_option_level(entry: PartCatalogEntry, level: int) -> int:
    """
    Clamp `level` to the nearest valid option level for `entry`.

    Valid levels are 0 plus every populated option slot; ties go to the lower level.
    """
    if level <= 0:
        return 0
    valid = (0, *entry.populated_levels)
    if level in valid:
        return level
    return min(valid, key=lambda candidate: (abs(candidate - level), candidate))


def resolve_instance(instance: PartInstance, catalog: CatalogLike) -> ResolvedInstance:
    """
    Resolve one part instance from a composition.

    Tries the stored reference first and then the stored name literal, so a
    stale id still finds a part that kept its name.
    """
    index = as_index(catalog)
    result = resolve(instance.part_ref, index)
    if isinstance(result, UnresolvedReference) and instance.name:
        by_name = index.get_by_name(clean_label(instance.name))
        if by_name is not None:
            result = ResolvedPart(entry=by_name, matched_by="name")

    if isinstance(result, UnresolvedReference):
        label = clean_label(instance.literal_label)
        logger.debug("Unresolved part reference %r (label %r)", instance.part_ref, label)
        return ResolvedInstance(
            label=label,
            entry=None,
            option_level=0,
            quantity=instance.quantity,
            unresolved=UnresolvedReference(ref=instance.part_ref, label=label),
        )

    entry = result.entry
    level = clamp_option_level(entry, instance.chosen_option_level)
    if level != instance.chosen_option_level:
        logger.debug(
            "Clamped option level %d -> %d for part %r",
            instance.chosen_option_level,
            level,
            entry.name,
        )
    return ResolvedInstance(
        label=clean_label(entry.name),
        entry=entry,
        option_level=level,
        quantity=instance.quantity,
    )


def resolve_all(
    instances: Iterable[PartInstance], catalog: CatalogLike
) -> tuple[ResolvedInstance, ...]:
    """Resolve instances in document order against one shared index."""
    index = as_index(catalog)
    return tuple(resolve_instance(instance, index) for instance in instances)
