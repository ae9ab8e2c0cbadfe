"""
Display component - Data models.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, dataclass
from typing import Any, Literal

from src.components.catalog import UnresolvedReference
from src.domain.entities import Composition, ItemComposition
from src.rules.models import RarityTier

CompositionKind = Literal["power", "technique", "item"]

# Omitted from to_dict() when unset
ITEM_ONLY_FIELDS = ("item_type", "currency_cost", "rarity_tier", "item_points", "armor_value")


# --- Output Models ---


@dataclass(frozen=True)
class PartChip:
    """One part as shown in the breakdown row under a composition."""

    label: str
    description: str
    training_point_contribution: float
    resolved: bool = True

    @property
    def has_tp(self) -> bool:
        return self.training_point_contribution > 0


@dataclass(frozen=True)
class DisplayBundle:
    """Render-ready summary of one composition."""

    kind: CompositionKind
    name: str
    description: str
    energy: float
    training_points: float
    action_type: str
    duration: str
    range: str
    area: str
    damage_text: str
    part_chips: tuple[PartChip, ...] = ()
    tp_sources: tuple[str, ...] = ()
    unresolved: tuple[UnresolvedReference, ...] = ()
    weapon_name: str | None = None

    # Items only
    item_type: str | None = None
    currency_cost: int | None = None
    rarity_tier: str | None = None
    item_points: float | None = None
    armor_value: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Plain-data view for library/codex views. Item-only fields drop out when unset."""
        data = asdict(self)
        for name in ITEM_ONLY_FIELDS:
            if data[name] is None:
                del data[name]
        if data["weapon_name"] is None:
            del data["weapon_name"]
        return data


# --- Input Models ---


@dataclass(frozen=True)
class DeriveDisplayInput:
    """Input for deriving one composition's display bundle."""

    composition: Composition
    tiers: Sequence[RarityTier] | None = None
    weapons: Sequence[ItemComposition] = ()


@dataclass(frozen=True)
class DeriveDisplayOutput:
    """Output of a derivation. Unresolved references degrade, they do not fail."""

    bundle: DisplayBundle
    unresolved: tuple[UnresolvedReference, ...] = ()
    success: bool = True
