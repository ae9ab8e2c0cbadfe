"""
Display component - Display bundle derivation for compositions.

Orchestrates resolution, cost aggregation, damage formatting and (for items)
rarity banding into the bundle consumed by library, codex and editor views.

Invariants:
- I1: Explicit overrides win over part-declared values, which win over the placeholder
- I2: Re-deriving the same inputs yields an equal bundle
- I3: Power and Technique bundles never carry currency or rarity
- I4: Unresolved parts still appear as chips with their stored label
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from src.components.catalog import CatalogLike, as_index, resolve_all
from src.domain.entities import (
    Composition,
    ItemComposition,
    PartInstance,
    PowerComposition,
    TechniqueComposition,
)
from src.rules.models import DEFAULT_RULES, RarityTier
from src.rules.ports import RulesPort

from ._impl import (
    ITEM_PROFILE,
    POWER_PROFILE,
    TECHNIQUE_PROFILE,
    derive_bundle,
    resolve_display_field,
)
from .models import DeriveDisplayInput, DeriveDisplayOutput, DisplayBundle


def derive_power_display(
    composition: PowerComposition,
    parts_catalog: CatalogLike,
    rules: RulesPort | None = None,
) -> DisplayBundle:
    """Derive the display bundle for a Power."""
    return derive_bundle(composition, parts_catalog, profile=POWER_PROFILE, rules=rules)


def derive_technique_display(
    composition: TechniqueComposition,
    parts_catalog: CatalogLike,
    weapons: Iterable[ItemComposition] | None = (),
    rules: RulesPort | None = None,
) -> DisplayBundle:
    """
    Derive the display bundle for a Technique.

    With no explicit damage, the weapon's damage is shown. The weapon
    reference may carry its damage, or be looked up in `weapons`.
    """
    return derive_bundle(
        composition,
        parts_catalog,
        profile=TECHNIQUE_PROFILE,
        rules=rules,
        weapons=weapons,
    )


def derive_item_display(
    composition: ItemComposition,
    properties_catalog: CatalogLike,
    tiers: Sequence[RarityTier] | None = None,
    rules: RulesPort | None = None,
) -> DisplayBundle:
    """Derive the display bundle for an Item, including currency cost and rarity."""
    return derive_bundle(
        composition,
        properties_catalog,
        profile=ITEM_PROFILE,
        rules=rules,
        tiers=tiers,
    )


def derive_display(
    composition: Composition,
    catalog: CatalogLike,
    *,
    tiers: Sequence[RarityTier] | None = None,
    weapons: Iterable[ItemComposition] = (),
    rules: RulesPort | None = None,
) -> DisplayBundle:
    """Derive any composition kind, dispatching on its type."""
    if isinstance(composition, ItemComposition):
        return derive_item_display(composition, catalog, tiers=tiers, rules=rules)
    if isinstance(composition, TechniqueComposition):
        return derive_technique_display(composition, catalog, weapons=weapons, rules=rules)
    return derive_power_display(composition, catalog, rules=rules)


def format_range(
    properties: Iterable[PartInstance],
    properties_catalog: CatalogLike,
    override: str | None = None,
    placeholder: str | None = None,
) -> str:
    """Range text for an item's properties, using the same fallback as the deriver."""
    if placeholder is None:
        placeholder = DEFAULT_RULES.get_placeholder()
    resolved = resolve_all(properties, as_index(properties_catalog))
    return resolve_display_field("range", override, resolved, placeholder)


# --- Component Entry Point ---


def run(
    inp: DeriveDisplayInput,
    *,
    catalog: CatalogLike,
    rules: RulesPort | None = None,
) -> DeriveDisplayOutput:
    """
    Derive a display bundle.

    Args:
        inp: Input containing the composition, optional tier table and weapons.
        catalog: Catalog snapshot (index or entries).
        rules: Optional rules port for placeholders and the default tier table.

    Returns:
        DeriveDisplayOutput with the bundle and any unresolved references.
    """
    bundle = derive_display(
        inp.composition,
        catalog,
        tiers=inp.tiers,
        weapons=inp.weapons,
        rules=rules,
    )
    return DeriveDisplayOutput(bundle=bundle, unresolved=bundle.unresolved, success=True)
