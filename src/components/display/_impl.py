"""
Shared derivation pipeline for Power, Technique and Item displays.

One aggregate-and-format pass parameterized by a per-kind profile, so the
three kinds cannot drift apart in rounding or formatting.

Functional Core - pure functions, except DerivationService which caches a
catalog index per snapshot version.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace

from src.components.catalog import (
    CatalogIndex,
    CatalogLike,
    CatalogSnapshotPort,
    ResolvedInstance,
    as_index,
    clean_label,
    resolve_all,
)
from src.components.costs import CostBreakdown, aggregate_resolved
from src.components.damage import format_damage
from src.components.rarity import band
from src.domain.entities import (
    Composition,
    DamageInput,
    ItemComposition,
    PartInstance,
    TechniqueComposition,
    WeaponRef,
)
from src.rules.models import DEFAULT_RULES, RarityTier
from src.rules.ports import RulesPort

from .models import CompositionKind, DisplayBundle, PartChip

logger = logging.getLogger(__name__)

DISPLAY_FIELDS = ("action_type", "duration", "range", "area")

ACTION_SELECTIONS: dict[str, str] = {
    "basic": "Basic",
    "quick": "Quick",
    "free": "Free",
    "long3": "Long (3)",
    "long4": "Long (4)",
}


# --- Kind Profiles ---


@dataclass(frozen=True)
class KindProfile:
    """What differs between composition kinds."""

    kind: CompositionKind
    overridable: frozenset[str] = frozenset(DISPLAY_FIELDS)
    bands_rarity: bool = False
    weapon_damage_fallback: bool = False


POWER_PROFILE = KindProfile(kind="power")
TECHNIQUE_PROFILE = KindProfile(kind="technique", weapon_damage_fallback=True)
ITEM_PROFILE = KindProfile(kind="item", bands_rarity=True)


def profile_for(composition: Composition) -> KindProfile:
    if isinstance(composition, ItemComposition):
        return ITEM_PROFILE
    if isinstance(composition, TechniqueComposition):
        return TECHNIQUE_PROFILE
    return POWER_PROFILE


# --- Field Resolution ---


def compute_action_type_from_selection(selection: str, reaction: bool = False) -> str:
    """Render an editor selector value (basic|quick|free|long3|long4)."""
    base = ACTION_SELECTIONS.get(selection.strip().lower(), "Basic")
    return f"{base} Reaction" if reaction else f"{base} Action"


def resolve_display_field(
    field_name: str,
    override: str | None,
    parts: Iterable[ResolvedInstance],
    placeholder: str,
) -> str:
    """
    Explicit override, else the first resolved part declaring a value, else placeholder.

    Only parts that affect duration are consulted for "duration".
    """
    if override is not None and override.strip():
        return override.strip()

    for part in parts:
        entry = part.entry
        if entry is None:
            continue
        if field_name == "duration" and not entry.affects_duration:
            continue
        value = getattr(entry, field_name).strip()
        if value:
            return value

    return placeholder


def resolve_action_type(
    override: str | None,
    is_reaction: bool,
    parts: Sequence[ResolvedInstance],
    placeholder: str,
) -> str:
    if override is not None and override.strip().lower() in ACTION_SELECTIONS:
        return compute_action_type_from_selection(override, is_reaction)

    action_type = resolve_display_field("action_type", override, parts, placeholder)
    if action_type == placeholder and is_reaction:
        return compute_action_type_from_selection("basic", reaction=True)
    return action_type


def find_weapon(
    ref: WeaponRef, weapons: Iterable[ItemComposition] | None
) -> ItemComposition | None:
    """Look a weapon reference up by id, then by case-insensitive name."""
    candidates = tuple(weapons or ())
    if ref.id:
        for weapon in candidates:
            if weapon.id is not None and weapon.id == ref.id:
                return weapon
    if ref.name:
        wanted = ref.name.strip().lower()
        for weapon in candidates:
            if weapon.name.strip().lower() == wanted:
                return weapon
    return None


def weapon_damage(
    ref: WeaponRef | None, weapons: Iterable[ItemComposition] | None
) -> tuple[DamageInput, str | None]:
    """Damage carried by (or looked up for) a technique's weapon, plus its name."""
    if ref is None:
        return None, None
    if ref.damage is not None:
        return ref.damage, ref.name
    found = find_weapon(ref, weapons)
    if found is None:
        logger.debug("Weapon %r not found in supplied weapons", ref.name or ref.id)
        return None, ref.name
    return found.damage, ref.name or found.name


# --- Chips ---


def build_chips(costs: CostBreakdown) -> tuple[PartChip, ...]:
    return tuple(
        PartChip(
            label=clean_label(part.label),
            description=part.description,
            training_point_contribution=part.training_points,
            resolved=part.resolved,
        )
        for part in costs.parts
    )


# --- Pipeline ---


def _part_list(composition: Composition) -> tuple[PartInstance, ...]:
    if isinstance(composition, ItemComposition):
        return composition.properties
    return composition.parts


def derive_bundle(
    composition: Composition,
    catalog: CatalogLike,
    *,
    profile: KindProfile | None = None,
    rules: RulesPort | None = None,
    tiers: Sequence[RarityTier] | None = None,
    weapons: Iterable[ItemComposition] | None = (),
) -> DisplayBundle:
    """
    Run the shared aggregate-and-format pipeline for one composition.
    """
    profile = profile or profile_for(composition)
    rules = rules or DEFAULT_RULES
    placeholder = rules.get_placeholder()
    none_sentinel = rules.get_damage_none_sentinel()

    resolved = resolve_all(_part_list(composition), as_index(catalog))
    costs = aggregate_resolved(resolved)

    def display_field(name: str) -> str:
        override = getattr(composition, name) if name in profile.overridable else None
        return resolve_display_field(name, override, resolved, placeholder)

    action_override = (
        composition.action_type if "action_type" in profile.overridable else None
    )
    action_type = resolve_action_type(
        action_override,
        getattr(composition, "is_reaction", False),
        resolved,
        placeholder,
    )

    damage_text = format_damage(composition.damage, none_sentinel)
    weapon_name = None
    if profile.weapon_damage_fallback:
        fallback, weapon_name = weapon_damage(getattr(composition, "weapon", None), weapons)
        if not damage_text:
            damage_text = format_damage(fallback, none_sentinel)

    bundle = DisplayBundle(
        kind=profile.kind,
        name=composition.name,
        description=composition.description,
        energy=costs.energy,
        training_points=costs.training_points,
        action_type=action_type,
        duration=display_field("duration"),
        range=display_field("range"),
        area=display_field("area"),
        damage_text=damage_text or placeholder,
        part_chips=build_chips(costs),
        tp_sources=costs.tp_sources,
        unresolved=costs.unresolved,
        weapon_name=weapon_name,
    )

    if profile.bands_rarity and isinstance(composition, ItemComposition):
        table = rules.get_rarity_tiers() if tiers is None else tiers
        rarity = band(costs.currency, costs.item_points, table)
        bundle = _with_item_fields(
            bundle, composition, costs, rarity.currency_cost, rarity.rarity_tier
        )

    logger.debug(
        "Derived %s display for %r (%d unresolved)",
        profile.kind,
        composition.name,
        len(costs.unresolved),
    )
    return bundle


def _with_item_fields(
    bundle: DisplayBundle,
    item: ItemComposition,
    costs: CostBreakdown,
    currency_cost: int,
    rarity_tier: str,
) -> DisplayBundle:
    return replace(
        bundle,
        item_type=item.type,
        currency_cost=currency_cost,
        rarity_tier=rarity_tier,
        item_points=costs.item_points,
        armor_value=item.armor_value,
    )


# --- Service ---


class DerivationService:
    """
    Derivation service bound to a catalog snapshot source.

    Rebuilds the catalog index only when the snapshot version changes, so a
    batch pass over a whole library indexes the catalog once.
    """

    def __init__(
        self,
        catalog: CatalogSnapshotPort,
        rules: RulesPort | None = None,
        weapons: Sequence[ItemComposition] = (),
    ) -> None:
        """Initialize service."""
        self._catalog = catalog
        self._rules = rules or DEFAULT_RULES
        self._weapons = tuple(weapons)
        self._cached: tuple[str, CatalogIndex] | None = None

    def index(self) -> CatalogIndex:
        """Catalog index for the current snapshot version."""
        version = self._catalog.get_version()
        cached = self._cached
        if cached is not None and cached[0] == version:
            return cached[1]
        index = CatalogIndex.from_entries(self._catalog.get_entries())
        logger.debug("Indexed catalog version %s (%d entries)", version, len(index))
        self._cached = (version, index)
        return index

    def derive(self, composition: Composition) -> DisplayBundle:
        """Derive one composition against the current catalog snapshot."""
        return derive_bundle(
            composition,
            self.index(),
            rules=self._rules,
            weapons=self._weapons,
        )

    def derive_many(self, compositions: Iterable[Composition]) -> list[DisplayBundle]:
        """Derive a batch against a single index build."""
        index = self.index()
        return [
            derive_bundle(c, index, rules=self._rules, weapons=self._weapons)
            for c in compositions
        ]
