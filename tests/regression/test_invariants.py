import itertools
import math

import pytest

from src.components.catalog import CatalogIndex
from src.components.costs import aggregate, calculate_item_costs
from src.components.damage import format_damage
from src.components.display import (
    derive_item_display,
    derive_power_display,
    derive_technique_display,
)
from src.components.rarity import calculate_currency_cost_and_rarity
from src.domain.entities import (
    DamageSpec,
    ItemComposition,
    PartInstance,
    PowerComposition,
    TechniqueComposition,
    WeaponRef,
)
from src.rules.models import EngineRules, RarityTier


@pytest.fixture
def flat_parts() -> list[PartInstance]:
    return [
        PartInstance(part_ref="1", chosen_option_level=2),
        PartInstance(part_ref="3", quantity=2),
        PartInstance(part_ref="4"),
        PartInstance(part_ref="gone", name="Gone"),
    ]


# --- R1: Order independence ---
def test_R1_order_independence(parts_catalog: CatalogIndex, flat_parts):
    """R1: TP totals, and energy without percentage parts, ignore part order."""
    baseline = aggregate(flat_parts, parts_catalog)

    for order in itertools.permutations(flat_parts):
        result = aggregate(list(order), parts_catalog)
        assert result.training_points == baseline.training_points
        assert result.energy == pytest.approx(baseline.energy)


def test_R1_item_totals_order_independence(properties_catalog: CatalogIndex):
    """R1: Currency, item point and TP totals of item properties ignore order."""
    props = [
        PartInstance(part_ref="p1", chosen_option_level=2),
        PartInstance(part_ref="p2", quantity=3),
        PartInstance(part_ref="p3", chosen_option_level=1),
        PartInstance(part_ref="p3", quantity=2),
        PartInstance(part_ref="gone", name="Gone"),
    ]
    baseline = aggregate(props, properties_catalog)

    assert baseline.currency == pytest.approx(150 + 90 + 0.4 + 0.2)
    assert baseline.item_points == pytest.approx(2 + 0.9 + 0.4)

    for order in itertools.permutations(props):
        result = aggregate(list(order), properties_catalog)
        assert result.currency == baseline.currency
        assert result.item_points == baseline.item_points
        assert result.training_points == baseline.training_points


# --- R2: Percentage law ---
def test_R2_percentage_scales_preceding_energy(parts_catalog: CatalogIndex):
    """R2: A percentage part multiplies only the flat energy before it."""
    after = aggregate([PartInstance(part_ref="1"), PartInstance(part_ref="2")], parts_catalog)
    before = aggregate([PartInstance(part_ref="2"), PartInstance(part_ref="1")], parts_catalog)

    assert after.energy == pytest.approx(2 * 1.2)
    assert after.training_points == 3
    assert before.energy == pytest.approx(2)


def test_R2_percentage_parts_chain(parts_catalog: CatalogIndex):
    """R2: Successive percentage parts compound on the running subtotal."""
    parts = [
        PartInstance(part_ref="1"),
        PartInstance(part_ref="2"),
        PartInstance(part_ref="4"),
        PartInstance(part_ref="5"),
    ]

    result = aggregate(parts, parts_catalog)

    assert result.energy == pytest.approx((2 * 1.2 + 3) * 1.5)


# --- R3: Idempotence ---
def test_R3_idempotent_derivation(parts_catalog: CatalogIndex, rules: EngineRules):
    """R3: Deriving twice from the same snapshot gives equal bundles."""
    power = PowerComposition(
        name="Scorch",
        parts=(PartInstance(part_ref="1", chosen_option_level=1), PartInstance(part_ref="2")),
        damage=[DamageSpec(amount=2, size=6, type="fire")],
    )

    first = derive_power_display(power, parts_catalog, rules=rules)
    second = derive_power_display(power, parts_catalog, rules=rules)

    assert first == second
    assert first.to_dict() == second.to_dict()


# --- R4: Unresolved tolerance ---
def test_R4_unresolved_parts_never_raise(parts_catalog: CatalogIndex):
    """R4: Unknown references degrade to zero-cost chips."""
    power = PowerComposition(
        parts=(
            PartInstance(part_ref="404", name="Lost (Opt1 2)", chosen_option_level=3),
            PartInstance(part_ref="3"),
        )
    )

    bundle = derive_power_display(power, parts_catalog)

    assert bundle.training_points == 2
    assert bundle.duration == "1 minute"
    assert bundle.part_chips[0].label == "Lost"
    assert bundle.part_chips[0].resolved is False
    assert len(bundle.unresolved) == 1


def test_R4_garbage_catalog_numbers():
    """R4: Malformed catalog numbers never produce NaN."""
    catalog = [
        {"id": "a", "name": "A", "baseEnergyCost": "NaN", "baseTrainingPointCost": None},
        {"id": "b", "name": "B", "baseEnergyCost": "x", "isPercentageCost": True},
    ]

    result = aggregate([PartInstance(part_ref="a"), PartInstance(part_ref="b")], catalog)

    assert result.energy == 0
    assert result.training_points == 0


def test_R4_float_range_overflow_in_sums():
    """R4: Totals past the float range read as 0 instead of raising."""
    catalog = [{"id": "a", "name": "A", "baseTrainingPointCost": 1e308}]

    result = aggregate([PartInstance(part_ref="a"), PartInstance(part_ref="a")], catalog)

    assert result.training_points == 0
    assert [p.training_points for p in result.parts] == [1e308, 1e308]


def test_R4_float_range_overflow_in_percentage():
    """R4: A percentage multiplier raised past the float range does not raise."""
    catalog = [
        {"id": "flat", "name": "Flat", "baseEnergyCost": 1},
        {"id": "huge", "name": "Huge", "baseEnergyCost": 1e200, "isPercentageCost": True},
    ]
    parts = [PartInstance(part_ref="flat"), PartInstance(part_ref="huge", quantity=2)]

    result = aggregate(parts, catalog)

    assert math.isfinite(result.energy)
    assert result.energy == 0


def test_R4_infinite_subtotal_times_zero_is_not_nan():
    """R4: An overflowed subtotal scaled by a zero multiplier stays a number."""
    catalog = [
        {"id": "big", "name": "Big", "baseEnergyCost": 1e308},
        {"id": "zero", "name": "Zero", "baseEnergyCost": 0, "isPercentageCost": True},
    ]
    parts = [
        PartInstance(part_ref="big"),
        PartInstance(part_ref="big"),
        PartInstance(part_ref="zero"),
    ]

    result = aggregate(parts, catalog)

    assert not math.isnan(result.energy)
    assert result.energy == 0


def test_R4_out_of_range_integers_coerced():
    """R4: Integers too large for a float fall back to defaults."""
    inst = PartInstance(part_ref="a", quantity=10**400, chosen_option_level=10**400)
    catalog = [{"id": "a", "name": "A", "baseCurrencyCost": 10**400, "baseTrainingPointCost": 2}]

    result = aggregate([inst], catalog)

    assert inst.quantity == 1
    assert inst.chosen_option_level == 0
    assert result.currency == 0
    assert result.training_points == 2


# --- R5: Rarity boundaries ---
@pytest.mark.parametrize(
    ("currency", "tier"),
    [(0, "Common"), (99, "Common"), (100, "Uncommon"), (499, "Uncommon"), (500, "Rare")],
)
def test_R5_rarity_bounds_inclusive(currency, tier, rules: EngineRules):
    """R5: Tier bounds are inclusive on both ends."""
    result = calculate_currency_cost_and_rarity(currency, 0, rules.get_rarity_tiers())
    assert result.rarity_tier == tier


def test_R5_rarity_overflow_lands_in_last_tier():
    """R5: Totals above a closed table land in its last tier."""
    tiers = [
        RarityTier(name="Common", currency_min=0, currency_max=99),
        RarityTier(name="Uncommon", currency_min=100, currency_max=499),
    ]

    assert calculate_currency_cost_and_rarity(10_000, 0, tiers).rarity_tier == "Uncommon"


# --- R6: Damage equivalence ---
def test_R6_damage_shapes_equivalent():
    """R6: Text, single spec and list spec render identically."""
    spec = DamageSpec(amount=2, size=6, type="fire")

    assert format_damage("2d6 fire") == format_damage(spec) == format_damage((spec,))


def test_R6_technique_weapon_damage(parts_catalog: CatalogIndex):
    """R6: Techniques without damage show the weapon's."""
    technique = TechniqueComposition(
        parts=(PartInstance(part_ref="1"),),
        weapon=WeaponRef(name="Flame Sword", damage=[{"amount": 2, "size": 6, "type": "fire"}]),
    )

    assert derive_technique_display(technique, parts_catalog).damage_text == "2d6 fire"


# --- R7: Item pricing ---
def test_R7_item_option_cost_and_rarity(properties_catalog: CatalogIndex):
    """R7: An option adds its own cost once; currency is banded after rounding."""
    props = [PartInstance(part_ref="p1", chosen_option_level=2)]
    tiers = [
        RarityTier(name="Common", currency_min=0, currency_max=99),
        RarityTier(name="Rare", currency_min=100),
    ]

    totals = calculate_item_costs(props, properties_catalog)
    bundle = derive_item_display(
        ItemComposition(name="Razor Sword", properties=tuple(props)),
        properties_catalog,
        tiers=tiers,
    )

    assert totals.total_tp == 6
    assert totals.total_currency == 150
    assert bundle.currency_cost == 150
    assert bundle.rarity_tier == "Rare"
    assert bundle.training_points == 6


def test_R7_non_items_never_priced(parts_catalog: CatalogIndex):
    """R7: Power and Technique bundles carry no currency or rarity."""
    power = derive_power_display(
        PowerComposition(parts=(PartInstance(part_ref="1"),)), parts_catalog
    )
    technique = derive_technique_display(TechniqueComposition(), parts_catalog)

    for bundle in (power, technique):
        data = bundle.to_dict()
        assert "currency_cost" not in data
        assert "rarity_tier" not in data
