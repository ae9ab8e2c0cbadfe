"""
Costs component - Composition cost aggregation.

Combines a composition's part instances into Energy, Training Points,
Currency and Item Points totals.

Invariants:
- I1: Unresolved parts contribute zero to every total
- I2: TP, currency and item point totals do not depend on part order
- I3: Percentage parts scale only the energy accumulated before them
- I4: No input makes aggregation raise or return NaN
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from src.components.catalog import CatalogLike, ResolvedInstance, as_index, resolve_all
from src.domain.entities import PartInstance

from ._aggregate import fold_energy, own_costs, sum_field
from .models import CostBreakdown, ItemCostTotals, format_number

logger = logging.getLogger(__name__)

ENERGY_PLACEHOLDER = "-"


def aggregate(instances: Iterable[PartInstance], catalog: CatalogLike) -> CostBreakdown:
    """
    Aggregate the cost of a part list against a catalog snapshot.

    Args:
        instances: Part instances in document order.
        catalog: CatalogIndex or iterable of catalog entries.

    Returns:
        CostBreakdown with totals and a per-part breakdown in document order.
    """
    return aggregate_resolved(resolve_all(instances, as_index(catalog)))


def aggregate_resolved(resolved: Sequence[ResolvedInstance]) -> CostBreakdown:
    """Aggregate parts that were already resolved against a catalog."""
    parts = tuple(own_costs(part) for part in resolved)
    unresolved = tuple(p.unresolved for p in resolved if p.unresolved is not None)
    if unresolved:
        logger.debug("Aggregating with %d unresolved part(s)", len(unresolved))

    return CostBreakdown(
        energy=fold_energy(parts),
        training_points=sum_field(parts, "training_points"),
        currency=sum_field(parts, "currency"),
        item_points=sum_field(parts, "item_points"),
        parts=parts,
        unresolved=unresolved,
    )


# --- Host API Entry Points ---


def calculate_power_costs(
    parts: Iterable[PartInstance], parts_catalog: CatalogLike
) -> CostBreakdown:
    return aggregate(parts, parts_catalog)


def calculate_technique_costs(
    parts: Iterable[PartInstance], parts_catalog: CatalogLike
) -> CostBreakdown:
    return aggregate(parts, parts_catalog)


def calculate_item_costs(
    properties: Iterable[PartInstance], properties_catalog: CatalogLike
) -> ItemCostTotals:
    """Total currency, TP and item points for an item's properties."""
    totals = aggregate(properties, properties_catalog)
    return ItemCostTotals(
        total_currency=totals.currency,
        total_tp=totals.training_points,
        total_item_points=totals.item_points,
    )


# --- Formatting ---


def format_percentage(multiplier: float) -> str:
    """
    Render an energy multiplier as a signed percentage change.

    1.25 -> "+25%", 0.5 -> "-50%", 1.125 -> "+12.5%", 1.0004 -> "+0%".
    """
    # Round to the displayed precision before deciding on a decimal place
    change = round((multiplier - 1) * 100, 1)
    if change == 0:
        change = 0.0
    sign = "+" if change >= 0 else ""
    if change.is_integer():
        return f"{sign}{change:.0f}%"
    return f"{sign}{change:.1f}%"


def format_energy_cost(
    energy: float | None,
    is_percentage: bool = False,
    placeholder: str = ENERGY_PLACEHOLDER,
) -> str:
    """Format a catalog entry's energy cost for browsing views."""
    if not energy:
        return placeholder
    if is_percentage:
        return format_percentage(energy)
    return format_number(energy)
