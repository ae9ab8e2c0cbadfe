"""
Cost arithmetic for resolved part instances.

Functional Core - pure functions over resolved parts.

Key behaviors:
- A part's own cost is its base cost plus the chosen option's cost
- TP, currency and item points are plain sums
- Energy is folded in document order: flat parts add to the running
  subtotal, percentage parts multiply it
- Every total is finite; a total that leaves the float range reads as 0
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from src.components.catalog import ResolvedInstance
from src.domain.entities import coerce_number

from .models import PartCost


def own_costs(part: ResolvedInstance) -> PartCost:
    """
    Compute one instance's own contribution.

    Unresolved instances cost nothing but keep their label.
    """
    entry = part.entry
    if entry is None:
        return PartCost(
            label=part.label,
            description="",
            option_level=0,
            quantity=part.quantity,
            training_points=0.0,
            energy=0.0,
            currency=0.0,
            item_points=0.0,
            resolved=False,
        )

    option = entry.option(part.option_level)
    tp = entry.base_training_point_cost
    energy = entry.base_energy_cost
    currency = entry.base_currency_cost
    item_points = entry.base_item_points
    if option is not None:
        tp += option.training_point_cost
        energy += option.energy_cost
        currency += option.currency_cost
        item_points += option.item_points

    qty = part.quantity
    return PartCost(
        label=part.label,
        description=entry.description,
        option_level=part.option_level,
        quantity=qty,
        training_points=coerce_number(tp * qty),
        # Percentage energy stays a per-use multiplier; quantity is applied in fold_energy
        energy=coerce_number(energy if entry.is_percentage_cost else energy * qty),
        currency=coerce_number(currency * qty),
        item_points=coerce_number(item_points * qty),
        is_percentage=entry.is_percentage_cost,
    )


def fold_energy(parts: Iterable[PartCost]) -> float:
    """
    Combine energy in document order.

    Each percentage part multiplies whatever flat energy has accumulated
    before it; flat parts after it are not scaled.
    """
    total = 0.0
    for part in parts:
        if not part.resolved:
            continue
        if part.is_percentage:
            try:
                total *= math.pow(part.energy, part.quantity)
            except OverflowError:
                total = total * math.inf if total else 0.0
        else:
            total += part.energy
    return coerce_number(total)


def sum_field(parts: Iterable[PartCost], name: str) -> float:
    """Exact sum of one numeric field, independent of part order."""
    try:
        total = math.fsum(getattr(part, name) for part in parts)
    except OverflowError:
        return 0.0
    return coerce_number(total)
