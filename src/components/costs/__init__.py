"""
Costs component - Composition cost aggregation.
"""

from ._aggregate import fold_energy, own_costs
from .component import (
    aggregate,
    aggregate_resolved,
    calculate_item_costs,
    calculate_power_costs,
    calculate_technique_costs,
    format_energy_cost,
    format_percentage,
)
from .models import CostBreakdown, ItemCostTotals, PartCost, format_number

__all__ = [
    # Entry points
    "aggregate",
    "aggregate_resolved",
    "calculate_power_costs",
    "calculate_technique_costs",
    "calculate_item_costs",
    # Formatting
    "format_energy_cost",
    "format_percentage",
    "format_number",
    # Output models
    "CostBreakdown",
    "ItemCostTotals",
    "PartCost",
    # Arithmetic
    "own_costs",
    "fold_energy",
]
