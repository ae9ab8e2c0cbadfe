"""
Costs component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.components.catalog import UnresolvedReference

# --- Output Models ---


@dataclass(frozen=True)
class PartCost:
    """One part instance's own contribution, in document order."""

    label: str
    description: str
    option_level: int
    quantity: int
    training_points: float
    energy: float
    currency: float
    item_points: float
    is_percentage: bool = False
    resolved: bool = True


@dataclass(frozen=True)
class CostBreakdown:
    """Aggregated totals for one composition's part list."""

    energy: float
    training_points: float
    currency: float
    item_points: float
    parts: tuple[PartCost, ...] = ()
    unresolved: tuple[UnresolvedReference, ...] = field(default=())

    @property
    def tp_sources(self) -> tuple[str, ...]:
        """Per-part TP lines such as "3 TP: Fire Bolt", for parts that cost TP."""
        return tuple(
            f"{format_number(part.training_points)} TP: {part.label}"
            for part in self.parts
            if part.training_points > 0
        )


@dataclass(frozen=True)
class ItemCostTotals:
    """Item property totals in the shape the item editor consumes."""

    total_currency: float
    total_tp: float
    total_item_points: float


def format_number(value: float) -> str:
    """Render integral floats without a decimal point."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)
