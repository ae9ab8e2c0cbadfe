"""
Rarity component - Currency/rarity banding for items.

Maps aggregated item totals onto a rarity tier using an ordered table of
ranges sourced from the rules configuration.

Invariants:
- I1: Tiers are scanned in ascending level_min order; first full match wins
- I2: currency_min and currency_max are both inclusive
- I3: Inputs above every tier land in the last tier
- I4: Every input gets a classification
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from src.domain.entities import coerce_number
from src.rules.models import DEFAULT_RARITY_TIERS, RarityTier

from .models import RarityResult

logger = logging.getLogger(__name__)

NO_TIER = "-"


def round_half_up(value: float) -> int:
    """Round to the nearest whole unit; .5 rounds up."""
    return math.floor(coerce_number(value) + 0.5)


def ordered_tiers(tiers: Sequence[RarityTier]) -> list[RarityTier]:
    """Tiers in scan order. Tiers without level_min sort as 0; ties keep table order."""
    return sorted(tiers, key=lambda t: t.level_min if t.level_min is not None else 0)


def _within(value: float, low: float | None, high: float | None) -> bool:
    if low is not None and value < low:
        return False
    return high is None or value <= high


def tier_matches(tier: RarityTier, currency_cost: int, level: float) -> bool:
    if not _within(currency_cost, tier.currency_min, tier.currency_max):
        return False
    if tier.has_level_axis:
        return _within(level, tier.level_min, tier.level_max)
    return True


def band(
    currency_total: float,
    item_points_total: float,
    tiers: Sequence[RarityTier],
) -> RarityResult:
    """
    Band an item's totals into a rarity tier.

    Item points are the level axis for tiers that declare level bounds.

    Args:
        currency_total: Aggregated currency of the item's properties.
        item_points_total: Aggregated item points of the item's properties.
        tiers: Rarity tier table.

    Returns:
        RarityResult with the rounded currency cost and tier name.
    """
    currency_cost = round_half_up(currency_total)
    level = coerce_number(item_points_total)
    scan = ordered_tiers(tiers)

    if not scan:
        return RarityResult(currency_cost=currency_cost, rarity_tier=NO_TIER, matched=False)

    for tier in scan:
        if tier_matches(tier, currency_cost, level):
            return RarityResult(currency_cost=currency_cost, rarity_tier=tier.name)

    ceiling = scan[-1]
    logger.debug(
        "No rarity tier matched currency=%d level=%s; using %r",
        currency_cost,
        level,
        ceiling.name,
    )
    return RarityResult(currency_cost=currency_cost, rarity_tier=ceiling.name, matched=False)


def calculate_currency_cost_and_rarity(
    total_currency: float,
    total_item_points: float,
    tiers: Sequence[RarityTier] | None = None,
) -> RarityResult:
    """Host API entry point; falls back to the default tier table."""
    return band(
        total_currency,
        total_item_points,
        DEFAULT_RARITY_TIERS if tiers is None else tiers,
    )
