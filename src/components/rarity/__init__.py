"""
Rarity component - Currency/rarity banding for items.
"""

from .component import (
    NO_TIER,
    band,
    calculate_currency_cost_and_rarity,
    ordered_tiers,
    round_half_up,
    tier_matches,
)
from .models import RarityResult

__all__ = [
    # Entry points
    "band",
    "calculate_currency_cost_and_rarity",
    # Helpers
    "ordered_tiers",
    "round_half_up",
    "tier_matches",
    "NO_TIER",
    # Output models
    "RarityResult",
]
