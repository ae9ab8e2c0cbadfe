"""
Rarity component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RarityResult:
    """Rounded currency price and the rarity tier it falls in."""

    currency_cost: int
    rarity_tier: str
    matched: bool = True  # False when no tier matched and a fallback was used

    @property
    def rarity(self) -> str:
        """Tier name under the host API's `rarity` key."""
        return self.rarity_tier
