"""
Rules port - configuration consumed by the derivation components.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from src.rules.models import RarityTier


class RulesPort(Protocol):
    """Port for engine rules configuration."""

    def get_rarity_tiers(self) -> Sequence[RarityTier]:
        """Ordered rarity tier table for items."""
        ...

    def get_placeholder(self) -> str:
        """Text shown for display fields with no value."""
        ...

    def get_damage_none_sentinel(self) -> str:
        """Damage type value meaning "no type"."""
        ...
