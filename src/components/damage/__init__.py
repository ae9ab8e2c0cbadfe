"""
Damage component - Damage notation formatting.
"""

from .component import (
    NONE_SENTINEL,
    format_damage,
    format_die_spec,
    format_item_damage,
    format_power_damage,
    format_technique_damage,
)

__all__ = [
    "format_damage",
    "format_die_spec",
    "format_power_damage",
    "format_technique_damage",
    "format_item_damage",
    "NONE_SENTINEL",
]
