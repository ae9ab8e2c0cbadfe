"""
Damage component - Damage notation formatting.

Normalizes the damage shapes found on compositions into one string:
free text, a single die spec, or an ordered list of die specs.

Invariants:
- I1: Free text is returned verbatim
- I2: Missing input renders as ""
- I3: Elements rendering to "" are dropped from lists
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from src.domain.entities import DamageSpec

NONE_SENTINEL = "none"


def _present(value: Any) -> bool:
    if value is None:
        return False
    text = str(value).strip()
    return text not in ("", "0")


def _as_fields(spec: DamageSpec | Mapping[str, Any]) -> tuple[Any, Any, Any]:
    if isinstance(spec, DamageSpec):
        return spec.amount, spec.size, spec.type
    return spec.get("amount"), spec.get("size"), spec.get("type")


def format_die_spec(
    spec: DamageSpec | Mapping[str, Any],
    none_sentinel: str = NONE_SENTINEL,
) -> str:
    """Render one die spec as "{amount}d{size} {type}"."""
    amount, size, damage_type = _as_fields(spec)

    if _present(amount) and _present(size):
        text = f"{str(amount).strip()}d{str(size).strip()}"
    elif _present(amount):
        text = str(amount).strip()
    else:
        # A type with no dice is not damage
        return ""

    type_text = str(damage_type).strip() if damage_type is not None else ""
    if type_text and type_text.lower() != none_sentinel:
        text = f"{text} {type_text}"
    return text


def format_damage(value: Any, none_sentinel: str = NONE_SENTINEL) -> str:
    """
    Format any supported damage input as canonical notation.

    Accepts a string, a DamageSpec or mapping, or a sequence of those.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (DamageSpec, Mapping)):
        return format_die_spec(value, none_sentinel)
    if isinstance(value, Sequence):
        rendered = (format_damage(item, none_sentinel) for item in value)
        return ", ".join(text for text in rendered if text)
    return ""


# --- Per-kind wrappers ---


def format_power_damage(value: Any, none_sentinel: str = NONE_SENTINEL) -> str:
    return format_damage(value, none_sentinel)


def format_technique_damage(value: Any, none_sentinel: str = NONE_SENTINEL) -> str:
    return format_damage(value, none_sentinel)


def format_item_damage(value: Any, none_sentinel: str = NONE_SENTINEL) -> str:
    return format_damage(value, none_sentinel)
