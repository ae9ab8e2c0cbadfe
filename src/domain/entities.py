import math
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# --- Enums / Literals ---
PartKind = Literal["power", "technique", "armament-property"]
ItemType = Literal["weapon", "armor", "equipment"]

ITEM_TYPE_ALIASES: dict[str, ItemType] = {
    "shield": "armor",
    "accessory": "equipment",
}

MAX_OPTION_SLOTS = 3


# --- Coercion helpers ---

def coerce_number(value: Any, default: float = 0.0) -> float:
    """
    Read a cost field written by the authoring layer.

    Missing, boolean, non-numeric and non-finite values all become `default`.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        if isinstance(value, (int, float)):
            number = float(value)
        elif isinstance(value, str):
            number = float(value.strip())
        else:
            return default
    except (ValueError, OverflowError):
        return default
    if not math.isfinite(number):
        return default
    return number


def coerce_int(value: Any, default: int = 0) -> int:
    return int(coerce_number(value, float(default)))


class _Record(BaseModel):
    """Immutable record accepting both camelCase and snake_case keys."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


# --- Catalog ---

class PartOption(_Record):
    description: str = ""
    energy_cost: float = 0.0
    training_point_cost: float = 0.0
    currency_cost: float = 0.0
    item_points: float = 0.0

    @field_validator(
        "energy_cost", "training_point_cost", "currency_cost", "item_points", mode="before"
    )
    @classmethod
    def _numeric(cls, v: Any) -> float:
        return coerce_number(v)

    @field_validator("description", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @property
    def is_populated(self) -> bool:
        return bool(self.description.strip())


class PartCatalogEntry(_Record):
    id: str
    name: str
    description: str = ""
    category: str = ""
    kind: PartKind = "power"

    base_energy_cost: float = 0.0
    base_training_point_cost: float = 0.0
    base_currency_cost: float = 0.0
    base_item_points: float = 0.0

    is_percentage_cost: bool = False
    affects_duration: bool = False
    is_mechanic_only: bool = False
    targeted_defenses: frozenset[str] = Field(default_factory=frozenset)

    # Option slot N lives at index N - 1
    options: tuple[PartOption, ...] = Field(default=(), max_length=MAX_OPTION_SLOTS)

    # Display declarations used when a composition has no explicit override
    action_type: str = ""
    range: str = ""
    area: str = ""
    duration: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, v: Any) -> str:
        return str(v).strip()

    @field_validator(
        "base_energy_cost",
        "base_training_point_cost",
        "base_currency_cost",
        "base_item_points",
        mode="before",
    )
    @classmethod
    def _numeric(cls, v: Any) -> float:
        return coerce_number(v)

    @field_validator(
        "description", "category", "action_type", "range", "area", "duration", mode="before"
    )
    @classmethod
    def _text(cls, v: Any) -> str:
        return "" if v is None else str(v)

    def option(self, level: int) -> PartOption | None:
        """Return the populated option at `level` (1-based), if any."""
        if level < 1 or level > len(self.options):
            return None
        slot = self.options[level - 1]
        return slot if slot.is_populated else None

    @property
    def populated_levels(self) -> tuple[int, ...]:
        return tuple(i + 1 for i, slot in enumerate(self.options) if slot.is_populated)


# --- Compositions ---

class DamageSpec(_Record):
    amount: int | str | None = None
    size: int | str | None = None
    type: str | None = None


DamageInput = str | DamageSpec | tuple[DamageSpec, ...] | None


class PartInstance(_Record):
    part_ref: str
    name: str | None = None
    chosen_option_level: int = 0
    quantity: int = 1

    @field_validator("part_ref", mode="before")
    @classmethod
    def _ref_as_text(cls, v: Any) -> str:
        return "" if v is None else str(v).strip()

    @field_validator("chosen_option_level", mode="before")
    @classmethod
    def _level(cls, v: Any) -> int:
        return max(0, coerce_int(v))

    @field_validator("quantity", mode="before")
    @classmethod
    def _quantity(cls, v: Any) -> int:
        return max(0, coerce_int(v, default=1))

    @property
    def literal_label(self) -> str:
        return self.name or self.part_ref


class WeaponRef(_Record):
    id: str | None = None
    name: str | None = None
    damage: DamageInput = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, v: Any) -> str | None:
        return None if v is None else str(v).strip()


class PowerComposition(_Record):
    name: str = ""
    description: str = ""
    parts: tuple[PartInstance, ...] = ()
    damage: DamageInput = None
    action_type: str | None = None
    is_reaction: bool = False
    range: str | None = None
    area: str | None = None
    duration: str | None = None


class TechniqueComposition(PowerComposition):
    weapon: WeaponRef | None = None


class ItemComposition(_Record):
    id: str | None = None
    name: str = ""
    description: str = ""
    type: ItemType = "weapon"
    properties: tuple[PartInstance, ...] = ()
    damage: DamageInput = None
    armor_value: float | None = None
    action_type: str | None = None
    range: str | None = None
    area: str | None = None
    duration: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, v: Any) -> str | None:
        return None if v is None else str(v).strip()

    @field_validator("type", mode="before")
    @classmethod
    def _item_type(cls, v: Any) -> str:
        text = str(v or "weapon").strip().lower()
        return ITEM_TYPE_ALIASES.get(text, text)

    @field_validator("armor_value", mode="before")
    @classmethod
    def _armor(cls, v: Any) -> float | None:
        return None if v is None else coerce_number(v)


Composition = PowerComposition | TechniqueComposition | ItemComposition
