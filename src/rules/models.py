from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.domain.entities import coerce_number


class RarityTier(BaseModel):
    name: str
    currency_min: float = 0
    currency_max: float | None = None
    level_min: float | None = None
    level_max: float | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    @field_validator("currency_min", mode="before")
    @classmethod
    def _min(cls, v: Any) -> float:
        return coerce_number(v)

    @field_validator("currency_max", "level_min", "level_max", mode="before")
    @classmethod
    def _optional_bound(cls, v: Any) -> float | None:
        # null means unbounded
        return None if v is None else coerce_number(v)

    @property
    def has_level_axis(self) -> bool:
        return self.level_min is not None or self.level_max is not None


class RaritiesRules(BaseModel):
    tiers: list[RarityTier] = Field(default_factory=list)

class DisplayRules(BaseModel):
    placeholder: str = "-"
    damage_none_sentinel: str = "none"

class EngineRules(BaseModel):
    schema_version: int = 1
    rarities: RaritiesRules = Field(default_factory=RaritiesRules)
    display: DisplayRules = Field(default_factory=DisplayRules)

    # RulesPort

    def get_rarity_tiers(self) -> tuple[RarityTier, ...]:
        return tuple(self.rarities.tiers)

    def get_placeholder(self) -> str:
        return self.display.placeholder

    def get_damage_none_sentinel(self) -> str:
        return self.display.damage_none_sentinel


DEFAULT_RARITY_TIERS: tuple[RarityTier, ...] = (
    RarityTier(name="Common", currency_min=0, currency_max=99),
    RarityTier(name="Uncommon", currency_min=100, currency_max=499),
    RarityTier(name="Rare", currency_min=500, currency_max=1499),
    RarityTier(name="Epic", currency_min=1500, currency_max=9999),
    RarityTier(name="Legendary", currency_min=10000, currency_max=49999),
    RarityTier(name="Mythic", currency_min=50000, currency_max=99999),
    RarityTier(name="Ascended", currency_min=100000, currency_max=None),
)

DEFAULT_RULES = EngineRules(rarities=RaritiesRules(tiers=list(DEFAULT_RARITY_TIERS)))
