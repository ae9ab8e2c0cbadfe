from pathlib import Path

import pytest

from src.adapters.catalog_snapshot import InMemoryCatalogSnapshot
from src.components.catalog import CatalogIndex
from src.domain.entities import PartCatalogEntry, PartOption
from src.rules.loader import load_rules
from src.rules.models import EngineRules


@pytest.fixture
def project_root() -> Path:
    return Path(__file__).parent.parent


@pytest.fixture
def rules(project_root: Path) -> EngineRules:
    """Load the REAL rules file from the project root."""
    rules_path = project_root / "rules.yaml"
    if not rules_path.exists():
        raise FileNotFoundError(f"Rules not found at {rules_path}")
    return load_rules(rules_path)


@pytest.fixture
def part_entries() -> list[PartCatalogEntry]:
    """Small power/technique parts catalog covering flat, percentage and duration parts."""
    return [
        PartCatalogEntry(
            id="1",
            name="Fire Bolt",
            description="Hurl a bolt of flame.",
            base_energy_cost=2,
            base_training_point_cost=3,
            action_type="Basic Action",
            range="6 spaces",
            options=(
                PartOption(description="+1 die", energy_cost=1, training_point_cost=1),
                PartOption(description="+2 dice", energy_cost=2, training_point_cost=2),
            ),
        ),
        PartCatalogEntry(
            id="2",
            name="Empower",
            base_energy_cost=1.2,
            is_percentage_cost=True,
        ),
        PartCatalogEntry(
            id="3",
            name="Sustained",
            base_energy_cost=1,
            base_training_point_cost=2,
            affects_duration=True,
            duration="1 minute",
        ),
        PartCatalogEntry(
            id="4",
            name="Burst",
            base_energy_cost=3,
            base_training_point_cost=1,
            area="Sphere 2",
        ),
        PartCatalogEntry(
            id="5",
            name="Widen",
            base_energy_cost=1.5,
            is_percentage_cost=True,
        ),
    ]


@pytest.fixture
def parts_catalog(part_entries: list[PartCatalogEntry]) -> CatalogIndex:
    return CatalogIndex(part_entries)


@pytest.fixture
def property_entries() -> list[PartCatalogEntry]:
    """Armament properties with currency and item points."""
    return [
        PartCatalogEntry(
            id="p1",
            name="Keen Edge",
            kind="armament-property",
            base_training_point_cost=4,
            base_currency_cost=50,
            base_item_points=1,
            options=(
                PartOption(description="Keener", training_point_cost=1, currency_cost=25),
                PartOption(
                    description="Razor",
                    training_point_cost=2,
                    currency_cost=100,
                    item_points=1,
                ),
            ),
        ),
        PartCatalogEntry(
            id="p2",
            name="Long Reach",
            kind="armament-property",
            base_currency_cost=30,
            range="2 spaces",
        ),
        PartCatalogEntry(
            id="p3",
            name="Gilded",
            kind="armament-property",
            base_training_point_cost=0.5,
            base_currency_cost=0.1,
            base_item_points=0.2,
            options=(PartOption(description="Inlaid", currency_cost=0.3, item_points=0.7),),
        ),
    ]


@pytest.fixture
def properties_catalog(property_entries: list[PartCatalogEntry]) -> CatalogIndex:
    return CatalogIndex(property_entries)


@pytest.fixture
def snapshot(part_entries: list[PartCatalogEntry]) -> InMemoryCatalogSnapshot:
    return InMemoryCatalogSnapshot(part_entries)
