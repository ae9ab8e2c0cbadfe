"""
Display component - Display bundle derivation for Powers, Techniques and Items.
"""

from ._impl import (
    ACTION_SELECTIONS,
    ITEM_PROFILE,
    POWER_PROFILE,
    TECHNIQUE_PROFILE,
    DerivationService,
    KindProfile,
    compute_action_type_from_selection,
    derive_bundle,
    resolve_display_field,
)
from .component import (
    derive_display,
    derive_item_display,
    derive_power_display,
    derive_technique_display,
    format_range,
    run,
)
from .models import (
    DeriveDisplayInput,
    DeriveDisplayOutput,
    DisplayBundle,
    PartChip,
)
from .ports import CatalogSnapshotPort, RulesPort

__all__ = [
    # Entry points
    "run",
    "derive_display",
    "derive_power_display",
    "derive_technique_display",
    "derive_item_display",
    "format_range",
    # Input/output models
    "DeriveDisplayInput",
    "DeriveDisplayOutput",
    "DisplayBundle",
    "PartChip",
    # Ports
    "CatalogSnapshotPort",
    "RulesPort",
    # Pipeline
    "DerivationService",
    "KindProfile",
    "POWER_PROFILE",
    "TECHNIQUE_PROFILE",
    "ITEM_PROFILE",
    "ACTION_SELECTIONS",
    "compute_action_type_from_selection",
    "derive_bundle",
    "resolve_display_field",
]
