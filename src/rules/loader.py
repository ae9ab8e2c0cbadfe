import logging
import os
from collections.abc import Sequence
from pathlib import Path

import yaml
from pydantic import ValidationError

from src.rules.models import EngineRules, RarityTier

logger = logging.getLogger(__name__)

DEFAULT_RULES_FILENAME = "rules.yaml"
RULES_PATH_ENV = "RULES_PATH"


class RulesValidationError(ValueError):
    """Raised when the rules file parses but describes an unusable tier table."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(f"Rules validation failed: {'; '.join(errors)}")


def _find_project_root() -> Path:
    """Find project root by looking for marker files."""
    current = Path.cwd()

    for parent in [current, *current.parents]:
        if (parent / "pyproject.toml").exists() or (parent / ".git").exists():
            return parent

    return current


def default_rules_path() -> Path:
    """RULES_PATH if set, else rules.yaml at the project root."""
    env_path = os.environ.get(RULES_PATH_ENV)
    if env_path:
        return Path(env_path)
    return _find_project_root() / DEFAULT_RULES_FILENAME


def _strip_markdown_fences(content: str) -> str:
    """Return the first ```yaml block if present, else the whole content."""
    yaml_lines = []
    in_block = False
    found_block = False

    for line in content.splitlines():
        s_line = line.strip()
        if s_line.startswith("```yaml"):
            in_block = True
            found_block = True
            continue
        if in_block and s_line.startswith("```"):
            break
        if in_block:
            yaml_lines.append(line)

    return "\n".join(yaml_lines) if found_block else content


def validate_tiers(tiers: Sequence[RarityTier]) -> list[str]:
    """Semantic checks on a rarity tier table. Returns error messages."""
    errors: list[str] = []
    seen: set[str] = set()

    for i, tier in enumerate(tiers):
        label = tier.name or f"#{i}"
        if not tier.name.strip():
            errors.append(f"Tier {label}: name must be non-empty")
        elif tier.name in seen:
            errors.append(f"Tier {label}: duplicate name")
        seen.add(tier.name)

        if tier.currency_max is not None and tier.currency_max < tier.currency_min:
            errors.append(f"Tier {label}: currency_max is below currency_min")
        if (
            tier.level_min is not None
            and tier.level_max is not None
            and tier.level_max < tier.level_min
        ):
            errors.append(f"Tier {label}: level_max is below level_min")

    return errors


def load_rules(path: Path | None = None) -> EngineRules:
    """
    Load and validate the rules file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if YAML or schema invalid.
    """
    if path is None:
        path = default_rules_path()
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    content = _strip_markdown_fences(path.read_text())

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    if data is None:
        raise ValueError("Rules file is empty")

    try:
        rules = EngineRules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Rules validation failed:\n{e}") from e

    errors = validate_tiers(rules.rarities.tiers)
    if errors:
        raise RulesValidationError(errors)

    logger.info("Rules loaded from %s (%d rarity tiers)", path, len(rules.rarities.tiers))
    return rules
