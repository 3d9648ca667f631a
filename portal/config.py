"""Application configuration with YAML support."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import Field

from matching_core.schemas import BaseSchema, LLMProviderConfig
from store.repository import DEFAULT_STORAGE_KEY


class AppConfig(BaseSchema):
    """Settings for a local UniMatch installation."""

    # Storage
    db_path: str = "data/unimatch.db"
    storage_key: str = DEFAULT_STORAGE_KEY

    # Bootstrap demo participants into an empty store on first login
    seed_demo: bool = True

    log_level: str = "WARNING"

    # Icebreaker text generation; None means static fallback lines only
    icebreaker: LLMProviderConfig | None = None
    icebreaker_temperature: float = Field(default=0.9, ge=0.0, le=2.0)
    icebreaker_max_tokens: int = Field(default=60, gt=0)


def load_config(yaml_path: str | Path) -> AppConfig:
    """Load application configuration from YAML file.

    Args:
        yaml_path: Path to YAML configuration file

    Returns:
        AppConfig instance

    Raises:
        FileNotFoundError: If YAML file doesn't exist
        ValueError: If YAML is invalid or has invalid fields
    """
    yaml_path = Path(yaml_path)

    if not yaml_path.exists():
        raise FileNotFoundError(f"Config file not found: {yaml_path}")

    with open(yaml_path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {yaml_path}: {e}") from e

    if data is None:
        return AppConfig()
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {yaml_path}")

    try:
        return AppConfig.from_dict(data)
    except Exception as e:
        raise ValueError(f"Invalid configuration in {yaml_path}: {e}") from e


def save_config(config: AppConfig, yaml_path: str | Path) -> None:
    """Save application configuration to YAML file."""
    yaml_path = Path(yaml_path)
    yaml_path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(exclude_none=True)

    with open(yaml_path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False, indent=2)
