"""Configuration loading."""

import os
from pathlib import Path
from typing import Optional

import yaml

from .config_models import NotesConfig

CONFIG_ENV_VAR = "NOTES_CONFIG"


def find_config() -> Optional[Path]:
    """Find config file in standard locations."""
    locations = [
        Path.cwd() / "notes.yaml",
        Path.home() / ".notes" / "config.yaml",
    ]
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        locations.insert(0, Path(env_path).expanduser())
    for loc in locations:
        if loc.exists():
            return loc
    return None


def load_config_model(config_path: Optional[Path] = None) -> NotesConfig:
    """Load configuration as Pydantic model with validation.

    Raises:
        ValueError: On unreadable YAML or values that fail validation.
    """
    base_config = {}

    path = config_path or find_config()
    if path and path.exists():
        try:
            with open(path) as f:
                base_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")

    if not isinstance(base_config, dict):
        raise ValueError(f"Config file {path} must contain a mapping")

    try:
        return NotesConfig.from_dict(base_config)
    except Exception as e:
        raise ValueError(f"Config validation failed: {e}")


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration as a plain dict."""
    return load_config_model(config_path).to_dict()
