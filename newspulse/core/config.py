"""Configuration module for loading project settings and environment variables."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

_DEFAULTS: Dict[str, Any] = {
    "ticker": "AAPL",
    "time_frame": "daily",
    "lookback_years": 2,
    "output_dir": "output",
    "news": {"max_articles": 400, "page_size": 50, "timeout_seconds": 15},
    "prices": {"provider": "marketstack", "limit": 1000, "timeout_seconds": 15},
}


def load_config(config_path: str | Path = "config.yaml") -> Dict[str, Any]:
    """
    Load configuration from the specified YAML file, layered over defaults.

    Args:
        config_path (str | Path): Path to the configuration file. Defaults to "config.yaml".

    Returns:
        Dict[str, Any]: A dictionary containing the configuration settings.
    """
    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found at {config_path}")

    with open(config_file, "r", encoding="utf-8") as file:
        config_data = yaml.safe_load(file)

    if not config_data:
        raise ValueError(f"Configuration file {config_path} is empty or invalid.")

    if not isinstance(config_data, dict):
        raise ValueError(f"Configuration file {config_path} must contain a mapping.")

    return _merge(_DEFAULTS, config_data)


def get_api_key(name: str) -> Optional[str]:
    """Return a credential from the environment, or None when unset or blank."""
    value = os.getenv(name, "").strip()
    return value or None


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively overlay ``override`` on ``base`` without mutating either."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged
