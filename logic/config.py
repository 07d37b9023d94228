"""
Configuration management module.

This module provides the environment-driven settings of the service and
utilities for loading the application preferences stored in config.json.

Author: Matthew Picone (mail@matthewpicone.com)
Date: 2025-12-17
"""

import json
import logging
import os
import secrets
from typing import Dict, Any

logger = logging.getLogger(__name__)

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CONFIG_PATH = os.getenv("TRAPLINE_CONFIG_PATH", os.path.join(BASE_DIR, "config.json"))

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./trapline.db")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

SESSION_SECRET_KEY = os.getenv("SESSION_SECRET_KEY")
SESSION_MAX_AGE = int(os.getenv("SESSION_MAX_AGE", str(60 * 60 * 24 * 7)))  # 7 days
COOKIE_SECURE = os.getenv("COOKIE_SECURE", "false").lower() in ("1", "true", "yes")

if not SESSION_SECRET_KEY:
    SESSION_SECRET_KEY = secrets.token_urlsafe(32)
    logger.warning(
        "SESSION_SECRET_KEY not set. Using temporary key. Set this in .env for production."
    )


def load_config() -> Dict[str, Any]:
    """Load application preferences from config.json.

    Returns:
        Configuration dictionary with all required fields ensured.
    """
    try:
        with open(CONFIG_PATH, "r", encoding="utf-8") as f:
            config = json.load(f)
    except FileNotFoundError:
        config = get_default_config()

    return ensure_config_fields(config)


def get_default_config() -> Dict[str, Any]:
    """Get default configuration structure.

    Returns:
        Default configuration dictionary.
    """
    return {
        "jurisdiction": "Ontario",
        "trapping_season": "2026",
        "map": {
            "home_base": [45.256, -75.358],
            "zoom": 13,
            "tile_url": "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
            "attribution": '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a>',
        },
    }


def ensure_config_fields(config: Dict[str, Any]) -> Dict[str, Any]:
    """Ensure all required fields are present in the configuration.

    Args:
        config: Configuration dictionary to update.

    Returns:
        Updated configuration dictionary.
    """
    defaults = get_default_config()

    config.setdefault("jurisdiction", defaults["jurisdiction"])
    config.setdefault("trapping_season", defaults["trapping_season"])

    # Season may be written as a bare year
    config["trapping_season"] = str(config["trapping_season"])

    map_config = config.setdefault("map", {})
    for key, default in defaults["map"].items():
        map_config.setdefault(key, default)

    return config
