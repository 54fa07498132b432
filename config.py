"""
Configuration for the listing sentinel.

Values are layered: DEFAULT_CONFIG <- config.json (optional) <- environment.
"""

import os
import json
import logging
from typing import Any, Dict, List, Mapping, Optional

logger = logging.getLogger("config")

REQUIRED_CREDENTIALS = ("TWITTER_BEARER_TOKEN", "TELEGRAM_BOT_TOKEN", "TELEGRAM_CHAT_ID")

# Default configuration
DEFAULT_CONFIG: Dict[str, Any] = {
    # Credentials
    "TWITTER_BEARER_TOKEN": "",
    "TELEGRAM_BOT_TOKEN": "",
    "TELEGRAM_CHAT_ID": "",

    # Discovery
    "LISTING_ACCOUNT": "MEXC_Listings",
    "LISTING_PHRASES": ["MEXC Will List", "New listing on #MEXC", "will be listed on #MEXC"],
    "LISTING_MAX_RESULTS": 20,
    "LISTING_RECENCY_WINDOW_SECONDS": 2 * 3600,

    # Social analysis
    "SOCIAL_MAX_RESULTS": 100,
    "INFLUENCER_FOLLOWER_THRESHOLD": 5000,

    # Filtering
    "MIN_LIQUIDITY_USD": 100_000.0,
    "MIN_VOLUME_USD": 1_000_000.0,
    "MIN_FDV_USD": 2_000_000.0,
    "MIN_INFLUENCERS": 2,
    "MIN_MENTIONS": 50,

    # Scheduling
    "CYCLE_INTERVAL_SECONDS": 30 * 60,
    "ALLOW_OVERLAPPING_CYCLES": False,

    # HTTP
    "DEXSCREENER_API_URL": "https://api.dexscreener.com/latest/dex/tokens/",
    "REQUEST_TIMEOUT_SECONDS": 15,
    "USER_AGENT": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    ),

    # System
    "LOG_LEVEL": "INFO",
}

NON_NEGATIVE_KEYS = (
    "MIN_LIQUIDITY_USD",
    "MIN_VOLUME_USD",
    "MIN_FDV_USD",
    "MIN_INFLUENCERS",
    "MIN_MENTIONS",
    "INFLUENCER_FOLLOWER_THRESHOLD",
)
POSITIVE_KEYS = (
    "LISTING_RECENCY_WINDOW_SECONDS",
    "CYCLE_INTERVAL_SECONDS",
    "LISTING_MAX_RESULTS",
    "SOCIAL_MAX_RESULTS",
)


class ConfigError(Exception):
    """Raised when the configuration cannot be used to start the sentinel."""


def load_config(config_file: str = "config.json",
                environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """
    Loads the configuration.

    Args:
        config_file: optional JSON file whose keys override the defaults
        environ: environment mapping, defaults to os.environ

    Returns:
        Configuration dictionary with every DEFAULT_CONFIG key present
    """
    config = dict(DEFAULT_CONFIG)

    if config_file and os.path.exists(config_file):
        try:
            with open(config_file, "r") as f:
                config.update(json.load(f))
            logger.info(f"Configuration loaded from: {config_file}")
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load configuration file {config_file}: {e}")
            logger.info("Using default configuration")

    config.update(load_config_from_env(environ))
    return config


def load_config_from_env(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """
    Reads every DEFAULT_CONFIG key present in the environment, parsed
    according to the type of its default value.
    """
    environ = os.environ if environ is None else environ
    config = {}

    for key, default_value in DEFAULT_CONFIG.items():
        env_value = environ.get(key)
        if env_value is None:
            continue
        try:
            config[key] = _parse_env_value(env_value, default_value)
        except ValueError as parse_err:
            logger.warning(f"Could not parse env variable {key}: {parse_err}. Using default value.")

    return config


def _parse_env_value(raw: str, default_value: Any) -> Any:
    # bool must be tested before int
    if isinstance(default_value, bool):
        return raw.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(default_value, int):
        return int(raw)
    if isinstance(default_value, float):
        return float(raw)
    if isinstance(default_value, list):
        return _split_list(raw)
    return raw


def _split_list(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def validate_config(config: Mapping[str, Any]) -> None:
    """
    Raises ConfigError when credentials are missing or thresholds are invalid.
    """
    missing = [key for key in REQUIRED_CREDENTIALS if not str(config.get(key) or "").strip()]
    if missing:
        raise ConfigError(f"Missing required credentials: {', '.join(missing)}")

    for key in NON_NEGATIVE_KEYS + POSITIVE_KEYS:
        value = config.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"{key} must be a number (got {value!r})")

    for key in NON_NEGATIVE_KEYS:
        if config[key] < 0:
            raise ConfigError(f"{key} must be >= 0 (got {config[key]})")

    for key in POSITIVE_KEYS:
        if config[key] <= 0:
            raise ConfigError(f"{key} must be > 0 (got {config[key]})")

    if not config.get("LISTING_PHRASES"):
        raise ConfigError("LISTING_PHRASES must contain at least one phrase")
