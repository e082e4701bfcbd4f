# Area: Shared
"""
majsoul_coyote._runner_config — Runner Configuration
====================================================

Settings defaults, environment mappings and validation for the replay
runner and CLI.
"""

import logging
from typing import Any, Dict

logger = logging.getLogger("majsoul_coyote")

# Game events the controllers subscribe to
GAME_EVENTS = {
    "mingpai",
    "riichi",
    "ron",
    "zumo",
    "liuju",
    "zhongju",
}

# Replay-only event announcing the match participants
START_EVENT = "start"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "log_file": "majsoul_coyote.log",
    "log_level": "INFO",
    "http_timeout": 5.0,
    "linger_seconds": 30.0,
}

# Environment variable -> (settings key, converter)
ENV_MAPPINGS = {
    "COYOTE_GAME_CONFIG": ("game_config", str),
    "COYOTE_EVENTS": ("events", str),
    "COYOTE_LOG_FILE": ("log_file", str),
    "COYOTE_LOG_LEVEL": ("log_level", str),
    "COYOTE_HTTP_TIMEOUT": ("http_timeout", float),
    "COYOTE_LINGER": ("linger_seconds", float),
    "COYOTE_ACCOUNT_ID": ("account_id", int),
    "COYOTE_NICKNAME": ("nickname", str),
}

# Required settings keys
REQUIRED_SETTINGS_KEYS = [
    "game_config",
]


def validate_settings(settings: dict) -> None:
    """
    Validate required settings keys.

    Args:
        settings: Settings dict

    Raises:
        ValueError: If required keys are missing
    """
    missing = [k for k in REQUIRED_SETTINGS_KEYS if not settings.get(k)]
    if missing:
        raise ValueError(f"Missing required settings keys: {missing}")


def is_game_event(event: str) -> bool:
    return event in GAME_EVENTS
