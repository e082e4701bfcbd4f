# Area: Shared
"""
majsoul_coyote.cli — Command-line interface
===========================================

Replays a recorded match against the configured Coyote devices.

Usage:
    python -m majsoul_coyote --game-config coyote.json --events match.jsonl
    python -m majsoul_coyote --config settings.json

Settings are layered: defaults, then the JSON settings file, then
environment variables (a ``.env`` file in the working directory is
loaded first), then command-line flags.
"""

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from ._runner_config import DEFAULT_SETTINGS, ENV_MAPPINGS, validate_settings
from .errors import ConfigFileError


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Majsoul Coyote - drive Coyote strength from game events",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m majsoul_coyote --game-config coyote.json --events match.jsonl
  python -m majsoul_coyote --config settings.json --log-level DEBUG
  COYOTE_GAME_CONFIG=coyote.json python -m majsoul_coyote --events match.jsonl
        """,
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to JSON settings file",
    )

    parser.add_argument(
        "--game-config",
        type=str,
        help="Path to the per-player game config (JSON list of records)",
    )

    parser.add_argument(
        "--events",
        type=str,
        help="Path to a JSON-lines match replay",
    )

    parser.add_argument(
        "--log-file",
        type=str,
        help="Log file path (JSON lines)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    parser.add_argument(
        "--linger",
        type=float,
        help="Seconds to wait after the last event for controllers to retire",
    )

    return parser.parse_args(argv)


def load_settings(config_path: Optional[str]) -> Dict[str, Any]:
    """Load settings from defaults, file and environment."""
    settings: Dict[str, Any] = dict(DEFAULT_SETTINGS)

    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path, encoding="utf-8") as f:
                settings.update(json.load(f))

    load_dotenv()
    for env_key, (settings_key, convert) in ENV_MAPPINGS.items():
        if env_key in os.environ:
            settings[settings_key] = convert(os.environ[env_key])

    return settings


def apply_args(settings: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    """Override settings with explicitly given flags."""
    overrides = {
        "game_config": args.game_config,
        "events": args.events,
        "log_file": args.log_file,
        "log_level": args.log_level,
        "linger_seconds": args.linger,
    }
    for key, value in overrides.items():
        if value is not None:
            settings[key] = value
    return settings


def main(argv=None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)
    try:
        settings = apply_args(load_settings(args.config), args)
        validate_settings(settings)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not settings.get("events"):
        print("Error: no replay given (--events or COYOTE_EVENTS)", file=sys.stderr)
        return 1

    # Import runner here so --help stays fast
    from .runner import ReplayRunner

    try:
        runner = ReplayRunner(settings=settings)
        runner.run()
    except (ConfigFileError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0
