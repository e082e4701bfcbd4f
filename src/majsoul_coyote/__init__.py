"""
majsoul_coyote — Coyote strength control from Mahjong Soul game events
======================================================================

Reacts to one participant's game events (calls on their discards,
riichi by others, deal-ins, others' self draws, exhaustive draws and the
final placement) by changing strength on their remote Coyote device.

Quick Start:
    from majsoul_coyote import (
        CoyoteController, GameEventSource, GamePlayerInfo, load_game_config,
    )

    source = GameEventSource()
    config = load_game_config("coyote.json")
    controller = CoyoteController(
        source, GamePlayerInfo(nickname="Alice", seat=0), config,
    )
    source.emit("riichi", 2)      # inside a running asyncio loop

Replay a recorded match:
    python -m majsoul_coyote --game-config coyote.json --events match.jsonl
"""

from ._core import GameEventSource, EventStore, OverlayState
from .config import (
    CoyoteAction,
    CoyoteGameConfig,
    CoyoteGameConfigItem,
    GamePlayerInfo,
    SanmaRanks,
    SimaRanks,
    load_game_config,
    parse_game_config,
)
from .controller import CoyoteController
from .errors import (
    CoyoteError,
    ConfigNotFoundError,
    ConfigFileError,
    RemoteApiError,
    RemoteLogicalFailure,
    RemoteTransportFailure,
    MissingResultRecordError,
)
from .runner import ReplayRunner
from .session import MatchSession
from .types import (
    SetStrengthConfigRequest,
    SetStrengthConfigResponse,
    GameStrengthConfig,
    GetStrengthConfigResponse,
    PlayerResult,
)
from ._shared import CoyoteApiClient, setup_logging

__all__ = [
    # Main classes
    "CoyoteController",
    "MatchSession",
    "ReplayRunner",
    "GameEventSource",
    "EventStore",
    "OverlayState",
    "CoyoteApiClient",
    "setup_logging",
    # Config
    "CoyoteAction",
    "CoyoteGameConfig",
    "CoyoteGameConfigItem",
    "GamePlayerInfo",
    "SanmaRanks",
    "SimaRanks",
    "load_game_config",
    "parse_game_config",
    # Errors
    "CoyoteError",
    "ConfigNotFoundError",
    "ConfigFileError",
    "RemoteApiError",
    "RemoteLogicalFailure",
    "RemoteTransportFailure",
    "MissingResultRecordError",
    # Wire types
    "SetStrengthConfigRequest",
    "SetStrengthConfigResponse",
    "GameStrengthConfig",
    "GetStrengthConfigResponse",
    "PlayerResult",
]
__version__ = "1.0.0"
