"""
majsoul_coyote.types — TypedDict schemas for the remote API and game events
===========================================================================

Documents the exact JSON structures exchanged with the remote strength
API and the payloads carried by game events.

All types are exported from the main package:

    from majsoul_coyote import SetStrengthConfigRequest, PlayerResult, ...
"""

from typing import List, TypedDict


# ============================================
# Remote strength API
# ============================================

class ValueChange(TypedDict, total=False):
    """One of ``add``, ``sub`` or ``set`` on a numeric channel."""
    add: float
    sub: float
    set: float


class ValueSet(TypedDict, total=False):
    set: float


class SetStrengthConfigRequest(TypedDict, total=False):
    """Body of ``POST {host}/api/game/{clientId}/strength_config``.

    Fields
    ------
    strength : ValueChange
        Change to the base strength channel.
    randomStrength : ValueChange
        Change to the random strength range.
    minInterval, maxInterval : ValueSet
        Pulse interval bounds.
    """
    strength: ValueChange
    randomStrength: ValueChange
    minInterval: ValueSet
    maxInterval: ValueSet


class SetStrengthConfigResponse(TypedDict):
    status: int
    code: str
    message: str
    successClientIds: List[str]


class GameStrengthConfig(TypedDict, total=False):
    """Device-side strength state as reported by the API."""
    strength: float
    randomStrength: float
    minInterval: float
    maxInterval: float
    bChannelMultiplier: float
    pulseId: str


class GetStrengthConfigResponse(TypedDict, total=False):
    status: int
    code: str
    message: str
    strengthConfig: GameStrengthConfig


# ============================================
# Game events
# ============================================

class PlayerResult(TypedDict):
    """One entry of the ``zhongju`` result set."""
    seat: int
    rank: int       # 1-indexed placement
    point: int      # final point total
