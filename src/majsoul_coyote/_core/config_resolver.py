# Area: Core
"""
majsoul_coyote._core.config_resolver — Per-participant config lookup
====================================================================

Selects the configuration record governing one participant. A record
matches when its account id equals the participant's, when its nickname
equals the participant's, or when both are flagged ``is_me``. The first
matching record in table order wins.
"""

from __future__ import annotations

from typing import Iterable, Optional

from ..config import CoyoteGameConfigItem, GamePlayerInfo


def matches(item: CoyoteGameConfigItem, player: GamePlayerInfo) -> bool:
    if item.account_id is not None and item.account_id == player.account_id:
        return True
    if item.nickname is not None and item.nickname == player.nickname:
        return True
    return item.is_me and player.is_me


def resolve_config(
    config: Iterable[CoyoteGameConfigItem], player: GamePlayerInfo
) -> Optional[CoyoteGameConfigItem]:
    """Return the governing record, or None if nothing matches."""
    for item in config:
        if matches(item, player):
            return item
    return None
