# Area: Config
"""
majsoul_coyote.config — Game configuration models
=================================================

Pydantic models for the per-match configuration table and the tracked
participant identity. The JSON file uses the camelCase keys of the
original controller config (``targetClientId``, ``isMe``, ``addBase``...);
snake_case names are accepted as well.

Example record::

    {
        "nickname": "Alice",
        "host": "http://127.0.0.1:8920",
        "targetClientId": "3ab0773d-...",
        "dianpao": {"fire": 20, "time": 10},
        "biejializhi": {"addBase": 2},
        "sima": {"no4": {"addRandom": 5}}
    }
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigFileError

DEFAULT_FIRE_TIME = 5


class _ConfigModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


class CoyoteAction(_ConfigModel):
    """
    One configured reaction.

    Only the first populated field in the order addBase, subBase,
    addRandom, subRandom, fire is acted on.
    """

    add_base: Optional[float] = Field(default=None, alias="addBase")
    sub_base: Optional[float] = Field(default=None, alias="subBase")
    add_random: Optional[float] = Field(default=None, alias="addRandom")
    sub_random: Optional[float] = Field(default=None, alias="subRandom")
    fire: Optional[float] = None
    time: Optional[float] = None

    @property
    def fire_time(self) -> float:
        """Overlay duration in seconds."""
        return self.time if self.time is not None else DEFAULT_FIRE_TIME


class SanmaRanks(_ConfigModel):
    """Placement actions for three-player matches."""

    no1: Optional[CoyoteAction] = None
    no2: Optional[CoyoteAction] = None
    no3: Optional[CoyoteAction] = None


class SimaRanks(_ConfigModel):
    """Placement actions for four-player matches."""

    no1: Optional[CoyoteAction] = None
    no2: Optional[CoyoteAction] = None
    no3: Optional[CoyoteAction] = None
    no4: Optional[CoyoteAction] = None


class CoyoteGameConfigItem(_ConfigModel):
    """Configuration record for one participant."""

    account_id: Optional[int] = None
    nickname: Optional[str] = None
    is_me: bool = Field(default=False, alias="isMe")
    host: str
    target_client_id: str = Field(alias="targetClientId")

    mingpai: Optional[CoyoteAction] = None
    dianpao: Optional[CoyoteAction] = None
    biejiazimo: Optional[CoyoteAction] = None
    biejializhi: Optional[CoyoteAction] = None
    liuju: Optional[CoyoteAction] = None
    tingpailiuju: Optional[CoyoteAction] = None
    sanma: SanmaRanks = Field(default_factory=SanmaRanks)
    sima: SimaRanks = Field(default_factory=SimaRanks)
    jifei: Optional[CoyoteAction] = None

    def rank_action(self, player_count: int, rank: int) -> Optional[CoyoteAction]:
        """Return the placement action for a 3- or 4-player result, if any."""
        if player_count == 3:
            table = self.sanma
        elif player_count == 4:
            table = self.sima
        else:
            return None
        return getattr(table, f"no{rank}", None)


class GamePlayerInfo(_ConfigModel):
    """Identity and seat of the tracked participant for one match."""

    account_id: Optional[int] = None
    nickname: Optional[str] = None
    seat: int
    is_me: bool = Field(default=False, alias="isMe")

    @property
    def label(self) -> str:
        return self.nickname or f"#{self.account_id}"


CoyoteGameConfig = List[CoyoteGameConfigItem]


def parse_game_config(data: Union[list, dict], source: str = "<memory>") -> CoyoteGameConfig:
    """
    Validate a raw configuration table.

    Accepts either a list of records or ``{"players": [...]}``.

    Raises:
        ConfigFileError: If the structure or any record is invalid
    """
    if isinstance(data, dict):
        data = data.get("players")
    if not isinstance(data, list):
        raise ConfigFileError(source, "expected a list of player records")
    try:
        return [CoyoteGameConfigItem.model_validate(item) for item in data]
    except ValidationError as e:
        raise ConfigFileError(source, str(e)) from e


def load_game_config(path: Union[str, Path]) -> CoyoteGameConfig:
    """Load and validate the game configuration table from a JSON file."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigFileError(str(path), str(e)) from e
    return parse_game_config(data, source=str(path))
