# Area: Runner
"""
majsoul_coyote.runner — Replay runner
=====================================

Drives controllers from a recorded match: a JSON-lines file where each
line is one event with its offset in seconds from the start of the
replay::

    {"event": "start", "players": [{"nickname": "Alice", "seat": 0}, ...]}
    {"at": 12.5, "event": "riichi", "args": [2]}
    {"at": 40.0, "event": "ron", "args": [2, 0]}
    {"at": 41.0, "event": "zhongju", "args": [[{"seat": 0, "rank": 4, "point": -800}, ...]]}

Players flagged ``isMe`` (or matching ``account_id``/``nickname`` from
the settings) are treated as the local account.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

from ._core.events import GameEventSource
from ._core.fire_overlay import drain_reversals
from ._runner_config import START_EVENT, is_game_event, validate_settings
from ._shared import setup_logging
from .config import GamePlayerInfo, load_game_config
from .session import MatchSession

logger = logging.getLogger("majsoul_coyote")

ReplayEvent = Tuple[float, str, List[Any]]


def read_replay(path: Union[str, Path]) -> Tuple[List[Dict[str, Any]], List[ReplayEvent]]:
    """
    Parse a replay file.

    Returns:
        (players, events) where events are sorted by offset

    Raises:
        ValueError: On malformed lines or an unknown event name
    """
    players: List[Dict[str, Any]] = []
    events: List[ReplayEvent] = []
    with open(path, encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            try:
                entry = json.loads(line)
            except json.JSONDecodeError as e:
                raise ValueError(f"{path}:{line_no}: invalid JSON: {e}") from e
            if not isinstance(entry, dict):
                raise ValueError(f"{path}:{line_no}: expected a JSON object")

            name = entry.get("event", "")
            if name == START_EVENT:
                players = list(entry.get("players") or [])
                continue
            if not is_game_event(name):
                raise ValueError(f"{path}:{line_no}: unknown event '{name}'")
            events.append((float(entry.get("at", 0)), name, list(entry.get("args") or [])))

    events.sort(key=lambda e: e[0])
    return players, events


class ReplayRunner:
    """
    Replays one recorded match against the configured devices.

    Usage:
        runner = ReplayRunner(settings={"game_config": "coyote.json",
                                        "events": "match.jsonl"})
        runner.run()
    """

    def __init__(self, settings: Dict[str, Any], **controller_options: Any):
        self.settings = settings
        self.controller_options = controller_options
        self.controller_options.setdefault(
            "http_timeout", float(settings.get("http_timeout", 5.0))
        )

        setup_logging(
            log_file_path=settings.get("log_file", "majsoul_coyote.log"),
            level=settings.get("log_level", "INFO"),
        )

        validate_settings(settings)
        self.game_config = load_game_config(settings["game_config"])
        self.linger_seconds = float(settings.get("linger_seconds", 30.0))
        self.source = GameEventSource()

    def build_players(self, raw_players: List[Dict[str, Any]]) -> List[GamePlayerInfo]:
        players = []
        for raw in raw_players:
            player = GamePlayerInfo.model_validate(raw)
            if self._is_local_account(player):
                player = player.model_copy(update={"is_me": True})
            players.append(player)
        return players

    def _is_local_account(self, player: GamePlayerInfo) -> bool:
        account_id = self.settings.get("account_id")
        nickname = self.settings.get("nickname")
        if account_id is not None and player.account_id == account_id:
            return True
        return nickname is not None and player.nickname == nickname

    def run(self) -> None:
        """Replay the events file. Blocks until all controllers retire."""
        asyncio.run(self.replay(self.settings["events"]))

    async def replay(self, events_path: Union[str, Path]) -> MatchSession:
        raw_players, events = read_replay(events_path)
        session = MatchSession(self.source, self.game_config, **self.controller_options)
        self._log_startup(events_path, len(events))
        session.start(self.build_players(raw_players))
        if session.finished:
            logger.warning("No participant in the replay has a configuration")
            return session

        loop = asyncio.get_running_loop()
        started = loop.time()
        for at, name, args in events:
            wait = started + at - loop.time()
            if wait > 0:
                await asyncio.sleep(wait)
            logger.debug(f"── Event: {name} {args}")
            self.source.emit(name, *args)

        await self._linger(session)
        return session

    async def _linger(self, session: MatchSession) -> None:
        """Wait for controllers to retire, at most linger_seconds."""
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.linger_seconds
        while not session.finished and loop.time() < deadline:
            await asyncio.sleep(0.1)
        if not session.finished:
            logger.info("Linger time over, closing remaining controllers")
            session.close()
            await drain_reversals()
        logger.info("Replay finished.")

    def _log_startup(self, events_path, event_count: int) -> None:
        logger.info("=" * 60)
        logger.info("  Majsoul Coyote Replay — Starting")
        logger.info(f"  Config: {self.settings.get('game_config')}")
        logger.info(f"  Events: {events_path} ({event_count})")
        logger.info("=" * 60)
