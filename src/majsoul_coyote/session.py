# Area: Core
"""
majsoul_coyote.session — Controllers for one match
==================================================

Creates a ``CoyoteController`` for every participant of a match that has
a configuration record and keeps track of the ones still alive.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List

from ._core.events import EventSource
from .config import CoyoteGameConfig, GamePlayerInfo
from .controller import CoyoteController
from .errors import ConfigNotFoundError

logger = logging.getLogger("majsoul_coyote.session")


class MatchSession:
    """
    Usage:
        session = MatchSession(source, config_table)
        session.start(players)
        ...
        session.close()
    """

    def __init__(
        self,
        game: EventSource,
        config: CoyoteGameConfig,
        **controller_options: Any,
    ):
        self.game = game
        self.config = config
        self.controller_options: Dict[str, Any] = controller_options
        self.controllers: List[CoyoteController] = []

    def start(self, players: Iterable[GamePlayerInfo]) -> List[CoyoteController]:
        """
        Create controllers for the configured participants.

        Returns:
            The controllers created by this call
        """
        created = []
        for player in players:
            try:
                controller = CoyoteController(
                    self.game, player, self.config, **self.controller_options
                )
            except ConfigNotFoundError:
                logger.debug(f"Skipping unconfigured player {player.label}")
                continue
            created.append(controller)
        self.controllers.extend(created)
        logger.info(f"Match started with {len(created)} controlled player(s)")
        return created

    def set_config(self, config: CoyoteGameConfig) -> None:
        """Swap the config table on every live controller."""
        self.config = config
        for controller in self.active_controllers:
            controller.set_config(config)
        self._prune()

    @property
    def active_controllers(self) -> List[CoyoteController]:
        return [c for c in self.controllers if not c.destroyed]

    @property
    def finished(self) -> bool:
        return not self.active_controllers

    def _prune(self) -> None:
        self.controllers = self.active_controllers

    def close(self) -> None:
        for controller in self.controllers:
            controller.destroy()
        self.controllers = []
