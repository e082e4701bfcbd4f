# Area: Core
"""
majsoul_coyote.controller — Per-participant Coyote controller
=============================================================

One ``CoyoteController`` exists per (match, tracked participant). It
subscribes to the match's game events, turns them into strength changes
on the participant's remote device and retires itself once the match
result has been handled.

Usage:
    source = GameEventSource()
    controller = CoyoteController(source, player, config_table)
    source.emit("riichi", 2)
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from ._core import (
    OUTCOME_DELAY,
    SETTLE_DELAY,
    ActionExecutor,
    EventDispatcher,
    EventSource,
    EventStore,
    FireOverlay,
    OutcomeHandler,
    Scheduler,
    resolve_config,
)
from ._core.fire_overlay import TICK_INTERVAL
from ._shared.coyote_api import DEFAULT_TIMEOUT, CoyoteApiClient
from .config import CoyoteGameConfig, CoyoteGameConfigItem, GamePlayerInfo
from .errors import ConfigNotFoundError

logger = logging.getLogger("majsoul_coyote.controller")

ApiFactory = Callable[[str, str, float], CoyoteApiClient]


class CoyoteController:
    """
    Reacts to one participant's game events.

    Raises:
        ConfigNotFoundError: If no record in config matches the player.
            No event subscription exists in that case.
    """

    def __init__(
        self,
        game: EventSource,
        player: GamePlayerInfo,
        config: CoyoteGameConfig,
        api_factory: ApiFactory = CoyoteApiClient,
        settle_delay: float = SETTLE_DELAY,
        outcome_delay: float = OUTCOME_DELAY,
        tick_interval: float = TICK_INTERVAL,
        http_timeout: float = DEFAULT_TIMEOUT,
    ):
        self.game = game
        self.player = player
        self.config: Optional[CoyoteGameConfigItem] = None
        self._api_factory = api_factory
        self._http_timeout = http_timeout
        self._destroyed = False

        self._event_store = EventStore()
        self._scheduler = Scheduler(name=player.label)
        self.api: Optional[CoyoteApiClient] = None
        self.overlay = FireOverlay(None, label=player.label, tick_interval=tick_interval)
        self.executor = ActionExecutor(None, self.overlay, label=player.label)

        if not self.set_config(config):
            raise ConfigNotFoundError(player.nickname, player.account_id)

        self.outcome = OutcomeHandler(
            player, self._current_config, self.executor, self.overlay,
            self._scheduler, self.destroy, delay=outcome_delay,
            release=self._event_store.remove_all_listeners,
        )
        self.dispatcher = EventDispatcher(
            player, self._current_config, self.executor, self._scheduler,
            on_conclusion=self.outcome.schedule, settle_delay=settle_delay,
        )
        self.dispatcher.bind(self._event_store.wrap(game))
        logger.info(
            f"[{player.label}] Controller ready (seat {player.seat}, "
            f"client {self.config.target_client_id})",
            extra={"player": player.label, "client_id": self.config.target_client_id},
        )

    def set_config(self, config: CoyoteGameConfig) -> bool:
        """
        Resolve (or re-resolve) this participant's config record.

        Returns:
            True on success. On failure the controller tears itself down.
        """
        current = resolve_config(config, self.player)
        if current is None:
            logger.error(
                f"No configuration found for {self.player.label}",
                extra={"player": self.player.label},
            )
            self.destroy()
            return False

        self.config = current
        if (self.api is None
                or self.api.host != current.host.rstrip("/")
                or self.api.client_id != current.target_client_id):
            self.api = self._api_factory(
                current.host, current.target_client_id, self._http_timeout
            )
            self.executor.api = self.api
            self.overlay.api = self.api
        return True

    def _current_config(self) -> CoyoteGameConfigItem:
        return self.config

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def subscription_count(self) -> int:
        return self._event_store.count

    @property
    def pending_timers(self) -> int:
        return self._scheduler.pending + (1 if self.overlay.polling else 0)

    @property
    def fire_delta_strength(self) -> float:
        return self.overlay.delta_strength

    def destroy(self) -> None:
        """Release subscriptions, timers and the overlay. Idempotent."""
        if self._destroyed:
            return
        self._destroyed = True
        self._event_store.remove_all_listeners()
        self._scheduler.close()
        self.overlay.close()
        logger.info(
            f"[{self.player.label}] Controller destroyed",
            extra={"player": self.player.label},
        )
