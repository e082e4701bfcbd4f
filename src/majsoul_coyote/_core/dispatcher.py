# Area: Core
"""
majsoul_coyote._core.dispatcher — Game event dispatcher
=======================================================

Filters game events by their seat relationship to the tracked participant
and schedules the matching configured action.

    mingpai(seat, target_seat)  own discard called by another seat
    riichi(seat)                another seat declares riichi
    ron(seat, target_seat)      another seat wins off our discard
    zumo(seat)                  another seat wins by self draw
    liuju(ting_seats)           exhaustive draw, ready or not (no delay)
    zhongju(results)            match concluded, see OutcomeHandler

Every action except the exhaustive draw waits a settle delay first. The
action is looked up when it runs, so a live config swap applies to
actions already scheduled.
"""

from __future__ import annotations

import logging
from typing import Callable, Collection, List, Optional

from ..config import CoyoteAction, CoyoteGameConfigItem, GamePlayerInfo
from ..types import PlayerResult
from .action_executor import ActionExecutor
from .scheduler import Scheduler

logger = logging.getLogger("majsoul_coyote.dispatcher")

SETTLE_DELAY = 1.0


class EventDispatcher:
    """Routes game events for one tracked participant."""

    def __init__(
        self,
        player: GamePlayerInfo,
        get_config: Callable[[], CoyoteGameConfigItem],
        executor: ActionExecutor,
        scheduler: Scheduler,
        on_conclusion: Callable[[List[PlayerResult]], None],
        settle_delay: float = SETTLE_DELAY,
    ):
        self.player = player
        self.get_config = get_config
        self.executor = executor
        self.scheduler = scheduler
        self.on_conclusion = on_conclusion
        self.settle_delay = settle_delay

    def bind(self, events) -> None:
        """Subscribe every handler through a subscription handle."""
        (events
            .on("mingpai", self.on_mingpai)
            .on("riichi", self.on_riichi)
            .on("ron", self.on_ron)
            .on("zumo", self.on_zumo)
            .on("liuju", self.on_liuju)
            .on("zhongju", self.on_zhongju))

    @property
    def seat(self) -> int:
        return self.player.seat

    def on_mingpai(self, seat: int, target_seat: int) -> None:
        if seat != self.seat and target_seat == self.seat:
            self._schedule("mingpai")

    def on_riichi(self, seat: int) -> None:
        if seat != self.seat:
            self._schedule("biejializhi")

    def on_ron(self, seat: int, target_seat: int) -> None:
        if seat != self.seat and target_seat == self.seat:
            self._schedule("dianpao")

    def on_zumo(self, seat: int) -> None:
        if seat != self.seat:
            self._schedule("biejiazimo")

    def on_liuju(self, ting_seats: Collection[int]) -> None:
        key = "tingpailiuju" if self.seat in ting_seats else "liuju"
        self.scheduler.spawn(self._run, key)

    def on_zhongju(self, results: List[PlayerResult]) -> None:
        self.on_conclusion(results)

    def _schedule(self, key: str) -> None:
        logger.debug(f"[{self.player.label}] {key} in {self.settle_delay}s")
        self.scheduler.call_later(self.settle_delay, self._run, key)

    async def _run(self, key: str) -> None:
        action: Optional[CoyoteAction] = getattr(self.get_config(), key)
        await self.executor.execute(action)
