# Area: Core
"""
majsoul_coyote._core.outcome_handler — Match conclusion handling
================================================================

Some time after the match concludes, picks the tracked participant's
final action (shot down, or placement in a 3/4-player table), runs it
and retires the controller. The controller is single use per match.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from ..config import CoyoteAction, CoyoteGameConfigItem, GamePlayerInfo
from ..errors import MissingResultRecordError
from ..types import PlayerResult
from .action_executor import ActionExecutor
from .fire_overlay import FireOverlay
from .scheduler import Scheduler

logger = logging.getLogger("majsoul_coyote.outcome")

OUTCOME_DELAY = 10.0
# Point totals below this count as shot down
SHOT_DOWN_THRESHOLD = 1


def find_result(results: List[PlayerResult], seat: int) -> Optional[PlayerResult]:
    for item in results:
        if item.get("seat") == seat:
            return item
    return None


def select_outcome_action(
    config: CoyoteGameConfigItem, results: List[PlayerResult], result: PlayerResult
) -> Optional[CoyoteAction]:
    """Shot down wins over placement when configured."""
    if result.get("point", 0) < SHOT_DOWN_THRESHOLD and config.jifei is not None:
        return config.jifei
    return config.rank_action(len(results), result.get("rank", 0))


class OutcomeHandler:
    """Handles zhongju for one tracked participant."""

    def __init__(
        self,
        player: GamePlayerInfo,
        get_config: Callable[[], CoyoteGameConfigItem],
        executor: ActionExecutor,
        overlay: FireOverlay,
        scheduler: Scheduler,
        teardown: Callable[[], None],
        delay: float = OUTCOME_DELAY,
        release: Optional[Callable[[], None]] = None,
    ):
        self.player = player
        self.get_config = get_config
        self.executor = executor
        self.overlay = overlay
        self.scheduler = scheduler
        self.teardown = teardown
        self.delay = delay
        self.release = release

    def schedule(self, results: List[PlayerResult]) -> None:
        self.scheduler.call_later(self.delay, self.handle, list(results))

    async def handle(self, results: List[PlayerResult]) -> None:
        """
        Dispatch the final action and tear down.

        Once the action has been dispatched no further game event is acted
        on. An overlay still active is left to run out before the teardown
        completes.
        """
        try:
            await self._dispatch(results)
            self._stop_reacting()
            if self.overlay.is_active:
                logger.info(f"[{self.player.label}] Waiting for fire to run out")
                await self.overlay.wait_idle()
        finally:
            self.teardown()

    async def _dispatch(self, results: List[PlayerResult]) -> None:
        result = find_result(results, self.player.seat)
        if result is None:
            error = MissingResultRecordError(
                self.player.seat, [r.get("seat") for r in results]
            )
            logger.error(f"[{self.player.label}] {error}")
            return

        logger.info(
            f"[{self.player.label}] Final rank {result.get('rank')} "
            f"with {result.get('point')} points"
        )
        action = select_outcome_action(self.get_config(), results, result)
        await self.executor.execute(action)

    def _stop_reacting(self) -> None:
        if self.release is not None:
            self.release()
        self.scheduler.close()
