# Area: Core
"""
majsoul_coyote._core.fire_overlay — Timed strength overlay ("fire")
===================================================================

A fire action raises base strength for a bounded time and then takes the
raise back. Other clients may change the same strength concurrently, so
the raise attributable to this overlay is measured (read, apply, read,
diff) rather than assumed from the request.

State transitions:
    IDLE   -> ACTIVE  (on fire)
    ACTIVE -> ACTIVE  (on fire: expiry extended, strength max'ed)
    ACTIVE -> IDLE    (on expiry tick: measured delta subtracted once)
"""

from __future__ import annotations

import asyncio
import logging
import time
from enum import Enum
from typing import Optional

from .._shared.coyote_api import CoyoteApiClient
from .scheduler import current_task

logger = logging.getLogger("majsoul_coyote.fire")

TICK_INTERVAL = 0.1


class OverlayState(Enum):
    IDLE = "IDLE"
    ACTIVE = "ACTIVE"


class FireOverlay:
    """
    Owns one controller's fire overlay.

    Attributes:
        delta_strength: Last measured strength increase owned by the overlay
        end_time: Monotonic timestamp at which the overlay expires (-1 if idle)
    """

    def __init__(
        self,
        api: CoyoteApiClient,
        label: str = "",
        tick_interval: float = TICK_INTERVAL,
    ) -> None:
        self.api = api
        self.label = label
        self.tick_interval = tick_interval
        self.state = OverlayState.IDLE
        self.delta_strength: float = 0
        self.end_time: float = -1
        self._task: Optional[asyncio.Task] = None
        self._lock = asyncio.Lock()
        self._idle = asyncio.Event()
        self._idle.set()
        self._closed = False

    @property
    def is_active(self) -> bool:
        return self.state is OverlayState.ACTIVE

    @property
    def polling(self) -> bool:
        return self._task is not None and not self._task.done()

    async def fire(self, fire_strength: float, fire_time: float) -> None:
        """
        Start or extend the overlay.

        Args:
            fire_strength: Requested strength increase
            fire_time: Duration in seconds added to the overlay
        """
        if self._closed:
            logger.debug(f"[{self.label}] overlay closed, ignoring fire")
            return

        if self.polling:
            self.end_time += fire_time
            logger.info(f"[{self.label}] Fire extended by {fire_time}s")
        else:
            self.end_time = time.monotonic() + fire_time
            self.state = OverlayState.ACTIVE
            self._idle.clear()
            self._task = asyncio.get_running_loop().create_task(self._poll())

        # Overlapping triggers reconcile one after another. The lock is held
        # by the reconciliation task, which outlives a cancelled caller.
        await self._lock.acquire()
        reconcile = asyncio.get_running_loop().create_task(
            self._reconcile_locked(fire_strength)
        )
        _track(reconcile)
        await asyncio.shield(reconcile)

    async def _reconcile_locked(self, fire_strength: float) -> None:
        try:
            await self._reconcile(fire_strength)
        finally:
            self._lock.release()

    async def _reconcile(self, fire_strength: float) -> None:
        if self._closed:
            await self._settle_closed()
            return

        before = await self.api.get_strength_config()
        if before is None:
            logger.error(f"[{self.label}] Fire abandoned: cannot read strength config")
            self.delta_strength = 0
            return
        if self._closed:
            await self._settle_closed()
            return

        add_strength = max(self.delta_strength, fire_strength)
        if add_strength <= 0:
            self.delta_strength = 0
            return
        self.delta_strength = add_strength

        logger.info(f"[{self.label}] Fire strength: {add_strength}")
        await self.api.set_strength_config({"strength": {"add": add_strength}})

        after = await self.api.get_strength_config()
        if after is None:
            logger.error(f"[{self.label}] Cannot re-read strength config, assuming +{add_strength}")
        else:
            self.delta_strength = after.get("strength", 0) - before.get("strength", 0)
            logger.debug(
                f"[{self.label}] Measured fire delta {self.delta_strength} "
                f"(requested {add_strength})"
            )

        if self._closed:
            await self._settle_closed()

    async def _settle_closed(self) -> None:
        # Closed mid-reconciliation: no tick will ever expire this delta
        delta, self.delta_strength = self.delta_strength, 0
        if delta > 0:
            logger.warning(f"[{self.label}] Reverting fire {delta} after close")
            await self.api.set_strength_config({"strength": {"sub": delta}})

    async def _poll(self) -> None:
        while True:
            await asyncio.sleep(self.tick_interval)
            if await self.check_expired():
                return

    async def check_expired(self) -> bool:
        """
        One polling tick.

        Returns:
            True if the overlay expired on this tick
        """
        if not self.is_active:
            return False
        if time.monotonic() < self.end_time:
            return False

        async with self._lock:
            if not self.is_active or time.monotonic() < self.end_time:
                return False
            delta = self._go_idle()
            logger.info(f"[{self.label}] Fire ended")
            if delta > 0:
                await self.api.set_strength_config({"strength": {"sub": delta}})
        return True

    def _go_idle(self) -> float:
        delta = self.delta_strength
        self.delta_strength = 0
        self.end_time = -1
        self.state = OverlayState.IDLE
        task, self._task = self._task, None
        if task is not None and not task.done() and task is not current_task():
            task.cancel()
        self._idle.set()
        return delta

    async def wait_idle(self) -> None:
        """Wait until the current overlay (if any) has expired."""
        await self._idle.wait()

    def close(self) -> Optional[asyncio.Task]:
        """
        Stop polling for good. Idempotent.

        An overlay still active is expired immediately: its measured delta
        is subtracted by one last request that is left in flight.

        Returns:
            The reversal task, if one was issued
        """
        if self._closed:
            return None
        self._closed = True

        if self._lock.locked():
            # The reconciliation in flight reverts whatever it ends up owning
            delta = self.delta_strength
            self._go_idle()
            self.delta_strength = delta
            return None

        delta = self._go_idle()
        if delta <= 0:
            return None

        logger.warning(f"[{self.label}] Closing with active fire, reverting {delta}")
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.error(f"[{self.label}] No event loop, fire delta {delta} left applied")
            return None
        reversal = loop.create_task(
            self.api.set_strength_config({"strength": {"sub": delta}})
        )
        return _track(reversal)


# Reconciliations and close() reversals, referenced until they finish
_in_flight: set = set()


def _track(task: asyncio.Task) -> asyncio.Task:
    _in_flight.add(task)
    task.add_done_callback(_in_flight.discard)
    return task


async def drain_reversals() -> None:
    """Wait for reconciliations and reversals still in flight."""
    if _in_flight:
        await asyncio.gather(*list(_in_flight), return_exceptions=True)
