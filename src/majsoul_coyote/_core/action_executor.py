# Area: Core
"""
majsoul_coyote._core.action_executor — Performs configured actions
==================================================================

Turns one ``CoyoteAction`` into a remote strength change, or hands it to
the fire overlay. Only the first populated field counts, in the order
addBase, subBase, addRandom, subRandom, fire.
"""

from __future__ import annotations

import logging
from typing import Optional

from .._shared.coyote_api import CoyoteApiClient
from ..config import CoyoteAction
from .fire_overlay import FireOverlay

logger = logging.getLogger("majsoul_coyote.action")


class ActionExecutor:
    """Executes actions for one tracked participant."""

    def __init__(self, api: CoyoteApiClient, overlay: FireOverlay, label: str = ""):
        self.api = api
        self.overlay = overlay
        self.label = label

    async def execute(self, action: Optional[CoyoteAction]) -> None:
        """Perform action. No-op when no action is configured."""
        if action is None:
            return

        if action.add_base is not None:
            logger.info(f"[{self.label}] Base strength +{action.add_base}")
            await self.api.set_strength_config({"strength": {"add": action.add_base}})
        elif action.sub_base is not None:
            logger.info(f"[{self.label}] Base strength -{action.sub_base}")
            await self.api.set_strength_config({"strength": {"sub": action.sub_base}})
        elif action.add_random is not None:
            logger.info(f"[{self.label}] Random strength +{action.add_random}")
            await self.api.set_strength_config({"randomStrength": {"add": action.add_random}})
        elif action.sub_random is not None:
            logger.info(f"[{self.label}] Random strength -{action.sub_random}")
            await self.api.set_strength_config({"randomStrength": {"sub": action.sub_random}})
        elif action.fire is not None:
            await self.overlay.fire(action.fire, action.fire_time)
        else:
            logger.debug(f"[{self.label}] Action has no populated field")
