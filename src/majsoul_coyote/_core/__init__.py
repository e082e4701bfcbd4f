# Area: Core
"""
Controller core: event routing, action execution and the fire overlay.
"""

from .action_executor import ActionExecutor
from .config_resolver import resolve_config
from .dispatcher import SETTLE_DELAY, EventDispatcher
from .events import EventSource, EventStore, GameEventSource
from .fire_overlay import FireOverlay, OverlayState
from .outcome_handler import OUTCOME_DELAY, SHOT_DOWN_THRESHOLD, OutcomeHandler
from .scheduler import Scheduler

__all__ = [
    "ActionExecutor",
    "resolve_config",
    "SETTLE_DELAY",
    "EventDispatcher",
    "EventSource",
    "EventStore",
    "GameEventSource",
    "FireOverlay",
    "OverlayState",
    "OUTCOME_DELAY",
    "SHOT_DOWN_THRESHOLD",
    "OutcomeHandler",
    "Scheduler",
]
