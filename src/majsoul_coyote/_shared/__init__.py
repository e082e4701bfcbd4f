# Area: Shared
"""
Shared utilities used by the controller core.

This package contains:
- Logging configuration
- Remote strength API client
"""

from .coyote_api import CoyoteApiClient
from .logging_config import setup_logging

__all__ = [
    "CoyoteApiClient",
    "setup_logging",
]
