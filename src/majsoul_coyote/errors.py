# Area: Shared
"""
majsoul_coyote.errors — Custom exception classes
================================================

Defines the exception hierarchy for the controller.
Each exception stores full context for structured logging.
"""

from __future__ import annotations
from typing import Any, Dict, Optional
import json


class CoyoteError(Exception):
    """Base exception for all majsoul_coyote errors."""
    pass


class ConfigNotFoundError(CoyoteError):
    """Raised when no configuration record matches the tracked participant."""

    def __init__(self, nickname: Optional[str], account_id: Optional[int]):
        self.nickname = nickname
        self.account_id = account_id
        super().__init__(
            f"No configuration found for {nickname} (account_id={account_id})"
        )


class ConfigFileError(CoyoteError):
    """Raised when the game configuration file cannot be loaded or validated."""

    def __init__(self, path: str, detail: str):
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid game config '{path}': {detail}")


class RemoteApiError(CoyoteError):
    """Base class for failed calls to the remote strength API."""

    error_type = "REMOTE_API_FAILURE"

    def __init__(
        self,
        method: str,
        url: str,
        detail: str,
        request_payload: Optional[Dict[str, Any]] = None,
        response_body: Optional[str] = None,
    ):
        self.method = method
        self.url = url
        self.detail = detail
        self.request_payload = request_payload
        self.response_body = response_body
        super().__init__(f"{method} {url} failed: {detail}")

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type=self.error_type,
            target=f"{self.method} {self.url}",
            detail=self.detail,
            request_payload=self.request_payload,
            response_body=self.response_body,
        )


class RemoteLogicalFailure(RemoteApiError):
    """The API answered, but with ``status != 1``."""

    error_type = "REMOTE_LOGICAL_FAILURE"


class RemoteTransportFailure(RemoteApiError):
    """The request never produced a usable response (network, HTTP, JSON)."""

    error_type = "REMOTE_TRANSPORT_FAILURE"


class MissingResultRecordError(CoyoteError):
    """The tracked seat is absent from a match conclusion result set."""

    def __init__(self, seat: int, seats_present: list):
        self.seat = seat
        self.seats_present = seats_present
        super().__init__(
            f"No result record for seat {seat} (seats present: {seats_present})"
        )


def _format_error_block(
    error_type: str,
    target: str,
    detail: str,
    request_payload: Optional[Dict[str, Any]],
    response_body: Optional[str],
) -> str:
    """Format a structured error block for the log."""
    from datetime import datetime, timezone

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    lines = [
        "",
        "=" * 64,
        " REMOTE API ERROR",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Error Type:   {error_type}",
        f" Target:       {target}",
        f" Detail:       {detail}",
    ]

    if request_payload is not None:
        lines.append("")
        lines.append(" ── REQUEST PAYLOAD " + "─" * 44)
        lines.append(_indent_json(request_payload))

    if response_body:
        lines.append("")
        lines.append(" ── RESPONSE BODY " + "─" * 46)
        lines.append(" " + response_body)

    lines.append("")
    lines.append("=" * 64)
    lines.append("")

    return "\n".join(lines)


def _indent_json(data: Dict[str, Any], indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str)
        return "\n".join(" " + line for line in formatted.split("\n"))
    except (TypeError, ValueError):
        return f" {repr(data)}"
