# Area: Shared
"""
majsoul_coyote._shared.coyote_api — Remote strength API client
==============================================================

Thin client for the game endpoints of the remote Coyote control service:

    POST {host}/api/game/{clientId}/strength_config
    GET  {host}/api/game/{clientId}/strength_config

Requests are made with ``urllib.request`` on a worker thread via
``asyncio.to_thread``; callers on the event loop only ever await.
Neither coroutine raises: logical failures (``status != 1``) and transport
failures are logged and reported as ``None``. Requests are never retried.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, Optional
from urllib import error as urllib_error
from urllib import request as urllib_request

from ..errors import RemoteApiError, RemoteLogicalFailure, RemoteTransportFailure
from ..types import GameStrengthConfig, SetStrengthConfigRequest

logger = logging.getLogger("majsoul_coyote.api")

DEFAULT_TIMEOUT = 5.0


class CoyoteApiClient:
    """
    Client bound to one remote host and target client id.

    Attributes:
        host: Base URL of the control service, e.g. ``http://127.0.0.1:8920``
        client_id: The device client id whose strength config is driven
        timeout: Per-request timeout in seconds
    """

    def __init__(self, host: str, client_id: str, timeout: float = DEFAULT_TIMEOUT):
        self.host = host.rstrip("/")
        self.client_id = client_id
        self.timeout = timeout

    def build_url(self) -> str:
        return f"{self.host}/api/game/{self.client_id}/strength_config"

    async def set_strength_config(
        self, request: SetStrengthConfigRequest
    ) -> Optional[str]:
        """
        Apply a strength change.

        Returns:
            The first acknowledged client id, or None on any failure
        """
        try:
            res = await asyncio.to_thread(self._send, "POST", dict(request))
            if res.get("status") != 1:
                raise RemoteLogicalFailure(
                    "POST", self.build_url(), str(res.get("message", "")),
                    request_payload=dict(request),
                )
        except RemoteApiError as e:
            self._log_failure("Strength update failed", e)
            return None

        success_ids = res.get("successClientIds") or []
        return success_ids[0] if success_ids else None

    async def get_strength_config(self) -> Optional[GameStrengthConfig]:
        """
        Read the current strength config.

        Returns:
            The ``strengthConfig`` block, or None on any failure
        """
        try:
            res = await asyncio.to_thread(self._send, "GET", None)
            if res.get("status") != 1:
                raise RemoteLogicalFailure(
                    "GET", self.build_url(), str(res.get("message", "")),
                )
            strength_config = res.get("strengthConfig")
            if not isinstance(strength_config, dict):
                raise RemoteLogicalFailure(
                    "GET", self.build_url(), "response carries no strengthConfig",
                )
        except RemoteApiError as e:
            self._log_failure("Reading strength config failed", e)
            return None

        return strength_config

    def _send(self, method: str, payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Blocking HTTP round trip. Raises RemoteTransportFailure."""
        url = self.build_url()
        data = None
        headers = {"Accept": "application/json"}
        if payload is not None:
            data = json.dumps(payload).encode("utf-8")
            headers["Content-Type"] = "application/json"

        req = urllib_request.Request(url, data=data, headers=headers, method=method)
        try:
            with urllib_request.urlopen(req, timeout=self.timeout) as response:  # noqa: S310
                body = response.read().decode("utf-8")
        except urllib_error.HTTPError as e:
            raise RemoteTransportFailure(
                method, url, f"HTTP {e.code} {e.reason}",
                request_payload=payload,
                response_body=_read_error_body(e),
            ) from e
        except (urllib_error.URLError, TimeoutError, OSError) as e:
            reason = getattr(e, "reason", e)
            raise RemoteTransportFailure(
                method, url, str(reason), request_payload=payload,
            ) from e

        try:
            parsed = json.loads(body)
        except json.JSONDecodeError as e:
            raise RemoteTransportFailure(
                method, url, f"invalid JSON response: {e}",
                request_payload=payload, response_body=body[:500],
            ) from e
        if not isinstance(parsed, dict):
            raise RemoteTransportFailure(
                method, url, "response is not a JSON object",
                request_payload=payload, response_body=body[:500],
            )
        return parsed

    def _log_failure(self, summary: str, error: RemoteApiError) -> None:
        logger.error(
            f"{summary}: {error.detail}",
            extra={"client_id": self.client_id},
        )
        if error.response_body:
            logger.error(f"Response: {error.response_body}")
        logger.debug(error.format_error_log())


def _read_error_body(error: urllib_error.HTTPError) -> Optional[str]:
    try:
        return error.read().decode("utf-8", errors="replace")[:500]
    except (OSError, AttributeError):
        return None
