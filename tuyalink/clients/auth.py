"""
Access token acquisition for the Tuya cloud API.

Tokens come from the client-credentials grant (``grant_type=1``). The token
request is signed like any other call, except that the signing base omits
the access token segment. The token is fetched once per client and kept for
its lifetime; expiry is not tracked.
"""
from __future__ import annotations

import json
import logging
import threading
from typing import TYPE_CHECKING, Optional

from tuyalink.core.errors import AuthError, TuyaError
from tuyalink.resources import api_path

if TYPE_CHECKING:
    from tuyalink.clients.dispatcher import RequestDispatcher


class TokenManager:
    """
    Owns the access token of one client instance.

    Attributes:
        dispatcher: Used to send the unsigned-token request.
    """

    def __init__(self, dispatcher: "RequestDispatcher", logger: Optional[logging.Logger] = None) -> None:
        self.dispatcher = dispatcher
        self.logger = logger or logging.getLogger(__name__)
        self._token: Optional[str] = None
        self._lock = threading.Lock()

    def current_token(self) -> Optional[str]:
        return self._token

    def ensure_token(self) -> str:
        """Return the cached token, fetching it first if none is held."""
        if self._token:
            return self._token
        with self._lock:
            if not self._token:
                self._fetch_locked()
            return self._token

    def fetch_token(self) -> str:
        """Request a new token from the endpoint and replace the cached one."""
        with self._lock:
            return self._fetch_locked()

    def _fetch_locked(self) -> str:
        path = api_path("TOKEN")
        try:
            envelope = self.dispatcher.execute("GET", path, access_token=None).unwrap()
        except TuyaError as exc:
            raise exc.with_context("token request failed") from exc

        result = envelope.get("result") if isinstance(envelope, dict) else None
        token = result.get("access_token") if isinstance(result, dict) else None
        if not token:
            raise AuthError(f"token response has no access_token: {json.dumps(envelope)}", path=path)

        self._token = token
        self.logger.info("token_acquired", extra={"details": {"expire_time": result.get("expire_time")}})
        return token
