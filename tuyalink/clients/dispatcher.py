"""
Signed request dispatch and response classification.

The provider wraps every answer in a JSON envelope and is not consistent
about how it reports failures: some endpoints send ``success: false``, others
only a non-zero ``code``. Both shapes are checked for every response before
the GET and POST success rules are applied.
"""
from __future__ import annotations

import json
import logging
import math
from typing import Any, Optional

from tuyalink.clients.auth import TokenManager
from tuyalink.core.errors import ApiError, ParseError, TuyaError
from tuyalink.core.logging import redact
from tuyalink.crypto.signature import sign_request
from tuyalink.domain.credentials import Credentials
from tuyalink.domain.results import ApiResult
from tuyalink.resources import api_host
from tuyalink.transports.base import Transport

_SUCCESS_CODE = "SUCCESS"


def _to_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"))


def coerce_code(value: Any) -> int:
    """Return ``value`` as an int when it is a finite number, else 0."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    return 0


def is_success_code(code: Any) -> bool:
    """Only the integer 0 or the literal ``"SUCCESS"`` mark success; ``false`` and ``0.0`` do not."""
    return (type(code) is int and code == 0) or code == _SUCCESS_CODE


def _api_error(envelope: dict, path: Optional[str]) -> ApiError:
    msg = envelope.get("msg")
    message = str(msg) if msg is not None else _to_json(envelope)
    return ApiError(coerce_code(envelope.get("code")), message, path=path)


def decode_envelope(raw: bytes, path: Optional[str] = None) -> Any:
    """
    Decode a response body and reject provider error envelopes.

    Raises:
        ParseError: If the body is not valid JSON.
        ApiError: If the envelope has ``success: false`` or a ``code`` other
            than ``0``/``"SUCCESS"``.
    """
    try:
        decoded = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ParseError(f"Invalid JSON response: {exc}", path=path) from exc

    if isinstance(decoded, dict):
        if decoded.get("success", None) is False:
            raise _api_error(decoded, path)
        if "code" in decoded and not is_success_code(decoded["code"]):
            raise _api_error(decoded, path)
    return decoded


def _has_result(envelope: Any) -> bool:
    return isinstance(envelope, dict) and envelope.get("result") is not None


def extract_result(envelope: Any, path: Optional[str] = None) -> Any:
    """GET rule: the ``result`` member is the payload."""
    if _has_result(envelope):
        return envelope["result"]
    raise ApiError(0, f"Unexpected response: {_to_json(envelope)}", path=path)


def accept_envelope(envelope: Any, path: Optional[str] = None) -> dict:
    """POST rule: a ``result`` member marks success and the whole envelope is returned."""
    if _has_result(envelope):
        return envelope
    if isinstance(envelope, dict) and "code" in envelope:
        raise _api_error(envelope, path)
    raise ApiError(0, f"Unexpected response: {_to_json(envelope)}", path=path)


class RequestDispatcher:
    def __init__(
        self,
        credentials: Credentials,
        transport: Transport,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.credentials = credentials
        self.transport = transport
        self.host = api_host(credentials.region)
        self.logger = logger or logging.getLogger(__name__)
        self.tokens: TokenManager = TokenManager(self, logger=self.logger)

    # ---- token-explicit calls ----
    def execute(self, method: str, target: str, body: str = "", access_token: Optional[str] = None) -> ApiResult:
        """
        Sign and send one request, returning the decoded envelope.

        The envelope has already been checked for both provider error shapes;
        the GET/POST success rules are applied by ``fetch`` and ``submit``.
        """
        signed = sign_request(self.credentials, method, target, body, access_token)
        url = f"{self.host}{target}"
        self.logger.info(
            "request",
            extra={"details": redact({"method": method, "path": target, **signed.headers})},
        )
        try:
            raw = self.transport.request(method, url, signed.headers, body.encode("utf-8") if body else None)
            envelope = decode_envelope(raw, path=target)
        except TuyaError as exc:
            error = exc.with_context(f"{method} {target}")
            self.logger.warning(
                "request_failed",
                extra={"details": {"method": method, "path": target, "error": str(error)}},
            )
            return ApiResult.failure(error)
        self.logger.info("response", extra={"details": {"method": method, "path": target}})
        return ApiResult.success(envelope)

    def fetch(self, target: str, access_token: Optional[str]) -> ApiResult:
        result = self.execute("GET", target, access_token=access_token)
        if not result.ok:
            return result
        try:
            return ApiResult.success(extract_result(result.value, path=target))
        except ApiError as exc:
            return ApiResult.failure(exc.with_context(f"GET {target}"))

    def submit(self, target: str, payload: Any, access_token: Optional[str]) -> ApiResult:
        result = self.execute("POST", target, body=_to_json(payload), access_token=access_token)
        if not result.ok:
            return result
        try:
            return ApiResult.success(accept_envelope(result.value, path=target))
        except ApiError as exc:
            return ApiResult.failure(exc.with_context(f"POST {target}"))

    # ---- lazily authenticated calls ----
    def get(self, target: str) -> Any:
        token = self.tokens.ensure_token()
        return self.fetch(target, token).unwrap()

    def post(self, target: str, payload: Any) -> dict:
        token = self.tokens.ensure_token()
        return self.submit(target, payload, token).unwrap()
