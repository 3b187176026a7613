"""
Request signing for the Tuya cloud API.

A request is signed by hashing its body, canonicalizing its query string and
building a string-to-sign of the form::

    METHOD \\n SHA256(body) \\n <empty headers line> \\n path[?canonical_query]

The HMAC-SHA256 of ``client_id [+ access_token] + t + nonce + string_to_sign``,
keyed with the client secret and rendered as uppercase hex, is sent in the
``sign`` header.
"""
from __future__ import annotations

import urllib.parse
from dataclasses import dataclass, field
from typing import Optional

from tuyalink.crypto import hmac_sha256_hex, now_millis, random_nonce, sha256_hex
from tuyalink.domain.credentials import Credentials

SIGN_METHOD = "HMAC-SHA256"


@dataclass(frozen=True)
class Signature:
    sign: str
    t: int
    nonce: str


@dataclass(frozen=True)
class SignedRequest:
    """
    A request ready to hand to a transport.

    Attributes:
        method: HTTP method.
        path: Base path, without query string.
        query: Canonical query string (may be empty).
        target: Path and query exactly as they are sent on the wire.
        body: Request body that was hashed into the signature.
        signature: The computed signature, timestamp and nonce.
        headers: Headers carrying the signature.
    """
    method: str
    path: str
    query: str
    target: str
    body: str
    signature: Signature
    headers: dict[str, str] = field(default_factory=dict)


def _rfc3986(value: str) -> str:
    return urllib.parse.quote(value, safe="-_.~")


def split_target(target: str) -> tuple[str, str]:
    """Split ``/path?query`` into its base path and raw query string."""
    path, _, query = target.partition("?")
    return path, query


def canonical_query(query_string: str) -> str:
    """
    Canonicalize a raw query string.

    Keys are sorted ascending; a key given several times keeps its values in
    their original order. Keys and values are percent-encoded per RFC 3986 and
    empty values are kept as ``key=``.
    """
    if not query_string:
        return ""
    params: dict[str, list[str]] = {}
    for key, value in urllib.parse.parse_qsl(query_string, keep_blank_values=True):
        params.setdefault(key, []).append(value)
    pairs = []
    for key in sorted(params):
        for value in params[key]:
            pairs.append(f"{_rfc3986(key)}={_rfc3986(value)}")
    return "&".join(pairs)


def string_to_sign(method: str, path: str, query_string: str = "", body: str = "") -> str:
    body_hash = sha256_hex(body.encode("utf-8"))
    query = canonical_query(query_string)
    url = f"{path}?{query}" if query else path
    return f"{method}\n{body_hash}\n\n{url}"


def sign(
    client_id: str,
    secret: str,
    access_token: Optional[str],
    method: str,
    path: str,
    query_string: str = "",
    body: str = "",
    *,
    t: Optional[int] = None,
    nonce: Optional[str] = None,
) -> Signature:
    """
    Compute the signature for one request.

    Args:
        client_id: The project's Access ID.
        secret: The project's Access Secret.
        access_token: Current token, or ``None`` for the token request itself.
        method: HTTP method, e.g. ``GET``.
        path: Base path without query string.
        query_string: Raw query string, without the leading ``?``.
        body: Raw request body.
        t: Millisecond timestamp; the current time when omitted.
        nonce: Request nonce; 8 random bytes in hex when omitted.

    Returns:
        A ``Signature`` with the uppercase hex ``sign``, ``t`` and ``nonce``.
    """
    t = now_millis() if t is None else t
    nonce = random_nonce() if nonce is None else nonce

    to_sign = string_to_sign(method, path, query_string, body)
    if access_token:
        base = f"{client_id}{access_token}{t}{nonce}{to_sign}"
    else:
        base = f"{client_id}{t}{nonce}{to_sign}"

    return Signature(
        sign=hmac_sha256_hex(secret.encode("utf-8"), base.encode("utf-8")),
        t=t,
        nonce=nonce,
    )


def build_headers(client_id: str, signature: Signature, access_token: Optional[str] = None) -> dict[str, str]:
    headers = {"client_id": client_id}
    if access_token:
        headers["access_token"] = access_token
    headers.update(
        {
            "sign": signature.sign,
            "sign_method": SIGN_METHOD,
            "t": str(signature.t),
            "nonce": signature.nonce,
            "Content-Type": "application/json",
        }
    )
    return headers


def sign_request(
    credentials: Credentials,
    method: str,
    target: str,
    body: str = "",
    access_token: Optional[str] = None,
    *,
    t: Optional[int] = None,
    nonce: Optional[str] = None,
) -> SignedRequest:
    path, query = split_target(target)
    signature = sign(
        credentials.client_id,
        credentials.client_secret,
        access_token,
        method,
        path,
        query,
        body,
        t=t,
        nonce=nonce,
    )
    return SignedRequest(
        method=method,
        path=path,
        query=canonical_query(query),
        target=target,
        body=body,
        signature=signature,
        headers=build_headers(credentials.client_id, signature, access_token),
    )
