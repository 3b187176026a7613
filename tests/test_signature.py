"""Tests for canonical query construction and request signing."""
import hashlib
import hmac
from unittest.mock import patch

from tuyalink.crypto import hmac_sha256_hex, random_nonce, sha256_hex
from tuyalink.crypto.signature import (
    SIGN_METHOD,
    build_headers,
    canonical_query,
    sign,
    sign_request,
    split_target,
    string_to_sign,
)
from tuyalink.domain import Credentials

EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def _expected_sign(secret: str, base: str) -> str:
    return hmac.new(secret.encode(), base.encode(), hashlib.sha256).hexdigest().upper()


def test_canonical_query_sorts_keys_and_keeps_value_order():
    assert canonical_query("b=2&a=1&a=3") == "a=1&a=3&b=2"


def test_canonical_query_empty():
    assert canonical_query("") == ""


def test_canonical_query_keeps_empty_values():
    assert canonical_query("b=&a=") == "a=&b="


def test_canonical_query_rfc3986_encoding():
    assert canonical_query("name=a b&x=~y/z*") == "name=a%20b&x=~y%2Fz%2A"


def test_canonical_query_plus_is_space():
    assert canonical_query("q=a+b") == "q=a%20b"


def test_split_target():
    assert split_target("/v1.0/token?grant_type=1") == ("/v1.0/token", "grant_type=1")
    assert split_target("/v1.0/devices/abc") == ("/v1.0/devices/abc", "")


def test_empty_body_hash():
    assert sha256_hex(b"") == EMPTY_SHA256
    assert string_to_sign("GET", "/v1.0/devices/x") == f"GET\n{EMPTY_SHA256}\n\n/v1.0/devices/x"


def test_string_to_sign_with_query_and_body():
    body = '{"commands":[]}'
    expected_hash = hashlib.sha256(body.encode()).hexdigest()
    assert string_to_sign("POST", "/p", "b=1&a=2", body) == f"POST\n{expected_hash}\n\n/p?a=2&b=1"


def test_sign_without_token_matches_reference():
    signature = sign("cid", "secret", None, "GET", "/v1.0/token", "grant_type=1", t=1588925778000, nonce="0123456789abcdef")
    base = "cid" + "1588925778000" + "0123456789abcdef" + f"GET\n{EMPTY_SHA256}\n\n/v1.0/token?grant_type=1"
    assert signature.sign == _expected_sign("secret", base)
    assert signature.t == 1588925778000
    assert signature.nonce == "0123456789abcdef"


def test_sign_with_token_includes_token_segment():
    signature = sign("cid", "secret", "tok", "GET", "/v1.0/devices/d1", t=1, nonce="n")
    base = "cid" + "tok" + "1" + "n" + f"GET\n{EMPTY_SHA256}\n\n/v1.0/devices/d1"
    assert signature.sign == _expected_sign("secret", base)


def test_sign_is_uppercase_hex():
    signature = sign("cid", "secret", "tok", "GET", "/x", t=1, nonce="n")
    assert signature.sign == signature.sign.upper()
    assert len(signature.sign) == 64


def test_sign_deterministic_with_fixed_t_and_nonce():
    args = ("cid", "secret", "tok", "POST", "/v1.0/iot-03/devices/d1/commands", "", '{"commands":[]}')
    first = sign(*args, t=1700000000000, nonce="aaaaaaaaaaaaaaaa")
    second = sign(*args, t=1700000000000, nonce="aaaaaaaaaaaaaaaa")
    assert first == second


def test_sign_differs_with_fresh_nonce():
    first = sign("cid", "secret", "tok", "GET", "/x", t=1)
    second = sign("cid", "secret", "tok", "GET", "/x", t=1)
    assert first.nonce != second.nonce
    assert first.sign != second.sign


def test_query_order_does_not_change_signature():
    first = sign("cid", "secret", "tok", "GET", "/x", "b=2&a=1", t=1, nonce="n")
    second = sign("cid", "secret", "tok", "GET", "/x", "a=1&b=2", t=1, nonce="n")
    assert first.sign == second.sign


def test_random_nonce_is_16_hex_chars():
    nonce = random_nonce()
    assert len(nonce) == 16
    int(nonce, 16)


@patch("tuyalink.crypto.time.time", return_value=1700000000.1234)
def test_sign_uses_millisecond_clock(_mock_time):
    signature = sign("cid", "secret", None, "GET", "/x", nonce="n")
    assert signature.t == 1700000000123


def test_hmac_helper():
    assert hmac_sha256_hex(b"k", b"d") == hmac.new(b"k", b"d", hashlib.sha256).hexdigest().upper()


def test_build_headers_without_token():
    signature = sign("cid", "secret", None, "GET", "/x", t=5, nonce="n")
    headers = build_headers("cid", signature)
    assert "access_token" not in headers
    assert headers["client_id"] == "cid"
    assert headers["sign_method"] == SIGN_METHOD == "HMAC-SHA256"
    assert headers["t"] == "5"
    assert headers["nonce"] == "n"
    assert headers["Content-Type"] == "application/json"


def test_sign_request_splits_target_and_sets_headers():
    creds = Credentials("cid", "secret", "eu")
    signed = sign_request(creds, "GET", "/v2.0/cloud/thing/device?page_size=20&last_id=abc", access_token="tok", t=7, nonce="n")
    assert signed.path == "/v2.0/cloud/thing/device"
    assert signed.query == "last_id=abc&page_size=20"
    assert signed.target == "/v2.0/cloud/thing/device?page_size=20&last_id=abc"
    assert signed.headers["access_token"] == "tok"
    expected = sign("cid", "secret", "tok", "GET", "/v2.0/cloud/thing/device", "page_size=20&last_id=abc", t=7, nonce="n")
    assert signed.signature == expected
    assert signed.headers["sign"] == expected.sign


def test_credentials_repr_hides_secret():
    assert "'secret'" not in repr(Credentials("cid", "secret", "eu"))
