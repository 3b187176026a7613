import hashlib
import hmac
import time

from Crypto.Random import get_random_bytes


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def hmac_sha256_hex(key: bytes, data: bytes) -> str:
    mac_hash = hmac.new(key, data, hashlib.sha256)
    return mac_hash.hexdigest().upper()


def random_nonce(size: int = 8) -> str:
    return get_random_bytes(size).hex()


def now_millis() -> int:
    return int(round(time.time() * 1000))


__all__ = [
    "hmac_sha256_hex",
    "now_millis",
    "random_nonce",
    "sha256_hex",
]
