from tuyalink.core.errors import (
    ApiError,
    AuthError,
    NotFoundError,
    ParseError,
    TransportError,
    TuyaError,
)

__all__ = [
    "ApiError",
    "AuthError",
    "NotFoundError",
    "ParseError",
    "TransportError",
    "TuyaError",
]
