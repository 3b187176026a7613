from tuyalink.clients.cloud import Client
from tuyalink.core.config import ClientSettings
from tuyalink.core.errors import (
    ApiError,
    AuthError,
    NotFoundError,
    ParseError,
    TransportError,
    TuyaError,
)
from tuyalink.domain import ApiResult, Command, Credentials, Device
from tuyalink.transports import CloudTransport, Transport
from importlib.metadata import PackageNotFoundError, version

__all__ = [
    "ApiError",
    "ApiResult",
    "AuthError",
    "Client",
    "ClientSettings",
    "CloudTransport",
    "Command",
    "Credentials",
    "Device",
    "NotFoundError",
    "ParseError",
    "Transport",
    "TransportError",
    "TuyaError",
]

try:
    __version__ = version("tuyalink")
except PackageNotFoundError:
    __version__ = "0.0.0"
