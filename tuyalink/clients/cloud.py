from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from tuyalink.clients.dispatcher import RequestDispatcher
from tuyalink.clients.pagination import DEFAULT_PAGE_SIZE, DevicePaginator
from tuyalink.core.config import ClientSettings, get_settings
from tuyalink.core.errors import NotFoundError, ParseError, TuyaError
from tuyalink.core.logging import create_logger, get_ring_buffer
from tuyalink.domain import Command, Credentials, Device, dump_commands
from tuyalink.resources import api_path
from tuyalink.transports import CloudTransport, Transport


class Client:
    """
    Synchronous client for the Tuya cloud device API.

    The first call that needs a token transparently fetches one. A client is
    not safe to share between threads except for token acquisition, which is
    guarded.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        region: str = "eu",
        transport: Optional[Transport] = None,
        logger: Optional[logging.Logger] = None,
        timeout: float = 10.0,
    ):
        self.credentials = Credentials(client_id=client_id, client_secret=client_secret, region=region)
        self.transport = transport or CloudTransport(timeout=timeout)
        self.logger = logger or create_logger("tuyalink", 200)
        self.dispatcher = RequestDispatcher(self.credentials, self.transport, logger=self.logger)
        self.paginator = DevicePaginator(self.dispatcher, logger=self.logger)

    @classmethod
    def from_settings(cls, settings: Optional[ClientSettings] = None, transport: Optional[Transport] = None) -> "Client":
        settings = settings or get_settings()
        credentials = settings.credentials()
        return cls(
            client_id=credentials.client_id,
            client_secret=credentials.client_secret,
            region=credentials.region,
            transport=transport,
            logger=create_logger(settings.logger_name, settings.log_ring_size),
            timeout=settings.timeout,
        )

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.transport.close()

    # ---- auth ----
    @property
    def access_token(self) -> Optional[str]:
        return self.dispatcher.tokens.current_token()

    def get_token(self) -> str:
        return self.dispatcher.tokens.fetch_token()

    def events(self) -> list[dict]:
        """
        Recent request events held by the ring buffer of ``self.logger``, secrets redacted.

        Clients sharing a logger (the default ``tuyalink`` logger included)
        share its buffer; pass distinct loggers or ``logger_name`` settings to
        keep their events apart.
        """
        handler = get_ring_buffer(self.logger)
        return handler.get_events() if handler else []

    # ---- devices ----
    def list_devices(self, page_size: int = DEFAULT_PAGE_SIZE, fetch_all: bool = True) -> list[dict[str, Any]]:
        return self.paginator.list_devices(page_size=page_size, fetch_all=fetch_all)

    def get_devices(self, page_size: int = DEFAULT_PAGE_SIZE, fetch_all: bool = True) -> list[Device]:
        records = self.list_devices(page_size=page_size, fetch_all=fetch_all)
        try:
            return [Device.model_validate(record) for record in records]
        except ValidationError as exc:
            raise ParseError(f"Unexpected device record: {exc}", path=api_path("DEVICES")) from exc

    def find_device(self, device_id_or_name: str) -> dict[str, Any]:
        for device in self.list_devices():
            if not isinstance(device, dict):
                continue
            if (
                device.get("id") == device_id_or_name
                or device.get("name") == device_id_or_name
                or device.get("customName") == device_id_or_name
            ):
                return device
        raise NotFoundError(f"Device {device_id_or_name} not found.")

    def get_device_id_by_name(self, device_name: str, use_custom_name: bool = True) -> Optional[str]:
        field = "customName" if use_custom_name else "name"
        for device in self.list_devices():
            if isinstance(device, dict) and device.get(field) == device_name:
                return device.get("id")
        return None

    def is_device_online(self, device_id_or_name: str) -> bool:
        device = self.find_device(device_id_or_name)
        if device.get("isOnline") is not None:
            return bool(device["isOnline"])
        if device.get("online") is not None:
            return bool(device["online"])
        return False

    def get_device_info(self, device_id: str) -> Any:
        return self._get(api_path("DEVICE_INFO", device_id=device_id), "get_device_info")

    def get_device_status(self, device_id: str) -> Any:
        return self._get(api_path("DEVICE_STATUS", device_id=device_id), "get_device_status")

    def set_device_status(self, device_id: str, commands: list[Command | Mapping[str, Any]]) -> dict[str, Any]:
        path = api_path("DEVICE_COMMANDS", device_id=device_id)
        try:
            return self.dispatcher.post(path, {"commands": dump_commands(commands)})
        except TuyaError as exc:
            raise exc.with_context("set_device_status failed") from exc

    def _get(self, path: str, operation: str) -> Any:
        try:
            return self.dispatcher.get(path)
        except TuyaError as exc:
            raise exc.with_context(f"{operation} failed") from exc
