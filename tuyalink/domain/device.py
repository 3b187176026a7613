from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


class Device(BaseModel):
    """
    A device record as returned by the device list endpoint.

    Only the fields the client reads are declared; anything else the provider
    sends is kept as extra data and survives ``model_dump``.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    name: Optional[str] = None
    custom_name: Optional[str] = Field(None, alias="customName")
    online: Optional[bool] = None
    is_online: Optional[bool] = Field(None, alias="isOnline")

    @property
    def display_name(self) -> str:
        return self.custom_name or self.name or self.id

    @property
    def extra(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class Command(BaseModel):
    code: str
    value: Any


def dump_commands(commands: list[Command | Mapping[str, Any]]) -> list[Any]:
    """Turn a command batch into JSON-ready items, passing mappings through verbatim."""
    items: list[Any] = []
    for command in commands:
        if isinstance(command, Command):
            items.append(command.model_dump())
        else:
            items.append(command)
    return items
