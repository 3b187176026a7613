from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from typing import Any


@lru_cache
def load_api_config() -> dict[str, Any]:
    resource = resources.files("tuyalink.resources").joinpath("api_config.json")
    with resource.open("r", encoding="utf-8") as f:
        return json.load(f)


def api_host(region: str) -> str:
    return load_api_config()["HOST_TEMPLATE"].format(region=region)


def api_path(name: str, **params: str) -> str:
    return load_api_config()["PATHS"][name].format(**params)
