from __future__ import annotations

import logging
import urllib.parse
from typing import Any, Iterator, Optional

from tuyalink.clients.dispatcher import RequestDispatcher
from tuyalink.resources import api_path, load_api_config

DEFAULT_PAGE_SIZE = 20


def clamp_page_size(page_size: int) -> int:
    return min(max(1, int(page_size)), load_api_config()["MAX_PAGE_SIZE"])


class DevicePaginator:
    """
    Walks the v2.0 device list using ``last_id`` cursors.

    The endpoint has no total count: a page shorter than ``page_size``, an
    empty page or a last item without ``id`` ends the walk.
    """

    def __init__(self, dispatcher: RequestDispatcher, logger: Optional[logging.Logger] = None) -> None:
        self.dispatcher = dispatcher
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def page_target(page_size: int, last_id: Optional[str] = None) -> str:
        target = f"{api_path('DEVICES')}?page_size={page_size}"
        if last_id:
            target += "&last_id=" + urllib.parse.quote(str(last_id), safe="-_.~")
        return target

    def iter_devices(self, page_size: int = DEFAULT_PAGE_SIZE, fetch_all: bool = True) -> Iterator[Any]:
        page_size = clamp_page_size(page_size)
        last_id = None
        pages = 0

        while True:
            page = self.dispatcher.get(self.page_target(page_size, last_id))
            if not isinstance(page, list) or not page:
                break
            pages += 1
            self.logger.debug("device_page", extra={"details": {"page": pages, "items": len(page)}})
            yield from page

            if not fetch_all:
                break

            last = page[-1]
            last_id = last.get("id") if isinstance(last, dict) else None
            if not last_id:
                break

            if len(page) < page_size:
                break

    def list_devices(self, page_size: int = DEFAULT_PAGE_SIZE, fetch_all: bool = True) -> list[Any]:
        return list(self.iter_devices(page_size=page_size, fetch_all=fetch_all))
