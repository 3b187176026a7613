from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping, Optional


class Transport(ABC):
    """Sends one HTTP request and returns the raw response body."""

    @abstractmethod
    def request(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes] = None,
    ) -> bytes:
        """Perform the request; raise ``TransportError`` on network failure."""

    def close(self) -> None:
        return None
