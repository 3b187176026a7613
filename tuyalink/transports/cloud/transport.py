from __future__ import annotations

from typing import Mapping, Optional

import requests

from tuyalink.core.errors import TransportError
from tuyalink.transports.base import Transport

API_USER_AGENT = "tuyalink/python"


class CloudTransport(Transport):
    def __init__(self, timeout: float = 10.0, session: Optional[requests.Session] = None) -> None:
        self.timeout = timeout
        self.session = session or requests.Session()

    def request(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes] = None,
    ) -> bytes:
        try:
            response = self.session.request(
                method=method,
                url=url,
                headers={"User-Agent": API_USER_AGENT, **headers},
                data=body,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(str(exc), path=url) from exc
        # The provider reports errors in the JSON envelope, so the status code
        # is left to the response classifier.
        return response.content

    def close(self) -> None:
        self.session.close()
