from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Credentials:
    """
    Cloud project credentials.

    Attributes:
        client_id: The project's Access ID.
        client_secret: The project's Access Secret, used as the HMAC key.
        region: Data center infix used in the API host (``eu``, ``us``, ``cn``...).
    """
    client_id: str
    client_secret: str
    region: str = "eu"

    def __repr__(self) -> str:
        return f"Credentials(client_id={self.client_id!r}, client_secret='***', region={self.region!r})"
