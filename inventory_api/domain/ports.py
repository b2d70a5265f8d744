"""Ports (abstractions) the application layer depends on."""
from __future__ import annotations

from typing import Protocol


class TokenVerifierPort(Protocol):
    """Maps a bearer token to the verified email of its holder."""

    def verify(self, token: str) -> str:
        """Return the verified email or raise AuthenticationInvalidError."""
        ...
