"""Helpers for testing the passwordless gate."""

from datetime import datetime
from typing import Dict, List, Optional

from passwordless.tokens import TokenStore


class TokenStoreMock(TokenStore):
    """Keeps valid tokens in memory and records what happens to them."""

    def __init__(self, tokens: Optional[Dict[str, str]] = None) -> None:
        self.tokens = dict(tokens or {})
        self.invalidated: List[str] = []
        self.extended: Dict[str, datetime] = {}

    def verify(self, token: str, uid: str) -> bool:
        return self.tokens.get(token) == uid

    def invalidate(self, token: str) -> None:
        self.tokens.pop(token, None)
        self.invalidated.append(token)

    def extend(self, token: str, expires: datetime) -> None:
        self.extended[token] = expires
