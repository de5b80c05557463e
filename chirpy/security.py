"""Optional bearer-token guard for the admin endpoints."""
from __future__ import annotations

import secrets
from typing import Iterable, List

from fastapi import Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .errors import ForbiddenError, UnauthorizedError


class AdminAuth:
    """Check admin requests against a fixed set of tokens.

    With no tokens configured every request is allowed, which keeps the admin
    routes open for local development.
    """

    def __init__(self, tokens: Iterable[str] = ()) -> None:
        self._tokens: List[str] = [token.strip() for token in tokens if token.strip()]
        self._bearer = HTTPBearer(auto_error=False)

    @property
    def enabled(self) -> bool:
        return bool(self._tokens)

    async def __call__(self, request: Request) -> None:
        if not self.enabled:
            return None

        credentials: HTTPAuthorizationCredentials | None = await self._bearer(request)  # type: ignore[assignment]
        if credentials is None or credentials.scheme.lower() != "bearer":
            raise UnauthorizedError("Missing bearer token")

        provided = credentials.credentials
        for token in self._tokens:
            if secrets.compare_digest(provided, token):
                return None

        raise ForbiddenError("Invalid admin token")


__all__ = ["AdminAuth"]
