"""User creation on top of the configured user store."""
from __future__ import annotations

import logging
from typing import Protocol

from .database import UserStoreError
from .errors import StoreError, ValidationError
from .models import User

logger = logging.getLogger("chirpy.users")


class UserStore(Protocol):
    def create_user(self, email: str) -> User:
        ...


class UserService:
    """Validate user input and translate store failures into API errors."""

    def __init__(self, store: UserStore) -> None:
        self._store = store

    def create_user(self, email: str) -> User:
        """Create a user with ``email`` exactly as submitted."""

        if not email.strip():
            raise ValidationError("Email is empty")

        try:
            user = self._store.create_user(email)
        except UserStoreError as exc:
            # The address stays out of the log.
            logger.error("Failed to create user: %s", exc)
            raise StoreError("Couldn't create user") from exc

        logger.info("Created user %s", user.id)
        return user


__all__ = ["UserService", "UserStore"]
