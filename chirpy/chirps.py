"""Validation of chirp bodies submitted to the API."""
from __future__ import annotations

from .errors import ChirpTooLongError
from .profanity import clean_profanity

MAX_CHIRP_LENGTH = 140


def validate_chirp(body: str) -> str:
    """Return the cleaned body, or raise :class:`ChirpTooLongError`."""

    if len(body) >= MAX_CHIRP_LENGTH:
        raise ChirpTooLongError("Chirp is too long")
    return clean_profanity(body)


__all__ = ["MAX_CHIRP_LENGTH", "validate_chirp"]
