"""Error taxonomy shared by the Chirpy handlers."""
from __future__ import annotations


class ChirpyError(Exception):
    """Base class for failures that are reported to HTTP clients."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ChirpyError):
    """Raised when client input is rejected before reaching any collaborator."""

    status_code = 400


class ChirpTooLongError(ValidationError):
    pass


class DecodeError(ChirpyError):
    """Raised when a request body cannot be decoded into the expected shape."""

    status_code = 500

    def __init__(self, message: str = "Something went wrong") -> None:
        super().__init__(message)


class StoreError(ChirpyError):
    """Raised when the user store cannot complete a write."""

    status_code = 500


class UnauthorizedError(ChirpyError):
    status_code = 401


class ForbiddenError(ChirpyError):
    status_code = 403


__all__ = [
    "ChirpyError",
    "ValidationError",
    "ChirpTooLongError",
    "DecodeError",
    "StoreError",
    "UnauthorizedError",
    "ForbiddenError",
]
