"""Domain errors raised by services and translated at the API boundary."""
from __future__ import annotations

from fastapi import status


class AnimeCardsError(RuntimeError):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message


class Unauthenticated(AnimeCardsError):
    """Raised when a request carries no live session."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Not authenticated"


class InvalidCredentials(AnimeCardsError):
    """Raised on login with an unknown username or a wrong password."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid credentials"


class Forbidden(AnimeCardsError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Access denied"


class NotFound(AnimeCardsError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class Conflict(AnimeCardsError):
    status_code = status.HTTP_409_CONFLICT
    message = "Conflict"


class InternalFailure(AnimeCardsError):
    """Raised when the store fails for reasons unrelated to caller input."""
