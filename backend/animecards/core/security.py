"""Security helpers for password hashing and session cookie signing."""
from __future__ import annotations

import secrets

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from passlib.context import CryptContext

from .config import Settings


_password_context = CryptContext(schemes=["argon2"], deprecated="auto")


class PasswordHasher:
    """Hash and verify user passwords using Argon2id."""

    @staticmethod
    def hash(password: str) -> str:
        return _password_context.hash(password)

    @staticmethod
    def verify(password: str, hashed: str) -> bool:
        return _password_context.verify(password, hashed)


def generate_session_token() -> str:
    """Return a new unguessable opaque session token."""

    return secrets.token_urlsafe(32)


class SessionSigner:
    """Sign session tokens for the cookie so tampered values are rejected early."""

    def __init__(self, settings: Settings, salt: str = "animecards-session") -> None:
        self._serializer = URLSafeTimedSerializer(settings.secret_key, salt=salt)
        self._max_age = settings.session_ttl_seconds

    def dumps(self, token: str) -> str:
        return self._serializer.dumps({"sid": token})

    def loads(self, value: str) -> str:
        try:
            payload = self._serializer.loads(value, max_age=self._max_age)
        except (BadSignature, SignatureExpired) as exc:
            raise ValueError("Invalid or expired session cookie") from exc
        token = payload.get("sid") if isinstance(payload, dict) else None
        if not token:
            raise ValueError("Invalid session cookie")
        return token
