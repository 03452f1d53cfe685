"""Authentication service: registration, login and session-backed identity."""
from __future__ import annotations

import logging

from animecards.core.errors import InvalidCredentials
from animecards.models.user import User
from animecards.services.sessions import SessionManager
from animecards.services.users import CredentialStore

logger = logging.getLogger(__name__)


class AuthService:
    """Verify credentials and establish or tear down sessions.

    Methods that create a session return ``(user, token)``; the caller is
    responsible for committing and for putting the token in a cookie.
    """

    def __init__(self, credentials: CredentialStore, sessions: SessionManager) -> None:
        self.credentials = credentials
        self.sessions = sessions

    async def register(self, username: str, password: str) -> tuple[User, str]:
        user = await self.credentials.create(username, password)
        token = await self.sessions.create(user.id)
        logger.info("Registered user %s (id=%s)", user.username, user.id)
        return user, token

    async def login(self, username: str, password: str) -> tuple[User, str]:
        user = await self.credentials.verify(username, password)
        if not user:
            logger.info("Failed login for username %r", username)
            raise InvalidCredentials()
        token = await self.sessions.create(user.id)
        logger.info("User %s logged in", user.username)
        return user, token

    async def logout(self, token: str | None) -> None:
        await self.sessions.destroy(token)

    async def current_user(self, token: str | None) -> User | None:
        user_id = await self.sessions.resolve(token)
        if user_id is None:
            return None
        return await self.credentials.get_by_id(user_id)

    async def delete_account(self, user: User) -> None:
        username = user.username
        await self.credentials.delete(user)
        logger.info("Deleted account %s and its cards", username)
