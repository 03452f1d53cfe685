"""Credential store: user lookup and creation."""
from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from animecards.core.errors import Conflict
from animecards.core.security import PasswordHasher
from animecards.models.card import Card
from animecards.models.session import AuthSession
from animecards.models.user import User


class CredentialStore:
    """Holds username/password-hash pairs. Usernames are case-sensitive."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, user_id: int) -> User | None:
        return await self.session.get(User, user_id)

    async def get_by_username(self, username: str) -> User | None:
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def create(self, username: str, password: str) -> User:
        if await self.get_by_username(username):
            raise Conflict("Username already taken")
        user = User(username=username, password_hash=PasswordHasher.hash(password))
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            # Lost a race with a concurrent registration of the same name
            await self.session.rollback()
            raise Conflict("Username already taken") from exc
        await self.session.refresh(user)
        return user

    async def verify(self, username: str, password: str) -> User | None:
        user = await self.get_by_username(username)
        if not user:
            return None
        if not PasswordHasher.verify(password, user.password_hash):
            return None
        return user

    async def delete(self, user: User) -> None:
        """Remove a user together with everything it owns."""

        await self.session.execute(delete(Card).where(Card.owner_id == user.id))
        await self.session.execute(delete(AuthSession).where(AuthSession.user_id == user.id))
        await self.session.delete(user)
        await self.session.flush()
