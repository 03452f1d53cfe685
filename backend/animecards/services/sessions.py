"""Server-side session store keyed by opaque token."""
from __future__ import annotations

import logging
from datetime import timedelta

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from animecards.core.config import Settings
from animecards.core.security import generate_session_token
from animecards.db.base import utcnow
from animecards.models.session import AuthSession

logger = logging.getLogger(__name__)


class SessionManager:
    """Create, resolve and destroy login sessions.

    A session is active until it is destroyed or its ``expires_at`` passes.
    Unknown, expired and destroyed tokens all resolve to ``None``; nothing
    brings an expired or destroyed token back.
    """

    def __init__(self, session: AsyncSession, settings: Settings) -> None:
        self.session = session
        self.ttl = timedelta(minutes=settings.session_ttl_minutes)

    async def create(self, user_id: int) -> str:
        now = utcnow()
        token = generate_session_token()
        self.session.add(AuthSession(token=token, user_id=user_id, created_at=now, expires_at=now + self.ttl))
        await self.session.flush()
        return token

    async def resolve(self, token: str | None) -> int | None:
        """Return the user id for a live session, else None."""

        if not token:
            return None
        result = await self.session.execute(
            select(AuthSession.user_id).where(AuthSession.token == token, AuthSession.expires_at > utcnow())
        )
        return result.scalar_one_or_none()

    async def destroy(self, token: str | None) -> None:
        if not token:
            return
        await self.session.execute(delete(AuthSession).where(AuthSession.token == token))

    async def purge_expired(self) -> int:
        result = await self.session.execute(delete(AuthSession).where(AuthSession.expires_at <= utcnow()))
        purged = result.rowcount or 0
        if purged:
            logger.info("Purged %d expired session(s)", purged)
        return purged
