"""Reusable dependencies for FastAPI routes."""
from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from animecards.core.config import Settings
from animecards.core.context import AppContext
from animecards.core.errors import Unauthenticated
from animecards.core.security import SessionSigner
from animecards.db.session import session_scope
from animecards.models.user import User
from animecards.services.auth import AuthService
from animecards.services.authorization import AuthorizationGate
from animecards.services.cards import CardRepository
from animecards.services.sessions import SessionManager
from animecards.services.users import CredentialStore


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_app_settings(context: AppContext = Depends(get_context)) -> Settings:
    return context.settings


async def get_db(context: AppContext = Depends(get_context)) -> AsyncIterator[AsyncSession]:
    async with session_scope(context.session_factory) as session:
        yield session


def get_session_signer(settings: Settings = Depends(get_app_settings)) -> SessionSigner:
    return SessionSigner(settings)


def get_auth_service(
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> AuthService:
    return AuthService(CredentialStore(session), SessionManager(session, settings))


def get_gate(session: AsyncSession = Depends(get_db)) -> AuthorizationGate:
    return AuthorizationGate(CardRepository(session))


def get_session_token(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    signer: SessionSigner = Depends(get_session_signer),
) -> str | None:
    """Unsign the session cookie; a missing or tampered cookie yields None."""

    raw = request.cookies.get(settings.session_cookie_name)
    if not raw:
        return None
    try:
        return signer.loads(raw)
    except ValueError:
        return None


async def get_optional_user(
    token: str | None = Depends(get_session_token),
    auth: AuthService = Depends(get_auth_service),
) -> User | None:
    return await auth.current_user(token)


async def get_current_user(user: User | None = Depends(get_optional_user)) -> User:
    if user is None:
        raise Unauthenticated()
    return user
