"""Authentication endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from animecards.core.config import Settings
from animecards.core.dependencies import (
    get_app_settings,
    get_auth_service,
    get_current_user,
    get_db,
    get_session_signer,
    get_session_token,
)
from animecards.core.security import SessionSigner
from animecards.models.user import User
from animecards.schemas.auth import LoginRequest
from animecards.schemas.user import UserCreate, UserRead
from animecards.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


def _set_session_cookie(response: Response, token: str, settings: Settings, signer: SessionSigner) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=signer.dumps(token),
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        max_age=settings.session_ttl_seconds,
    )


def _clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        settings.session_cookie_name,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register_user(
    payload: UserCreate,
    response: Response,
    session: AsyncSession = Depends(get_db),
    auth: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
    signer: SessionSigner = Depends(get_session_signer),
) -> UserRead:
    user, token = await auth.register(payload.username, payload.password)
    await session.commit()
    _set_session_cookie(response, token, settings, signer)
    return UserRead.model_validate(user)


@router.post("/login", response_model=UserRead)
async def login(
    payload: LoginRequest,
    response: Response,
    session: AsyncSession = Depends(get_db),
    auth: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
    signer: SessionSigner = Depends(get_session_signer),
) -> UserRead:
    user, token = await auth.login(payload.username, payload.password)
    await session.commit()
    _set_session_cookie(response, token, settings, signer)
    return UserRead.model_validate(user)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def logout(
    session: AsyncSession = Depends(get_db),
    token: str | None = Depends(get_session_token),
    auth: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
) -> Response:
    await auth.logout(token)
    await session.commit()
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    _clear_session_cookie(response, settings)
    return response


@router.get("/me", response_model=UserRead)
async def get_current_user_info(current_user: User = Depends(get_current_user)) -> UserRead:
    return UserRead.model_validate(current_user)


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_account(
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    auth: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
) -> Response:
    """Delete the caller's account together with its cards and sessions."""
    await auth.delete_account(current_user)
    await session.commit()
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    _clear_session_cookie(response, settings)
    return response
