"""Explicit application context holding the store handles."""
from __future__ import annotations

from dataclasses import dataclass

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from animecards import models  # noqa: F401  registers tables on Base.metadata
from animecards.core.config import Settings
from animecards.db.base import Base
from animecards.db.session import build_engine, build_session_factory
from animecards.services.scheduler import build_scheduler


@dataclass
class AppContext:
    """Everything request handlers need, built once per application."""

    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    scheduler: AsyncIOScheduler

    @classmethod
    def from_settings(cls, settings: Settings) -> AppContext:
        engine = build_engine(settings)
        return cls(
            settings=settings,
            engine=engine,
            session_factory=build_session_factory(engine),
            scheduler=build_scheduler(),
        )

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
