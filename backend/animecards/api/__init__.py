"""API router aggregator."""
from fastapi import APIRouter

from animecards.api.routes import auth, cards

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router)
api_router.include_router(cards.router)


@api_router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


__all__ = ["api_router"]
