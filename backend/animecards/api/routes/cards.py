"""Card collection endpoints, scoped to the logged-in user."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from animecards.core.dependencies import get_current_user, get_db, get_gate
from animecards.core.errors import InternalFailure
from animecards.models.user import User
from animecards.schemas.card import (
    CARD_TYPES,
    KNOWN_ABILITIES,
    RARITIES,
    CardCatalog,
    CardCreate,
    CardRead,
    CardType,
    CardUpdate,
    CatalogEntry,
)
from animecards.services.authorization import AuthorizationGate

router = APIRouter(prefix="/cards", tags=["cards"])


@router.get("/catalog", response_model=CardCatalog)
async def card_catalog() -> CardCatalog:
    """Enumerations the card form offers."""
    return CardCatalog(
        types=list(CARD_TYPES),
        rarities=list(RARITIES),
        abilities=[CatalogEntry(id=key, label=label) for key, label in KNOWN_ABILITIES.items()],
    )


@router.get("", response_model=list[CardRead])
async def list_cards(
    card_type: CardType | None = Query(default=None, alias="type"),
    gate: AuthorizationGate = Depends(get_gate),
    current_user: User = Depends(get_current_user),
) -> list[CardRead]:
    cards = await gate.list_cards(current_user, card_type)
    return [CardRead.model_validate(card) for card in cards]


@router.post("", response_model=CardRead, status_code=status.HTTP_201_CREATED)
async def create_card(
    payload: CardCreate,
    session: AsyncSession = Depends(get_db),
    gate: AuthorizationGate = Depends(get_gate),
    current_user: User = Depends(get_current_user),
) -> CardRead:
    card = await gate.create_card(current_user, payload)
    await session.commit()
    return CardRead.model_validate(card)


@router.get("/{card_id}", response_model=CardRead)
async def get_card(
    card_id: int,
    gate: AuthorizationGate = Depends(get_gate),
    current_user: User = Depends(get_current_user),
) -> CardRead:
    card = await gate.get_card(current_user, card_id)
    return CardRead.model_validate(card)


@router.put("/{card_id}", response_model=CardRead)
@router.patch("/{card_id}", response_model=CardRead)
async def update_card(
    card_id: int,
    payload: CardUpdate,
    session: AsyncSession = Depends(get_db),
    gate: AuthorizationGate = Depends(get_gate),
    current_user: User = Depends(get_current_user),
) -> CardRead:
    card = await gate.update_card(current_user, card_id, payload)
    await session.commit()
    return CardRead.model_validate(card)


@router.delete("/{card_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_card(
    card_id: int,
    session: AsyncSession = Depends(get_db),
    gate: AuthorizationGate = Depends(get_gate),
    current_user: User = Depends(get_current_user),
) -> Response:
    deleted = await gate.delete_card(current_user, card_id)
    if not deleted:
        raise InternalFailure("Failed to delete card")
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
