"""Card repository: persistence for card records.

Ownership is not checked here; callers go through the authorization gate
first and pass the owner id they have already verified.
"""
from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from animecards.db.base import utcnow
from animecards.models.card import Card
from animecards.schemas.card import CardCreate, CardUpdate


class CardRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, owner_id: int, data: CardCreate) -> Card:
        now = utcnow()
        card = Card(
            owner_id=owner_id,
            name=data.name,
            type=data.type,
            rarity=data.rarity,
            attack=data.attack,
            defense=data.defense,
            health=data.health,
            mana=data.mana,
            description=data.description,
            image_url=data.image_url,
            abilities=list(data.abilities),
            created_at=now,
            updated_at=now,
        )
        self.session.add(card)
        await self.session.flush()
        await self.session.refresh(card)
        return card

    async def get(self, card_id: int) -> Card | None:
        result = await self.session.execute(select(Card).where(Card.id == card_id))
        return result.scalar_one_or_none()

    async def list_by_owner(self, owner_id: int, card_type: str | None = None) -> list[Card]:
        query = select(Card).where(Card.owner_id == owner_id)
        if card_type is not None:
            query = query.where(Card.type == card_type)
        result = await self.session.execute(query.order_by(Card.created_at.desc(), Card.id.desc()))
        return list(result.scalars().all())

    async def update(self, card_id: int, data: CardUpdate) -> Card | None:
        card = await self.get(card_id)
        if not card:
            return None

        for field, value in data.changes().items():
            if field == "abilities":
                value = list(value)
            setattr(card, field, value)
        card.updated_at = utcnow()

        await self.session.flush()
        await self.session.refresh(card)
        return card

    async def delete(self, card_id: int) -> bool:
        result = await self.session.execute(delete(Card).where(Card.id == card_id))
        return (result.rowcount or 0) > 0
