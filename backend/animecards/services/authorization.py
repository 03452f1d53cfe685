"""Per-request ownership policy for card operations."""
from __future__ import annotations

import logging

from animecards.core.errors import Forbidden, NotFound, Unauthenticated
from animecards.models.card import Card
from animecards.models.user import User
from animecards.schemas.card import CardCreate, CardUpdate
from animecards.services.cards import CardRepository

logger = logging.getLogger(__name__)


class AuthorizationGate:
    """Wrap the card repository so every call is scoped to the caller.

    The gate holds no state of its own: each operation checks that a caller
    is present and, for existing cards, that the caller owns the record.
    """

    def __init__(self, cards: CardRepository) -> None:
        self.cards = cards

    @staticmethod
    def require_caller(caller: User | None) -> User:
        if caller is None:
            raise Unauthenticated()
        return caller

    async def load_owned(self, caller: User | None, card_id: int) -> Card:
        caller = self.require_caller(caller)
        card = await self.cards.get(card_id)
        if not card:
            raise NotFound("Card not found")
        if card.owner_id != caller.id:
            logger.warning("User %s denied access to card %s", caller.id, card_id)
            raise Forbidden()
        return card

    async def list_cards(self, caller: User | None, card_type: str | None = None) -> list[Card]:
        caller = self.require_caller(caller)
        return await self.cards.list_by_owner(caller.id, card_type)

    async def create_card(self, caller: User | None, data: CardCreate) -> Card:
        caller = self.require_caller(caller)
        card = await self.cards.create(caller.id, data)
        logger.info("User %s created card %s", caller.id, card.id)
        return card

    async def get_card(self, caller: User | None, card_id: int) -> Card:
        return await self.load_owned(caller, card_id)

    async def update_card(self, caller: User | None, card_id: int, data: CardUpdate) -> Card:
        await self.load_owned(caller, card_id)
        card = await self.cards.update(card_id, data)
        if not card:
            raise NotFound("Card not found")
        return card

    async def delete_card(self, caller: User | None, card_id: int) -> bool:
        """Return whether the row was removed once ownership is confirmed."""

        caller = self.require_caller(caller)
        await self.load_owned(caller, card_id)
        deleted = await self.cards.delete(card_id)
        if deleted:
            logger.info("User %s deleted card %s", caller.id, card_id)
        return deleted
