"""Pydantic schemas for anime cards."""
from __future__ import annotations

from datetime import datetime
from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator

from animecards.db.base import as_utc

CardType = Literal["character", "spell", "artifact", "summon"]
Rarity = Literal["common", "rare", "legendary"]

CARD_TYPES: tuple[str, ...] = get_args(CardType)
RARITIES: tuple[str, ...] = get_args(Rarity)

# Ability ids the client knows how to render; anything else gets a generic badge.
KNOWN_ABILITIES: dict[str, str] = {
    "regeneration": "Regeneration",
    "berserker": "Berserker",
    "magic_shield": "Magic Shield",
    "spell_boost": "Spell Boost",
    "stealth": "Stealth",
    "fire_immunity": "Fire Immunity",
}

# Stats land in a 32-bit INTEGER column
STAT_MAX = 2**31 - 1


class CardBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    type: CardType
    rarity: Rarity
    attack: int = Field(default=0, ge=0, le=STAT_MAX)
    defense: int = Field(default=0, ge=0, le=STAT_MAX)
    health: int = Field(default=0, ge=0, le=STAT_MAX)
    mana: int = Field(default=0, ge=0, le=STAT_MAX)
    description: str | None = None
    image_url: str | None = Field(default=None, max_length=2048)
    abilities: list[str] = Field(default_factory=list)


class CardCreate(CardBase):
    """Creation payload. Unknown keys such as owner_id are dropped."""

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name is required")
        return value


class CardUpdate(BaseModel):
    """Partial update: only fields present in the payload are applied.

    Fields that cannot be null on a card reject an explicit ``null``.
    """

    name: str | None = Field(default=None, min_length=1, max_length=128)
    type: CardType | None = None
    rarity: Rarity | None = None
    attack: int | None = Field(default=None, ge=0, le=STAT_MAX)
    defense: int | None = Field(default=None, ge=0, le=STAT_MAX)
    health: int | None = Field(default=None, ge=0, le=STAT_MAX)
    mana: int | None = Field(default=None, ge=0, le=STAT_MAX)
    description: str | None = None
    image_url: str | None = Field(default=None, max_length=2048)
    abilities: list[str] | None = None

    @field_validator("type", "rarity", "attack", "defense", "health", "mana", "abilities")
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise ValueError("field cannot be null")
        return value

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str | None) -> str:
        if value is None or not value.strip():
            raise ValueError("name is required")
        return value.strip()

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class CardRead(CardBase):
    id: int
    owner_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    _utc_timestamps = field_validator("created_at", "updated_at")(as_utc)


class CatalogEntry(BaseModel):
    id: str
    label: str


class CardCatalog(BaseModel):
    types: list[str]
    rarities: list[str]
    abilities: list[CatalogEntry]
