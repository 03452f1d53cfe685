from datetime import timedelta

import pytest
from sqlalchemy import func, select, update

from animecards.core.errors import Conflict, Forbidden, InvalidCredentials, NotFound, Unauthenticated
from animecards.db.base import utcnow
from animecards.models.session import AuthSession
from animecards.models.user import User
from animecards.schemas.card import CardCreate, CardUpdate
from animecards.services.auth import AuthService
from animecards.services.authorization import AuthorizationGate
from animecards.services.cards import CardRepository
from animecards.services.sessions import SessionManager
from animecards.services.users import CredentialStore

from conftest import FLAME_DRAKE, PASSWORD

pytestmark = pytest.mark.anyio


def _auth(db, settings) -> AuthService:
    return AuthService(CredentialStore(db), SessionManager(db, settings))


async def _expire(db, token: str) -> None:
    await db.execute(
        update(AuthSession).where(AuthSession.token == token).values(expires_at=utcnow() - timedelta(minutes=1))
    )


async def test_register_login_and_current_user(db, settings):
    auth = _auth(db, settings)
    user, token = await auth.register("aki", PASSWORD)
    assert user.id is not None
    assert user.password_hash != PASSWORD

    assert (await auth.current_user(token)).id == user.id

    again, second_token = await auth.login("aki", PASSWORD)
    assert again.id == user.id
    assert second_token != token


async def test_login_failures_raise_invalid_credentials(db, settings):
    auth = _auth(db, settings)
    await auth.register("aki", PASSWORD)
    with pytest.raises(InvalidCredentials):
        await auth.login("aki", "wrong-password")
    with pytest.raises(InvalidCredentials):
        await auth.login("Aki", PASSWORD)


async def test_duplicate_registration_conflicts(db, settings):
    auth = _auth(db, settings)
    await auth.register("aki", PASSWORD)
    await db.commit()
    with pytest.raises(Conflict):
        await auth.register("aki", "other-password")
    assert await CredentialStore(db).verify("aki", PASSWORD) is not None


async def test_unique_constraint_race_maps_to_conflict(db, settings, monkeypatch):
    await _auth(db, settings).register("aki", PASSWORD)
    await db.commit()

    store = CredentialStore(db)

    async def missed_lookup(username):
        return None

    # Another request inserted the name between the lookup and the flush
    monkeypatch.setattr(store, "get_by_username", missed_lookup)
    with pytest.raises(Conflict):
        await store.create("aki", "other-password")

    assert await CredentialStore(db).verify("aki", PASSWORD) is not None
    assert await db.scalar(select(func.count()).select_from(User)) == 1


async def test_session_states(db, settings):
    sessions = SessionManager(db, settings)
    user, _ = await _auth(db, settings).register("aki", PASSWORD)

    assert await sessions.resolve(None) is None
    assert await sessions.resolve("never-issued") is None

    token = await sessions.create(user.id)
    assert await sessions.resolve(token) == user.id

    await sessions.destroy(token)
    assert await sessions.resolve(token) is None
    await sessions.destroy(token)

    expiring = await sessions.create(user.id)
    await _expire(db, expiring)
    assert await sessions.resolve(expiring) is None


async def test_purge_removes_only_expired_sessions(db, settings):
    sessions = SessionManager(db, settings)
    user, live = await _auth(db, settings).register("aki", PASSWORD)
    stale = await sessions.create(user.id)
    await _expire(db, stale)

    assert await sessions.purge_expired() == 1
    remaining = (await db.execute(select(AuthSession.token))).scalars().all()
    assert remaining == [live]


async def test_repository_crud(db, settings):
    user, _ = await _auth(db, settings).register("aki", PASSWORD)
    cards = CardRepository(db)

    created = await cards.create(user.id, CardCreate(**FLAME_DRAKE))
    assert created.owner_id == user.id
    assert created.created_at == created.updated_at

    fetched = await cards.get(created.id)
    assert fetched is not None and fetched.name == "Flame Drake"
    assert await cards.get(created.id + 100) is None

    updated = await cards.update(created.id, CardUpdate(name="Ember Drake"))
    assert updated.name == "Ember Drake"
    assert updated.rarity == "legendary"
    assert await cards.update(created.id + 100, CardUpdate()) is None

    assert await cards.delete(created.id) is True
    assert await cards.delete(created.id) is False


async def test_repository_lists_newest_first_per_owner(db, settings):
    auth = _auth(db, settings)
    aki, _ = await auth.register("aki", PASSWORD)
    rei, _ = await auth.register("rei", PASSWORD)
    cards = CardRepository(db)

    older = await cards.create(aki.id, CardCreate(**FLAME_DRAKE))
    newer = await cards.create(aki.id, CardCreate(**{**FLAME_DRAKE, "type": "summon"}))
    await cards.create(rei.id, CardCreate(**FLAME_DRAKE))

    assert [c.id for c in await cards.list_by_owner(aki.id)] == [newer.id, older.id]
    assert [c.id for c in await cards.list_by_owner(aki.id, "summon")] == [newer.id]


async def test_gate_enforces_ownership(db, settings):
    auth = _auth(db, settings)
    aki, _ = await auth.register("aki", PASSWORD)
    rei, _ = await auth.register("rei", PASSWORD)
    gate = AuthorizationGate(CardRepository(db))

    card = await gate.create_card(aki, CardCreate(**FLAME_DRAKE))
    assert card.owner_id == aki.id

    with pytest.raises(Unauthenticated):
        await gate.get_card(None, card.id)
    with pytest.raises(Unauthenticated):
        await gate.list_cards(None)
    with pytest.raises(Forbidden):
        await gate.update_card(rei, card.id, CardUpdate(name="Stolen"))
    with pytest.raises(Forbidden):
        await gate.delete_card(rei, card.id)
    with pytest.raises(NotFound):
        await gate.get_card(aki, card.id + 100)

    assert (await gate.get_card(aki, card.id)).name == "Flame Drake"
    assert await gate.list_cards(rei) == []
    assert await gate.delete_card(aki, card.id) is True
    with pytest.raises(NotFound):
        await gate.delete_card(aki, card.id)


async def test_delete_account_cascades(db, settings):
    auth = _auth(db, settings)
    aki, token = await auth.register("aki", PASSWORD)
    rei, _ = await auth.register("rei", PASSWORD)
    cards = CardRepository(db)
    await cards.create(aki.id, CardCreate(**FLAME_DRAKE))
    kept = await cards.create(rei.id, CardCreate(**FLAME_DRAKE))

    await auth.delete_account(aki)

    assert await auth.current_user(token) is None
    assert await CredentialStore(db).get_by_username("aki") is None
    assert [c.id for c in await cards.list_by_owner(rei.id)] == [kept.id]
    owned = await db.execute(select(func.count()).select_from(AuthSession).where(AuthSession.user_id == aki.id))
    assert owned.scalar_one() == 0
