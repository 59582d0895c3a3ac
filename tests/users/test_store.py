"""Tests for the SQLite user store."""

import sqlite3

import pytest

from propertymanager.common import Role, User
from propertymanager.users import SQLiteUserStore


@pytest.mark.asyncio
async def test_empty_store(user_store: SQLiteUserStore) -> None:
    assert await user_store.count_users() == 0
    assert await user_store.find_by_username("admin") is None
    assert not await user_store.exists_by_username("admin")


@pytest.mark.asyncio
async def test_save_assigns_store_fields(
    user_store: SQLiteUserStore,
    bob: User,
) -> None:
    saved = await user_store.save(bob)

    assert saved.id is not None
    assert saved.created_at is not None
    assert saved.username == "bob"
    assert bob.id is None


@pytest.mark.asyncio
async def test_find_by_username(user_store: SQLiteUserStore, bob: User) -> None:
    saved = await user_store.save(bob)

    found = await user_store.find_by_username("bob")

    assert found == saved
    assert found.role is Role.USER
    assert found.enabled is True
    assert await user_store.find_by_username("alice") is None


@pytest.mark.asyncio
async def test_exists_matches_find(user_store: SQLiteUserStore, bob: User) -> None:
    await user_store.save(bob)

    for username in ("bob", "admin", "Bob", ""):
        found = await user_store.find_by_username(username)
        assert await user_store.exists_by_username(username) == (found is not None)


@pytest.mark.asyncio
async def test_usernames_are_case_sensitive(
    user_store: SQLiteUserStore,
    bob: User,
) -> None:
    await user_store.save(bob)

    assert await user_store.exists_by_username("bob")
    assert not await user_store.exists_by_username("BOB")


@pytest.mark.asyncio
async def test_disabled_user_round_trips(user_store: SQLiteUserStore) -> None:
    await user_store.save(
        User(username="dave", password_hash="h", role=Role.ADMIN, enabled=False),
    )

    found = await user_store.find_by_username("dave")

    assert found is not None
    assert found.enabled is False
    assert found.role is Role.ADMIN


@pytest.mark.asyncio
async def test_duplicate_username_raises(
    user_store: SQLiteUserStore,
    bob: User,
) -> None:
    await user_store.save(bob)

    with pytest.raises(sqlite3.IntegrityError):
        await user_store.save(User(username="bob", password_hash="other"))

    assert await user_store.count_users() == 1
    found = await user_store.find_by_username("bob")
    assert found is not None
    assert found.password_hash == bob.password_hash


@pytest.mark.asyncio
async def test_initialize_tables_is_idempotent(
    user_store: SQLiteUserStore,
    bob: User,
) -> None:
    await user_store.save(bob)
    await user_store.initialize_tables()

    assert await user_store.count_users() == 1


@pytest.mark.asyncio
async def test_unknown_role_label_is_kept(user_store: SQLiteUserStore) -> None:
    await user_store.connection.execute(
        "INSERT INTO users (username, password_hash, role, enabled) VALUES (?, ?, ?, ?)",
        ("tina", "h", "TENANT", 1),
    )
    await user_store.connection.commit()

    found = await user_store.find_by_username("tina")

    assert await user_store.exists_by_username("tina")
    assert found is not None
    assert found.username == "tina"
    assert found.role == "TENANT"
    assert not isinstance(found.role, Role)


@pytest.mark.asyncio
async def test_unknown_role_label_round_trips(user_store: SQLiteUserStore) -> None:
    await user_store.save(User(username="tina", password_hash="h", role="TENANT"))

    found = await user_store.find_by_username("tina")

    assert found is not None
    assert found.role == "TENANT"
