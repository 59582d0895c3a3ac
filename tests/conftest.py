"""Shared fixtures: a fresh SQLite user store per test."""

import logging
from collections.abc import AsyncGenerator, Iterator
from pathlib import Path

import aiosqlite
import pytest
import pytest_asyncio

from propertymanager.common import Role, User
from propertymanager.users import PasswordHasher, SQLiteUserStore

# lowest cost bcrypt accepts, keeps the suite fast
TEST_BCRYPT_ROUNDS = 4


class PrefixHasher:
    """Deterministic stand-in for PasswordHasher."""

    def hash(self, plaintext: str) -> str:
        return f"hashed:{plaintext}"

    def verify(self, plaintext: str, password_hash: str) -> bool:
        return self.hash(plaintext) == password_hash


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    """Undo logging.basicConfig(force=True) calls made by the code under test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def db_path(tmp_path: Path) -> str:
    return str(tmp_path / "test.db")


@pytest_asyncio.fixture
async def user_store(db_path: str) -> AsyncGenerator[SQLiteUserStore, None]:
    async with aiosqlite.connect(db_path) as connection:
        store = SQLiteUserStore(connection)
        await store.initialize_tables()
        yield store


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def prefix_hasher() -> PrefixHasher:
    return PrefixHasher()


@pytest.fixture
def bob() -> User:
    return User(username="bob", password_hash="hashed:bobpassword", role=Role.USER)
