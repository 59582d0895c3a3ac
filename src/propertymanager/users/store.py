"""Persistence for user accounts.

``UserStore`` is the contract the user service depends on;
``SQLiteUserStore`` implements it on an aiosqlite connection.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Protocol

from propertymanager.common import Role, User

if TYPE_CHECKING:
    from aiosqlite import Connection

LOGGER = logging.getLogger(__name__)


class UserStore(Protocol):
    """Lookup and persistence operations for users keyed by username."""

    async def find_by_username(self, username: str) -> User | None: ...

    async def exists_by_username(self, username: str) -> bool: ...

    async def save(self, user: User) -> User: ...


class SQLiteUserStore:
    """Repository for user accounts in SQLite."""

    CREATE_USERS_TABLE = """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT NOT NULL UNIQUE,
            password_hash TEXT NOT NULL,
            role TEXT NOT NULL,
            enabled INTEGER NOT NULL DEFAULT 1,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """

    COUNT_USERS = """SELECT COUNT(*) FROM users;"""

    GET_USER_BY_USERNAME = """
        SELECT id, username, password_hash, role, enabled, created_at
        FROM users WHERE username = ?;
        """

    GET_USER_BY_ID = """
        SELECT id, username, password_hash, role, enabled, created_at
        FROM users WHERE id = ?;
        """

    USERNAME_EXISTS = """
        SELECT EXISTS(SELECT 1 FROM users WHERE username = ?);
        """

    ADD_USER = """
        INSERT INTO users (username, password_hash, role, enabled) VALUES (?, ?, ?, ?);
        """

    def __init__(self, connection: Connection) -> None:
        self.connection = connection

    async def initialize_tables(self) -> None:
        """Create the users table if it does not exist.

        This method should be called during application startup.
        """
        await self.connection.execute(SQLiteUserStore.CREATE_USERS_TABLE)
        await self.connection.commit()
        LOGGER.debug("Users table initialized")

    async def count_users(self) -> int:
        """Return the number of users in the users table.

        :return: Number of users
        """
        async with self.connection.execute(SQLiteUserStore.COUNT_USERS) as cursor:
            row = await cursor.fetchone()
        return row[0] if row else 0

    async def find_by_username(self, username: str) -> User | None:
        """Look up a user by username.

        :param username: The username to look up
        :return: The stored User, or None if no such user exists
        """
        async with self.connection.execute(
            SQLiteUserStore.GET_USER_BY_USERNAME,
            (username,),
        ) as cursor:
            row = await cursor.fetchone()
        return _row_to_user(row) if row else None

    async def exists_by_username(self, username: str) -> bool:
        """Check whether a user with the given username is stored.

        :param username: The username to check
        :return: True if the user exists, False otherwise
        """
        async with self.connection.execute(
            SQLiteUserStore.USERNAME_EXISTS,
            (username,),
        ) as cursor:
            row = await cursor.fetchone()
        return bool(row and row[0])

    async def save(self, user: User) -> User:
        """Insert a new user.

        :param user: The user to persist
        :return: A copy of the user with ``id`` and ``created_at`` assigned
        :raises sqlite3.IntegrityError: If the username is already taken
        """
        try:
            cursor = await self.connection.execute(
                SQLiteUserStore.ADD_USER,
                (user.username, user.password_hash, str(user.role), int(user.enabled)),
            )
            user_id = cursor.lastrowid
            await cursor.close()
            await self.connection.commit()
        except Exception:
            await self.connection.rollback()
            LOGGER.error("Error saving user %s", user.username)
            raise

        async with self.connection.execute(
            SQLiteUserStore.GET_USER_BY_ID,
            (user_id,),
        ) as cursor:
            row = await cursor.fetchone()
        return replace(user, id=row[0], created_at=row[5])


def _row_to_user(row: tuple) -> User:
    user_id, username, password_hash, role, enabled, created_at = row
    return User(
        username=username,
        password_hash=password_hash,
        role=Role.parse(role),
        enabled=bool(enabled),
        id=user_id,
        created_at=created_at,
    )
