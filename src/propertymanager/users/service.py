"""User lookups and the default administrator bootstrap."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from propertymanager.common import Role, User

if TYPE_CHECKING:
    from .hasher import PasswordHasher
    from .store import UserStore

LOGGER = logging.getLogger(__name__)


@dataclass
class AdminAccountConfig:
    """Credentials for the administrator account created at startup.

    :param str username: Username of the default administrator
    :param str password: Plaintext password, hashed before it is stored
    :param Role role: Role given to the account
    """

    DEFAULT_USERNAME = "admin"
    DEFAULT_PASSWORD = "sergioadmin"  # noqa: S105

    username: str = DEFAULT_USERNAME
    password: str = DEFAULT_PASSWORD
    role: Role = Role.ADMIN

    def __post_init__(self) -> None:
        """Validate the account settings."""
        if not self.username:
            msg = "Default admin username must not be empty"
            raise ValueError(msg)
        if not self.password:
            msg = "Default admin password must not be empty"
            raise ValueError(msg)
        self.role = Role(self.role)

    @property
    def uses_default_password(self) -> bool:
        """Whether the built-in default password is configured."""
        return self.password == self.DEFAULT_PASSWORD


class UserService:
    """Service over the user store.

    :param store: Persistence for user accounts
    :param hasher: Password hasher used for new accounts
    :param admin: Default administrator settings
    """

    def __init__(
        self,
        store: UserStore,
        hasher: PasswordHasher,
        admin: AdminAccountConfig | None = None,
    ) -> None:
        self.store = store
        self.hasher = hasher
        self.admin = admin if admin is not None else AdminAccountConfig()

    async def find_by_username(self, username: str) -> User | None:
        """Return the stored user with this username, or None."""
        return await self.store.find_by_username(username)

    async def user_exists(self, username: str) -> bool:
        """Return True if a user with this username is stored."""
        return await self.store.exists_by_username(username)

    async def create_default_admin_user(self) -> User | None:
        """Create the default administrator unless it already exists.

        Safe to call on every startup. Store and hasher errors propagate.

        :return: The newly saved user, or None if the account already existed
        """
        username = self.admin.username
        if await self.user_exists(username):
            LOGGER.debug("Default admin user %s already exists", username)
            return None

        if self.admin.uses_default_password:
            LOGGER.warning(
                "Creating default admin user %s with the built-in default password",
                username,
            )

        admin_user = User(
            username=username,
            password_hash=self.hasher.hash(self.admin.password),
            role=self.admin.role,
            enabled=True,
        )
        saved = await self.store.save(admin_user)
        LOGGER.info("Default admin user %s created", username)
        return saved
