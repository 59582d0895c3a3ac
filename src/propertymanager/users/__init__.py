"""User accounts: storage, password hashing, lookups and admin bootstrap."""

from .hasher import PasswordHasher
from .routes import configure_users_router
from .service import AdminAccountConfig, UserService
from .store import SQLiteUserStore, UserStore

__all__ = [
    "AdminAccountConfig",
    "PasswordHasher",
    "SQLiteUserStore",
    "UserService",
    "UserStore",
    "configure_users_router",
]
