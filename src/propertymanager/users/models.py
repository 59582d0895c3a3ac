"""Models for user lookup responses."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from propertymanager.common import Role

if TYPE_CHECKING:
    from propertymanager.common import User


class UserResponse(BaseModel):
    """Public view of a stored user; the password hash is never included."""

    username: str
    role: Role | str
    enabled: bool
    created_at: str | None = None

    @classmethod
    def from_user(cls, user: User) -> UserResponse:
        """Create UserResponse from a stored User.

        :param user: User instance
        :return: UserResponse instance
        """
        return cls(
            username=user.username,
            role=user.role,
            enabled=user.enabled,
            created_at=user.created_at,
        )


class UserExistsResponse(BaseModel):
    """Whether a user with the given username is stored."""

    username: str
    exists: bool
