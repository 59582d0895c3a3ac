"""Fundamental user data model for app."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Role(StrEnum):
    """Role labels stored alongside each user.

    Other parts of the application may store labels outside this set;
    those are kept as plain strings.
    """

    ADMIN = "ADMIN"
    USER = "USER"

    @classmethod
    def parse(cls, label: str) -> Role | str:
        """Return the matching Role, or the label unchanged if it is unknown.

        :param label: Role label as stored
        :return: A Role member for known labels, otherwise the label itself
        """
        try:
            return cls(label)
        except ValueError:
            return label


@dataclass
class User:
    """Data structure representing a stored user account.

    ``id`` and ``created_at`` are assigned by the store on save.
    """

    username: str
    password_hash: str
    role: Role | str = Role.USER
    enabled: bool = True
    id: int | None = None
    created_at: str | None = None
