"""Common data models for the application."""

from .user import Role, User

__all__ = ["Role", "User"]
