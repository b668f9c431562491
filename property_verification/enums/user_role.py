"""User role enum."""

from enum import StrEnum


class UserRole(StrEnum):
    """Role of the signed-in user."""

    USER = "user"
    AGENT = "agent"
    ADMIN = "admin"
