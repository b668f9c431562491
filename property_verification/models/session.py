"""Authenticated session context."""

import logging
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from property_verification.core.exceptions import PermissionDeniedError
from property_verification.core.utils import utc_now
from property_verification.enums import UserRole

logger = logging.getLogger(__name__)


class UserSession(BaseModel):
    """The signed-in user as asserted by the auth provider."""

    user_id: str = Field(min_length=1, description="Auth provider user id")
    role: UserRole = Field(default=UserRole.USER, description="User role")
    signed_in_at: datetime = Field(default_factory=utc_now)

    model_config = ConfigDict(frozen=True)


class SessionContext:
    """Holds the current session with an explicit sign-in / sign-out lifecycle."""

    def __init__(self) -> None:
        self._session: UserSession | None = None

    @property
    def current(self) -> UserSession | None:
        """
        Get the current session.

        Returns:
            UserSession | None: The session, or None when signed out.
        """
        return self._session

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    def sign_in(self, user_id: str, role: UserRole = UserRole.USER) -> UserSession:
        """
        Start or refresh the session.

        Args:
            user_id (str): Auth provider user id.
            role (UserRole): Role of the user.

        Returns:
            UserSession: The new session.
        """
        self._session = UserSession(user_id=user_id, role=role)
        logger.debug(f"Session started for user {user_id} ({role})")
        return self._session

    def sign_out(self) -> None:
        """End the session."""
        if self._session is not None:
            logger.debug(f"Session ended for user {self._session.user_id}")
        self._session = None

    def require(self, role: UserRole | None = None) -> UserSession:
        """
        Get the current session, enforcing an optional role.

        Args:
            role (UserRole | None): Role required, if any.

        Returns:
            UserSession: The current session.

        Raises:
            PermissionDeniedError: If signed out or the role does not match.
        """
        if not self.is_authenticated:
            raise PermissionDeniedError("Authentication required")
        if role is not None and self._session.role != role:
            raise PermissionDeniedError(f"Forbidden: {role} access required")
        return self._session
