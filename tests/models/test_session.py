"""Tests for the session context."""

import pytest
from pydantic import ValidationError

from property_verification.core.exceptions import PermissionDeniedError
from property_verification.enums import UserRole
from property_verification.models import SessionContext, UserSession


class TestUserSession:
    """Tests for UserSession model."""

    def test_defaults_to_user_role(self) -> None:
        """
        Test that the default role is user.

        """
        session = UserSession(user_id="user-1")
        assert session.role is UserRole.USER
        assert session.signed_in_at.tzinfo is not None

    def test_is_frozen(self) -> None:
        """
        Test that a session cannot be modified.

        """
        session = UserSession(user_id="user-1")
        with pytest.raises(ValidationError):
            session.role = UserRole.ADMIN

    def test_empty_user_id_raises(self) -> None:
        """
        Test that a user id is required.

        """
        with pytest.raises(ValidationError):
            UserSession(user_id="")


class TestSessionContext:
    """Tests for SessionContext."""

    def test_starts_signed_out(self) -> None:
        """
        Test that a new context has no session.

        """
        context = SessionContext()
        assert context.current is None
        assert context.is_authenticated is False

    def test_sign_in_and_out(self) -> None:
        """
        Test the sign-in / sign-out lifecycle.

        """
        context = SessionContext()
        session = context.sign_in("user-1", UserRole.AGENT)

        assert context.current is session
        assert context.is_authenticated is True
        assert session.role is UserRole.AGENT

        context.sign_out()
        assert context.current is None

    def test_sign_in_replaces_session(self) -> None:
        """
        Test that signing in again refreshes the session.

        """
        context = SessionContext()
        context.sign_in("user-1")
        context.sign_in("user-2")
        assert context.current.user_id == "user-2"

    def test_require_when_signed_out(self) -> None:
        """
        Test that require raises without a session.

        """
        with pytest.raises(PermissionDeniedError, match="Authentication required"):
            SessionContext().require()

    def test_require_role_mismatch(self) -> None:
        """
        Test that require enforces the role.

        """
        context = SessionContext()
        context.sign_in("user-1", UserRole.USER)

        with pytest.raises(PermissionDeniedError, match="admin access required"):
            context.require(UserRole.ADMIN)

    def test_require_role_match(self) -> None:
        """
        Test that require returns the session on a role match.

        """
        context = SessionContext()
        context.sign_in("admin-1", UserRole.ADMIN)
        assert context.require(UserRole.ADMIN).user_id == "admin-1"
