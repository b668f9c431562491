"""Tests for API dependencies."""

from unittest.mock import patch

import pytest
from fastapi import HTTPException
from sqlalchemy.orm import Session

from property_verification.api.dependencies import (
    clear_dependency_caches,
    get_current_session,
    get_history_service,
    get_intake_service,
    get_rate_limit_client,
    get_session_context,
    get_submission_service,
    get_verification_client,
    verify_api_key,
)
from property_verification.core.settings import get_settings
from property_verification.enums import UserRole
from property_verification.models import SessionContext
from property_verification.services import (
    HistoryService,
    RateLimitClient,
    SubmissionService,
    VerificationClient,
)


class TestGetVerificationClient:
    """Tests for get_verification_client function."""

    def test_returns_cached_client(self) -> None:
        """
        Test that the client is a cached singleton.

        """
        client = get_verification_client()
        assert isinstance(client, VerificationClient)
        assert get_verification_client() is client

    def test_uses_settings(self) -> None:
        """
        Test that the client is built from the verification settings.

        """
        assert get_verification_client().settings is get_settings().verification


class TestGetRateLimitClient:
    """Tests for get_rate_limit_client function."""

    def test_returns_cached_client(self) -> None:
        """
        Test that the limiter windows live on one instance.

        """
        client = get_rate_limit_client()
        assert isinstance(client, RateLimitClient)
        assert get_rate_limit_client() is client


class TestClearDependencyCaches:
    """Tests for clear_dependency_caches function."""

    def test_clears_caches(self) -> None:
        """
        Test that clearing the caches builds new instances.

        """
        client = get_verification_client()
        limiter = get_rate_limit_client()
        clear_dependency_caches()
        assert get_verification_client() is not client
        assert get_rate_limit_client() is not limiter


class TestServiceProviders:
    """Tests for request-scoped service providers."""

    def test_intake_uses_settings(self) -> None:
        """
        Test that intake limits come from settings.

        """
        intake = get_intake_service()
        assert intake.max_file_size == get_settings().verification.max_file_size

    def test_submission_service_wiring(self, db: Session) -> None:
        """
        Test that the submission service is wired with shared clients.

        """
        history = get_history_service(db)
        service = get_submission_service(history=history, intake=get_intake_service())

        assert isinstance(service, SubmissionService)
        assert isinstance(history, HistoryService)
        assert history.limit == 20
        assert service.history is history
        assert service.client is get_verification_client()
        assert service.rate_limiter is get_rate_limit_client()


class TestVerifyApiKey:
    """Tests for verify_api_key function."""

    def test_disabled_when_unset(self) -> None:
        """
        Test that no configured key disables the check.

        """
        assert verify_api_key(api_key=None) is None

    def test_missing_key(self) -> None:
        """
        Test that a configured key must be provided.

        """
        with patch.object(get_settings().api_server, "api_key", "secret"):
            with pytest.raises(HTTPException) as exc_info:
                verify_api_key(api_key=None)

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "API key required"

    def test_invalid_key(self) -> None:
        """
        Test that a wrong key is rejected.

        """
        with patch.object(get_settings().api_server, "api_key", "secret"):
            with pytest.raises(HTTPException) as exc_info:
                verify_api_key(api_key="wrong")

        assert exc_info.value.detail == "Invalid API key"

    def test_valid_key(self) -> None:
        """
        Test that the configured key is accepted.

        """
        with patch.object(get_settings().api_server, "api_key", "secret"):
            assert verify_api_key(api_key="secret") == "secret"


class TestSessionContextDependency:
    """Tests for get_session_context and get_current_session."""

    def test_signed_in_for_request_then_signed_out(self) -> None:
        """
        Test the per-request sign-in and sign-out lifecycle.

        """
        generator = get_session_context(x_user_id="user-1", x_user_role="Agent")
        context = next(generator)

        assert context.current.user_id == "user-1"
        assert context.current.role is UserRole.AGENT

        with pytest.raises(StopIteration):
            next(generator)
        assert context.current is None

    def test_default_role_is_user(self) -> None:
        """
        Test that a missing role header means a regular user.

        """
        context = next(get_session_context(x_user_id="user-1", x_user_role=None))

        assert context.current.role is UserRole.USER

    def test_no_user_header_is_signed_out(self) -> None:
        """
        Test that no user header yields a signed-out context.

        """
        context = next(get_session_context(x_user_id=None, x_user_role=None))

        assert context.is_authenticated is False

    def test_unknown_role(self) -> None:
        """
        Test that an unknown role header is refused.

        """
        with pytest.raises(HTTPException) as exc_info:
            next(get_session_context(x_user_id="user-1", x_user_role="superuser"))

        assert exc_info.value.status_code == 400

    def test_current_session_requires_sign_in(self) -> None:
        """
        Test that an anonymous request is refused with 401.

        """
        with pytest.raises(HTTPException) as exc_info:
            get_current_session(SessionContext())

        assert exc_info.value.status_code == 401

    def test_current_session_returns_user(self) -> None:
        """
        Test that the signed-in session is returned.

        """
        context = SessionContext()
        session = context.sign_in("user-1")

        assert get_current_session(context) is session
