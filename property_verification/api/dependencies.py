"""Dependency injection providers."""

from collections.abc import Iterator
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Security
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session

from property_verification.core.database import get_db
from property_verification.core.settings import get_settings
from property_verification.enums import UserRole
from property_verification.models import SessionContext, UserSession
from property_verification.services import (
    HistoryService,
    IntakeService,
    PropertyReviewService,
    RateLimitClient,
    SubmissionService,
    VerificationClient,
)

# API key header scheme
api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


@lru_cache
def get_verification_client() -> VerificationClient:
    """
    Get cached verification client singleton.

    Returns:
        VerificationClient: The verification client instance.
    """
    settings = get_settings()
    return VerificationClient(settings.verification)


@lru_cache
def get_rate_limit_client() -> RateLimitClient:
    """
    Get cached rate limit client singleton.

    The in-process limiter keeps its windows on this instance.

    Returns:
        RateLimitClient: The rate limit client instance.
    """
    settings = get_settings()
    return RateLimitClient(settings.rate_limit)


def get_intake_service() -> IntakeService:
    return IntakeService.from_settings(get_settings().verification)


def verify_api_key(api_key: str | None = Security(api_key_header)) -> str | None:
    """
    Verify API key from request header.

    Args:
        api_key: API key from X-API-Key header.

    Returns:
        str | None: The validated API key, or None if auth is disabled.

    Raises:
        HTTPException: 401 if API key is required but missing/invalid.
    """
    settings = get_settings()
    configured_key = settings.api_server.api_key

    if configured_key is None:
        return None

    if api_key is None:
        raise HTTPException(
            status_code=401,
            detail="API key required",
            headers={"WWW-Authenticate": "ApiKey"},
        )

    if api_key != configured_key:
        raise HTTPException(
            status_code=401,
            detail="Invalid API key",
            headers={"WWW-Authenticate": "ApiKey"},
        )

    return api_key


def get_session_context(
    x_user_id: Annotated[str | None, Header()] = None,
    x_user_role: Annotated[str | None, Header()] = None,
) -> Iterator[SessionContext]:
    """
    Build the request's session context from the auth proxy headers.

    The session is signed in for the duration of the request and signed out
    afterwards.

    Args:
        x_user_id: Authenticated user id set by the auth proxy.
        x_user_role: Role of the user (user, agent or admin).

    Yields:
        SessionContext: Context, signed in when a user id is present.

    Raises:
        HTTPException: 400 if the role header is not a known role.
    """
    context = SessionContext()
    if x_user_id:
        try:
            role = UserRole((x_user_role or UserRole.USER).lower())
        except ValueError as e:
            raise HTTPException(status_code=400, detail="Unknown user role") from e
        context.sign_in(user_id=x_user_id, role=role)
    try:
        yield context
    finally:
        context.sign_out()


def get_current_session(
    context: Annotated[SessionContext, Depends(get_session_context)],
) -> UserSession:
    """
    Require an authenticated session.

    Args:
        context (SessionContext): Request session context.

    Returns:
        UserSession: The signed-in user.

    Raises:
        HTTPException: 401 if no user is signed in.
    """
    if not context.is_authenticated:
        raise HTTPException(status_code=401, detail="Authentication required")
    return context.current


def get_history_service(db: Annotated[Session, Depends(get_db)]) -> HistoryService:
    return HistoryService(db, limit=get_settings().verification.history_limit)


def get_property_review_service(
    db: Annotated[Session, Depends(get_db)],
) -> PropertyReviewService:
    return PropertyReviewService(db)


def get_submission_service(
    history: Annotated[HistoryService, Depends(get_history_service)],
    intake: Annotated[IntakeService, Depends(get_intake_service)],
) -> SubmissionService:
    """
    Build a submission service for one request.

    Args:
        history (HistoryService): Request-scoped history service.
        intake (IntakeService): Intake service configured from settings.

    Returns:
        SubmissionService: Submission orchestrator.
    """
    return SubmissionService(
        intake=intake,
        client=get_verification_client(),
        history=history,
        rate_limiter=get_rate_limit_client(),
    )


def clear_dependency_caches() -> None:
    """Clear all dependency caches."""
    get_verification_client.cache_clear()
    get_rate_limit_client.cache_clear()
