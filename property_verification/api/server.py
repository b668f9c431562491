"""FastAPI application server."""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware

from property_verification import __version__
from property_verification.api.dependencies import (
    get_current_session,
    get_history_service,
    get_property_review_service,
    get_session_context,
    get_submission_service,
    get_verification_client,
    verify_api_key,
)
from property_verification.core.database import init_db
from property_verification.core.exceptions import (
    FileValidationError,
    InvalidReviewActionError,
    PermissionDeniedError,
    PropertyNotFoundError,
    RateLimitExceededError,
    SubmissionInProgressError,
    VerificationAPIError,
    VerificationConfigError,
    VerificationServiceError,
    VerificationTransportError,
)
from property_verification.core.settings import get_settings
from property_verification.core.utils import setup_logging
from property_verification.enums import DocumentType
from property_verification.models import (
    HealthResponse,
    HistoryEntry,
    HistoryResponse,
    PropertySummary,
    ReviewRequest,
    ReviewResponse,
    SessionContext,
    SubmissionResponse,
    UploadedFile,
    UserSession,
    VerificationResult,
)
from property_verification.services import (
    HistoryService,
    PropertyReviewService,
    SubmissionService,
    VerificationClient,
)

logger = logging.getLogger(__name__)

# Rate limiter instance
limiter = Limiter(key_func=get_remote_address)

ERROR_STATUS_CODES: dict[type[VerificationServiceError], int] = {
    FileValidationError: 422,
    VerificationTransportError: 502,
    VerificationAPIError: 502,
    VerificationConfigError: 503,
    SubmissionInProgressError: 409,
    RateLimitExceededError: 429,
    PermissionDeniedError: 403,
    PropertyNotFoundError: 404,
    InvalidReviewActionError: 400,
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Add security headers to response."""
        response = await call_next(request)
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if request.headers.get("X-Forwarded-Proto") == "https":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """Handle rate limit exceeded errors."""
    return JSONResponse(
        status_code=429,
        content={"detail": "Rate limit exceeded. Please try again later."},
    )


def service_error_handler(request: Request, exc: VerificationServiceError) -> Response:
    """
    Map domain errors to HTTP responses.

    Args:
        request (Request): The failed request.
        exc (VerificationServiceError): The domain error.

    Returns:
        Response: JSON error with the error message as detail.
    """
    status_code = ERROR_STATUS_CODES.get(type(exc), 500)
    content: dict[str, object] = {"detail": exc.message}
    headers = {}

    if isinstance(exc, FileValidationError):
        content["reason"] = exc.reason
        content["reasons"] = exc.reasons
    if isinstance(exc, RateLimitExceededError):
        headers["Retry-After"] = str(exc.retry_after)

    return JSONResponse(status_code=status_code, content=content, headers=headers)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan manager.

    Args:
        app (FastAPI): The FastAPI application instance.

    Yields:
        None
    """
    settings = get_settings()

    setup_logging(settings=settings.logging)

    logger.info(f"Starting Property Verification Service v{__version__}")

    init_db()

    client = get_verification_client()
    if client.demo_mode:
        if settings.verification.allow_demo_mode:
            logger.warning(
                "Verification API URL is not configured: DEMO MODE, "
                "submissions return mock results"
            )
        else:
            logger.error(
                "Verification API URL is not configured and demo mode is disabled; "
                "submissions will fail"
            )
    elif await client.check_health():
        logger.info(f"Verification service available at {client.base_url}")
    else:
        logger.warning(f"Verification service at {client.base_url} is not responding")

    yield

    logger.info("Shutting down Property Verification Service")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Property Verification Service",
        description="Submit property legal documents for verification and review the history",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]
    app.add_exception_handler(VerificationServiceError, service_error_handler)  # type: ignore[arg-type]

    app.add_middleware(SecurityHeadersMiddleware)

    if settings.api_server.cors_allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api_server.cors_allow_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    return app


app = create_app()


@app.get("/", include_in_schema=False)
async def index() -> dict[str, str]:
    """
    Service banner.

    Returns:
        dict[str, str]: Service name and docs link.
    """
    return {"message": "Property Verification Service", "docs": "/docs"}


@app.get("/health", response_model=HealthResponse)
async def health_check(
    client: Annotated[VerificationClient, Depends(get_verification_client)],
) -> HealthResponse:
    """
    Health check endpoint (no auth required).

    Returns:
        HealthResponse: Health status, demo mode flag and upstream availability.
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        demo_mode=client.demo_mode,
        verification_service_available=await client.check_health(),
    )


@app.post("/api/v1/verify", response_model=SubmissionResponse)
@limiter.limit(lambda: get_settings().api_server.rate_limit)
async def verify_document(
    request: Request,
    file: Annotated[UploadFile, File(description="Certificate image or PDF")],
    document_type: Annotated[DocumentType, Form(description="Document type")],
    session: Annotated[UserSession, Depends(get_current_session)],
    service: Annotated[SubmissionService, Depends(get_submission_service)],
    _api_key: Annotated[str | None, Depends(verify_api_key)],
) -> SubmissionResponse:
    """
    Verify a property document.

    The file is validated locally, sent to the verification service (or the
    mock generator in demo mode), stored in the caller's history and
    rendered.

    Args:
        request (Request): The request object (required for rate limiting).
        file (UploadFile): Certificate image or PDF.
        document_type (DocumentType): SHM, SHGB, AJB, IMB, PBB or GIRIK.
        session (UserSession): Authenticated caller.
        service (SubmissionService): Injected submission service.

    Returns:
        SubmissionResponse: Result, display state and persistence flag.
    """
    content = await file.read()
    upload = UploadedFile(
        filename=file.filename or "document",
        content_type=file.content_type or "application/octet-stream",
        size=len(content),
        content=content,
    )
    return await service.submit(upload, document_type, session)


@app.get("/api/v1/verify/{verification_id}", response_model=VerificationResult)
async def get_verification(
    verification_id: str,
    client: Annotated[VerificationClient, Depends(get_verification_client)],
    _session: Annotated[UserSession, Depends(get_current_session)],
    _api_key: Annotated[str | None, Depends(verify_api_key)],
) -> VerificationResult:
    """
    Look up a verification on the external service.

    Returns:
        VerificationResult: The stored result.
    """
    return await client.get_verification(verification_id)


@app.get("/api/v1/history", response_model=HistoryResponse)
async def list_history(
    session: Annotated[UserSession, Depends(get_current_session)],
    history: Annotated[HistoryService, Depends(get_history_service)],
) -> HistoryResponse:
    """
    List the caller's most recent verifications.

    Returns:
        HistoryResponse: Up to the configured limit, most recent first.
    """
    return HistoryResponse(items=history.list_entries(session.user_id), limit=history.limit)


@app.get("/api/v1/history/{row_id}", response_model=HistoryEntry)
async def get_history_entry(
    row_id: int,
    session: Annotated[UserSession, Depends(get_current_session)],
    history: Annotated[HistoryService, Depends(get_history_service)],
) -> HistoryEntry:
    """
    Get one of the caller's verifications.

    Returns:
        HistoryEntry: The rebuilt and rendered entry.
    """
    entry = history.get_entry(session.user_id, row_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Verification not found")
    return entry


@app.post("/api/v1/admin/properties/{property_id}/review", response_model=ReviewResponse)
async def review_property(
    property_id: int,
    body: ReviewRequest,
    context: Annotated[SessionContext, Depends(get_session_context)],
    _session: Annotated[UserSession, Depends(get_current_session)],
    service: Annotated[PropertyReviewService, Depends(get_property_review_service)],
    _api_key: Annotated[str | None, Depends(verify_api_key)],
) -> ReviewResponse:
    """
    Approve or reject a property listing (admin only).

    Returns:
        ReviewResponse: The updated listing.
    """
    listing = service.review(context, property_id, body.action, body.notes)
    verb = "approved" if body.action == "approve" else "rejected"
    return ReviewResponse(
        success=True,
        property=PropertySummary.model_validate(listing),
        message=f"Property {verb} successfully",
    )
