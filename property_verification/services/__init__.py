"""Business logic services."""

from property_verification.services.history_service import (
    HistoryService,
    build_record,
    reconstruct_result,
)
from property_verification.services.intake_service import IntakeService, format_file_size
from property_verification.services.mock_verification import MockVerificationGenerator
from property_verification.services.progress import SimulatedProgress
from property_verification.services.property_review_service import PropertyReviewService
from property_verification.services.rate_limit_client import (
    LocalRateLimiter,
    RateLimitClient,
)
from property_verification.services.rendering import render_result, risk_badge, status_badge
from property_verification.services.submission_service import SubmissionService
from property_verification.services.verification_client import VerificationClient

__all__ = [
    "LocalRateLimiter",
    "HistoryService",
    "IntakeService",
    "MockVerificationGenerator",
    "PropertyReviewService",
    "RateLimitClient",
    "SimulatedProgress",
    "SubmissionService",
    "VerificationClient",
    "build_record",
    "format_file_size",
    "reconstruct_result",
    "render_result",
    "risk_badge",
    "status_badge",
]
