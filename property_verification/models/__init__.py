"""Data models."""

from property_verification.models.display import Badge, BreakdownRow, DisplayState, FieldRow
from property_verification.models.intake import IntakeResult, UploadedFile
from property_verification.models.rate_limit import RateLimitResult
from property_verification.models.responses import (
    HealthResponse,
    HistoryEntry,
    HistoryResponse,
    PropertySummary,
    ReviewRequest,
    ReviewResponse,
    SubmissionResponse,
)
from property_verification.models.session import SessionContext, UserSession
from property_verification.models.verification import (
    ExtractedData,
    RiskAssessment,
    RiskFactor,
    ValidationDetails,
    ValidationIssue,
    VerificationListItem,
    VerificationListResponse,
    VerificationResult,
)

__all__ = [
    "Badge",
    "BreakdownRow",
    "DisplayState",
    "ExtractedData",
    "FieldRow",
    "HealthResponse",
    "HistoryEntry",
    "HistoryResponse",
    "IntakeResult",
    "PropertySummary",
    "RateLimitResult",
    "ReviewRequest",
    "ReviewResponse",
    "RiskAssessment",
    "RiskFactor",
    "SessionContext",
    "SubmissionResponse",
    "UploadedFile",
    "UserSession",
    "ValidationDetails",
    "ValidationIssue",
    "VerificationListItem",
    "VerificationListResponse",
    "VerificationResult",
]
