"""Response and request models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from property_verification.enums import DocumentType, ReviewAction
from property_verification.models.display import DisplayState
from property_verification.models.verification import VerificationResult


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Health status")
    version: str = Field(description="Application version")
    demo_mode: bool = Field(description="True when no verification endpoint is configured")
    verification_service_available: bool = Field(
        description="Whether the verification endpoint answered its health probe"
    )

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "status": "healthy",
                "version": "1.0.0",
                "demo_mode": False,
                "verification_service_available": True,
            }
        },
    )


class SubmissionResponse(BaseModel):
    """Result of a document submission."""

    document_type: DocumentType = Field(description="Document type chosen at submission")
    result: VerificationResult = Field(description="Verification result")
    display: DisplayState = Field(description="Rendered display state")
    persisted: bool = Field(description="Whether the history row was written")
    preview: str | None = Field(
        default=None, description="data URL preview of an image upload (None for PDFs)"
    )


class HistoryEntry(BaseModel):
    """A history row rebuilt into a result and rendered."""

    id: int = Field(description="Internal row id")
    document_type: str = Field(description="Document type at submission")
    created_at: datetime = Field(description="Submission time")
    result: VerificationResult
    display: DisplayState


class HistoryResponse(BaseModel):
    """The caller's most recent verifications."""

    items: list[HistoryEntry] = Field(default_factory=list)
    limit: int = Field(description="Maximum rows returned")


class ReviewRequest(BaseModel):
    """Admin review of a property listing."""

    action: ReviewAction = Field(description="approve or reject")
    notes: str | None = Field(default=None, max_length=2000, description="Risk notes")

    model_config = ConfigDict(extra="forbid")


class PropertySummary(BaseModel):
    """Property listing fields relevant to review."""

    id: int
    title: str
    verification_status: str
    is_published: bool
    risk_notes: str | None = None
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReviewResponse(BaseModel):
    """Outcome of an admin review."""

    success: bool
    property: PropertySummary
    message: str
