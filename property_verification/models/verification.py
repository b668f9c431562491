"""Verification result models.

These mirror the JSON returned by the external verification service. Status
and risk level accept unknown strings so that a surprising upstream value is
rendered as neutral instead of failing the whole submission.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from property_verification.core.utils import utc_now
from property_verification.enums import DocumentType, RiskColor, RiskLevel, VerificationStatus


class RiskFactor(BaseModel):
    """One scored factor of the risk breakdown."""

    score: float = Field(description="Points awarded for this factor")
    max: float = Field(description="Maximum points for this factor")
    detail: str = Field(default="", description="Explanation of the score")

    model_config = ConfigDict(extra="ignore")


class RiskAssessment(BaseModel):
    """Risk score and level assigned by the verification service."""

    total_score: float = Field(ge=0, le=100, description="Total trust score (0-100)")
    risk_level: RiskLevel | str = Field(
        union_mode="left_to_right", description="Risk tier: LOW, MEDIUM or HIGH"
    )
    color: RiskColor | str | None = Field(
        default=None, union_mode="left_to_right", description="Color hint: green, yellow or red"
    )
    recommendation: str | None = Field(default=None, description="Recommended next step")
    breakdown: dict[str, RiskFactor] | None = Field(
        default=None, description="Per-factor scores, in the order returned by the service"
    )

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "total_score": 85,
                "risk_level": "LOW",
                "color": "green",
                "recommendation": "Dokumen terlihat valid. Tetap lakukan verifikasi fisik.",
                "breakdown": {
                    "ocr_quality": {"score": 18, "max": 20, "detail": "OCR confidence: 92%"},
                },
            }
        },
    )


class ExtractedData(BaseModel):
    """Sparse record of fields read from the document. Every field may be missing."""

    owner_name: str | None = Field(default=None, description="Registered owner name")
    certificate_number: str | None = Field(default=None, description="Certificate number")
    certificate_type: str | None = Field(default=None, description="Certificate type code")
    address: str | None = Field(default=None, description="Property address")
    land_area: str | None = Field(default=None, description="Land area as printed")
    kelurahan: str | None = Field(default=None, description="Village / urban ward")
    kecamatan: str | None = Field(default=None, description="District")
    kabupaten: str | None = Field(default=None, description="Regency / city")
    provinsi: str | None = Field(default=None, description="Province")
    nib: str | None = Field(default=None, description="Land parcel identification number")
    nop: str | None = Field(default=None, description="Tax object number")

    model_config = ConfigDict(
        extra="allow",
        coerce_numbers_to_str=True,
        json_schema_extra={
            "example": {
                "owner_name": "BUDI SANTOSO",
                "certificate_number": "SHM/2024/12345",
                "address": "Jl. Merdeka No. 123",
                "land_area": "250 m²",
            }
        },
    )

    def get(self, name: str) -> str | None:
        """
        Read a field by name, returning None when absent.

        Args:
            name (str): Field name, declared or extra.

        Returns:
            str | None: The field value if present.
        """
        return getattr(self, name, None)

    def present_fields(self) -> dict[str, Any]:
        """
        Get only the fields that carry a value.

        Returns:
            dict[str, Any]: Field name to value for non-empty fields, extras included.
        """
        return {k: v for k, v in self.model_dump().items() if v not in (None, "")}


class ValidationIssue(BaseModel):
    """A single validation error or warning."""

    field: str | None = Field(default=None, description="Field the issue refers to")
    code: str | None = Field(default=None, description="Machine readable issue code")
    message: str = Field(description="Human readable message")

    model_config = ConfigDict(extra="ignore")


class ValidationDetails(BaseModel):
    """Rule checks run by the verification service."""

    is_valid: bool | None = Field(default=None, description="Overall validity")
    checks_passed: list[str] = Field(default_factory=list, description="Names of passed checks")
    errors: list[ValidationIssue] = Field(default_factory=list, description="Validation errors")
    warnings: list[ValidationIssue] = Field(default_factory=list, description="Warnings")
    critical_errors: list[ValidationIssue] = Field(
        default_factory=list, description="Errors that invalidate the document"
    )
    total_checks: int | None = Field(default=None, description="Number of checks run")
    passed_checks: int | None = Field(default=None, description="Number of checks passed")

    model_config = ConfigDict(extra="ignore")


class VerificationResult(BaseModel):
    """Result of verifying one document."""

    success: bool = Field(default=True, description="Whether the service completed")
    verification_id: str = Field(min_length=1, description="Identifier assigned by the service")
    verification_status: VerificationStatus | str = Field(
        union_mode="left_to_right", description="VERIFIED, NEEDS_REVIEW, REJECTED or PENDING"
    )
    risk_assessment: RiskAssessment = Field(description="Risk score and level")
    extracted_data: ExtractedData = Field(
        default_factory=ExtractedData, description="Fields read from the document"
    )
    validation_details: ValidationDetails | None = Field(
        default=None, description="Rule check details"
    )
    created_at: datetime = Field(default_factory=utc_now, description="Creation timestamp")
    error: str | None = Field(default=None, description="Error message from the service")
    demo_mode: bool = Field(
        default=False, description="True when produced by the local mock generator"
    )

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "success": True,
                "verification_id": "VER-20250101-AB12CD34",
                "verification_status": "VERIFIED",
                "risk_assessment": {"total_score": 85, "risk_level": "LOW", "color": "green"},
                "extracted_data": {"owner_name": "BUDI SANTOSO"},
                "created_at": "2025-01-01T00:00:00Z",
                "demo_mode": False,
            }
        },
    )


class VerificationListItem(BaseModel):
    """Summary row from the remote verification listing."""

    verification_id: str = Field(description="Identifier assigned by the service")
    document_type: DocumentType | str = Field(union_mode="left_to_right")
    verification_status: VerificationStatus | str = Field(union_mode="left_to_right")
    risk_level: RiskLevel | str = Field(union_mode="left_to_right")
    risk_score: float = Field(description="Total trust score")
    created_at: datetime = Field(description="Creation timestamp")

    model_config = ConfigDict(extra="ignore")


class VerificationListResponse(BaseModel):
    """Page of the remote verification listing."""

    total: int = Field(description="Total verifications known to the service")
    items: list[VerificationListItem] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")
