"""Verification status enums."""

from enum import StrEnum


class VerificationStatus(StrEnum):
    """Outcome of a document verification."""

    VERIFIED = "VERIFIED"
    NEEDS_REVIEW = "NEEDS_REVIEW"
    REJECTED = "REJECTED"
    # Only produced when reconstructing incomplete history rows
    PENDING = "PENDING"


class PropertyStatus(StrEnum):
    """Admin review state of a property listing."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ReviewAction(StrEnum):
    """Action an admin can take on a property listing."""

    APPROVE = "approve"
    REJECT = "reject"
