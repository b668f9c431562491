"""Enumerations."""

from property_verification.enums.document_type import DOCUMENT_TYPE_NAMES, DocumentType
from property_verification.enums.rate_limit_action import RateLimitAction
from property_verification.enums.risk_level import RiskColor, RiskLevel
from property_verification.enums.tone import Tone
from property_verification.enums.user_role import UserRole
from property_verification.enums.verification_status import (
    PropertyStatus,
    ReviewAction,
    VerificationStatus,
)

__all__ = [
    "DOCUMENT_TYPE_NAMES",
    "DocumentType",
    "PropertyStatus",
    "RateLimitAction",
    "ReviewAction",
    "RiskColor",
    "RiskLevel",
    "Tone",
    "UserRole",
    "VerificationStatus",
]
