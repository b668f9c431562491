"""Data access repositories."""

from property_verification.repositories.audit_log_repo import AuditLogRepository
from property_verification.repositories.property_repo import PropertyRepository
from property_verification.repositories.verification_repo import VerificationRepository

__all__ = ["AuditLogRepository", "PropertyRepository", "VerificationRepository"]
