"""SQLAlchemy records for the persisted tables."""

from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String, Text
from sqlalchemy.types import JSON

from property_verification.core.database import Base
from property_verification.core.utils import utc_now


class VerificationRecord(Base):
    """Flattened, append-only copy of a completed verification."""

    __tablename__ = "verification_results"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, nullable=False, index=True)
    verification_id = Column(String, nullable=False, index=True)

    document_type = Column(String, nullable=False)
    verification_status = Column(String)
    risk_level = Column(String)
    risk_score = Column(Float)
    risk_recommendation = Column(Text)

    extracted_data = Column(JSON)
    validation_details = Column(JSON)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, index=True)

    def __repr__(self) -> str:
        return (
            f"<VerificationRecord id={self.id} verification_id={self.verification_id} "
            f"status={self.verification_status}>"
        )


class PropertyRecord(Base):
    """Property listing awaiting or past admin review."""

    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(String, nullable=False, index=True)
    title = Column(String, nullable=False)

    verification_status = Column(String, nullable=False, default="pending")
    is_published = Column(Boolean, nullable=False, default=False)
    risk_notes = Column(Text)
    verification_id = Column(String)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    def snapshot(self) -> dict:
        """
        Serialize the row for the audit log.

        Returns:
            dict: JSON-safe column values.
        """
        return {
            "id": self.id,
            "owner_id": self.owner_id,
            "title": self.title,
            "verification_status": self.verification_status,
            "is_published": self.is_published,
            "risk_notes": self.risk_notes,
            "verification_id": self.verification_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self) -> str:
        return f"<PropertyRecord id={self.id} status={self.verification_status}>"


class AuditLogRecord(Base):
    """Audit trail entry for admin actions."""

    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, nullable=False, index=True)
    action = Column(String, nullable=False)
    entity_type = Column(String, nullable=False)
    entity_id = Column(String, nullable=False)
    old_data = Column(JSON)
    new_data = Column(JSON)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    def __repr__(self) -> str:
        return f"<AuditLogRecord {self.action} {self.entity_type}:{self.entity_id}>"
