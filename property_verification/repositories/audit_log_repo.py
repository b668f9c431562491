"""Audit log repository."""

from sqlalchemy.orm import Session

from property_verification.models.records import AuditLogRecord
from property_verification.repositories.base import BaseRepository


class AuditLogRepository(BaseRepository[AuditLogRecord]):
    def __init__(self, db: Session) -> None:
        super().__init__(db, AuditLogRecord)
