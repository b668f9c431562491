"""Verification history repository."""

from sqlalchemy.orm import Session

from property_verification.models.records import VerificationRecord
from property_verification.repositories.base import BaseRepository


class VerificationRepository(BaseRepository[VerificationRecord]):
    """Append-only access to verification_results, always scoped to one user."""

    def __init__(self, db: Session) -> None:
        super().__init__(db, VerificationRecord)

    def list_for_user(self, user_id: str, limit: int = 20) -> list[VerificationRecord]:
        return (
            self.db.query(self.model)
            .filter(self.model.user_id == user_id)
            .order_by(self.model.created_at.desc(), self.model.id.desc())
            .limit(limit)
            .all()
        )

    def get_for_user(self, user_id: str, row_id: int) -> VerificationRecord | None:
        return (
            self.db.query(self.model)
            .filter(self.model.id == row_id, self.model.user_id == user_id)
            .first()
        )
