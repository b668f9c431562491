"""History service - persists completed verifications and rebuilds them for display."""

import logging

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from property_verification.enums import DocumentType, RiskColor, RiskLevel, VerificationStatus
from property_verification.models import (
    ExtractedData,
    HistoryEntry,
    RiskAssessment,
    ValidationDetails,
    VerificationResult,
)
from property_verification.models.records import VerificationRecord
from property_verification.repositories import VerificationRepository
from property_verification.services.rendering import render_result

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 20


def build_record(
    user_id: str,
    document_type: DocumentType,
    result: VerificationResult,
) -> VerificationRecord:
    """
    Flatten a result into a history row.

    Args:
        user_id (str): Owner of the row.
        document_type (DocumentType): Document type chosen at submission.
        result (VerificationResult): Completed verification.

    Returns:
        VerificationRecord: Unsaved row.
    """
    risk = result.risk_assessment
    return VerificationRecord(
        user_id=user_id,
        verification_id=result.verification_id,
        document_type=str(document_type),
        verification_status=str(result.verification_status),
        risk_level=str(risk.risk_level),
        risk_score=risk.total_score,
        risk_recommendation=risk.recommendation or None,
        extracted_data=result.extracted_data.model_dump(mode="json", exclude_none=True),
        validation_details=(
            result.validation_details.model_dump(mode="json")
            if result.validation_details is not None
            else None
        ),
    )


def _color_for(level: str) -> RiskColor:
    if level == RiskLevel.LOW:
        return RiskColor.GREEN
    if level == RiskLevel.HIGH:
        return RiskColor.RED
    return RiskColor.YELLOW


def reconstruct_result(record: VerificationRecord) -> VerificationResult:
    """
    Rebuild a result from a history row.

    Stored status and level strings are upper-cased since older rows were
    written with differing case. A missing status becomes PENDING and
    missing risk fields default to MEDIUM with a score of 0.

    Args:
        record (VerificationRecord): Persisted row.

    Returns:
        VerificationResult: Result shaped like the original.
    """
    status = (record.verification_status or "").upper() or VerificationStatus.PENDING
    level = (record.risk_level or "").upper() or RiskLevel.MEDIUM
    score = record.risk_score if record.risk_score is not None else 0

    validation_details = None
    if record.validation_details:
        try:
            validation_details = ValidationDetails.model_validate(record.validation_details)
        except ValidationError as e:
            logger.warning(f"Ignoring malformed validation details on row {record.id}: {e}")

    extracted_data = ExtractedData()
    if isinstance(record.extracted_data, dict):
        extracted_data = ExtractedData.model_validate(
            {
                k: v
                for k, v in record.extracted_data.items()
                if isinstance(v, (str, int, float)) and not isinstance(v, bool)
            }
        )

    return VerificationResult(
        success=True,
        verification_id=record.verification_id,
        verification_status=status,
        risk_assessment=RiskAssessment(
            total_score=max(0, min(100, score)),
            risk_level=level,
            color=_color_for(level),
            recommendation=record.risk_recommendation or None,
        ),
        extracted_data=extracted_data,
        validation_details=validation_details,
        created_at=record.created_at,
    )


class HistoryService:
    """Reads and writes the caller's verification history."""

    def __init__(self, db: Session, limit: int = HISTORY_LIMIT) -> None:
        """
        Initialize the history service.

        Args:
            db (Session): Database session.
            limit (int): Maximum rows returned by a listing.
        """
        self.db = db
        self.limit = limit
        self.repo = VerificationRepository(db)

    def save(
        self,
        user_id: str,
        document_type: DocumentType,
        result: VerificationResult,
    ) -> bool:
        """
        Write one history row for a completed verification.

        Best-effort: a failed write is logged and rolled back, never raised,
        since losing a history row must not hide the result from the user.

        Args:
            user_id (str): Owner of the row.
            document_type (DocumentType): Document type chosen at submission.
            result (VerificationResult): Completed verification.

        Returns:
            bool: True if the row was committed.
        """
        try:
            record = self.repo.create(build_record(user_id, document_type, result))
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(
                f"Failed to save verification {result.verification_id} for user {user_id}"
            )
            return False

        logger.info(f"Saved verification {result.verification_id} as history row {record.id}")
        return True

    def list_records(self, user_id: str) -> list[VerificationRecord]:
        return self.repo.list_for_user(user_id, limit=self.limit)

    def list_entries(self, user_id: str) -> list[HistoryEntry]:
        """
        List the caller's history, most recent first.

        Args:
            user_id (str): Authenticated caller.

        Returns:
            list[HistoryEntry]: Up to `limit` rebuilt and rendered entries.
        """
        return [self.to_entry(record) for record in self.list_records(user_id)]

    def get_entry(self, user_id: str, row_id: int) -> HistoryEntry | None:
        """
        Get one of the caller's rows.

        Args:
            user_id (str): Authenticated caller.
            row_id (int): Internal row id.

        Returns:
            HistoryEntry | None: The entry, or None if absent or owned by someone else.
        """
        record = self.repo.get_for_user(user_id, row_id)
        if record is None:
            return None
        return self.to_entry(record)

    @staticmethod
    def to_entry(record: VerificationRecord) -> HistoryEntry:
        result = reconstruct_result(record)
        return HistoryEntry(
            id=record.id,
            document_type=record.document_type,
            created_at=record.created_at,
            result=result,
            display=render_result(result),
        )
