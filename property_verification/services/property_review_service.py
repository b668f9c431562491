"""Property review service - admin approval of property listings."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from property_verification.core.exceptions import (
    InvalidReviewActionError,
    PropertyNotFoundError,
)
from property_verification.core.utils import utc_now
from property_verification.enums import PropertyStatus, ReviewAction, UserRole
from property_verification.models import SessionContext
from property_verification.models.records import AuditLogRecord, PropertyRecord
from property_verification.repositories import AuditLogRepository, PropertyRepository

logger = logging.getLogger(__name__)


class PropertyReviewService:
    """Approves or rejects property listings and records an audit trail."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.properties = PropertyRepository(db)
        self.audit_logs = AuditLogRepository(db)

    def review(
        self,
        context: SessionContext,
        property_id: int,
        action: ReviewAction | str,
        notes: str | None = None,
    ) -> PropertyRecord:
        """
        Apply an admin decision to a property listing.

        Approving publishes the listing; rejecting unpublishes it. The audit
        entry is best-effort and never fails the review.

        Args:
            context (SessionContext): Session of the reviewing admin.
            property_id (int): Listing to review.
            action (ReviewAction | str): approve or reject.
            notes (str | None): Risk notes stored on the listing.

        Returns:
            PropertyRecord: The updated listing.

        Raises:
            PermissionDeniedError: If the session is not an admin.
            InvalidReviewActionError: If action is not approve or reject.
            PropertyNotFoundError: If the listing does not exist.
        """
        admin = context.require(UserRole.ADMIN)

        try:
            review_action = ReviewAction(action)
        except ValueError as e:
            raise InvalidReviewActionError(
                'Invalid action. Must be "approve" or "reject"'
            ) from e

        listing = self.properties.get(property_id)
        if listing is None:
            raise PropertyNotFoundError("Property not found")

        old_data = listing.snapshot()
        approved = review_action == ReviewAction.APPROVE

        listing.verification_status = str(
            PropertyStatus.APPROVED if approved else PropertyStatus.REJECTED
        )
        listing.is_published = approved
        listing.updated_at = utc_now()
        if notes:
            listing.risk_notes = notes

        logger.info(f"Processing {review_action} for property {property_id} by admin {admin.user_id}")
        self.properties.update(listing)
        self.db.commit()

        self._audit(
            user_id=admin.user_id,
            action="APPROVE" if approved else "REJECT",
            entity_id=str(property_id),
            old_data=old_data,
            new_data=listing.snapshot(),
        )
        return listing

    def _audit(
        self,
        user_id: str,
        action: str,
        entity_id: str,
        old_data: dict,
        new_data: dict,
    ) -> None:
        try:
            self.audit_logs.create(
                AuditLogRecord(
                    user_id=user_id,
                    action=action,
                    entity_type="property",
                    entity_id=entity_id,
                    old_data=old_data,
                    new_data=new_data,
                )
            )
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Audit log error for property {entity_id}")
