"""Tests for data access repositories."""

from datetime import timedelta

from sqlalchemy.orm import Session

from property_verification.core.utils import utc_now
from property_verification.models.records import (
    AuditLogRecord,
    PropertyRecord,
    VerificationRecord,
)
from property_verification.repositories import (
    AuditLogRepository,
    PropertyRepository,
    VerificationRepository,
)


def _record(user_id: str, verification_id: str, minutes_ago: int = 0) -> VerificationRecord:
    return VerificationRecord(
        user_id=user_id,
        verification_id=verification_id,
        document_type="SHM",
        verification_status="VERIFIED",
        risk_level="LOW",
        risk_score=85,
        created_at=utc_now() - timedelta(minutes=minutes_ago),
    )


class TestBaseRepository:
    """Tests for shared repository behaviour."""

    def test_create_assigns_id_without_commit(self, db: Session) -> None:
        """Test that create flushes and leaves the commit to the caller."""
        repo = PropertyRepository(db)

        listing = repo.create(PropertyRecord(owner_id="user-1", title="Rumah Kemang"))

        assert listing.id is not None
        assert db.query(PropertyRecord).count() == 1
        db.rollback()
        assert db.query(PropertyRecord).count() == 0

    def test_get_missing(self, db: Session) -> None:
        """Test that an unknown id returns None."""
        assert PropertyRepository(db).get(42) is None

    def test_update_flushes(self, db: Session, pending_property: PropertyRecord) -> None:
        """Test that update flushes attribute changes."""
        repo = PropertyRepository(db)
        pending_property.title = "Rumah Menteng Baru"

        repo.update(pending_property)

        assert repo.get(pending_property.id).title == "Rumah Menteng Baru"


class TestVerificationRepository:
    """Tests for VerificationRepository."""

    def test_list_most_recent_first(self, db: Session) -> None:
        """Test ordering and the row limit."""
        repo = VerificationRepository(db)
        for i in range(3):
            repo.create(_record("user-1", f"VER-{i}", minutes_ago=i))
        db.commit()

        rows = repo.list_for_user("user-1", limit=2)

        assert [row.verification_id for row in rows] == ["VER-0", "VER-1"]

    def test_scoped_to_user(self, db: Session) -> None:
        """Test that lookups never cross users."""
        repo = VerificationRepository(db)
        row = repo.create(_record("user-1", "VER-1"))
        repo.create(_record("user-2", "VER-2"))
        db.commit()

        assert len(repo.list_for_user("user-1")) == 1
        assert repo.get_for_user("user-1", row.id) is row
        assert repo.get_for_user("user-2", row.id) is None


class TestAuditLogRepository:
    """Tests for AuditLogRepository."""

    def test_create_keeps_snapshots(self, db: Session) -> None:
        """Test that before and after snapshots are stored as JSON."""
        repo = AuditLogRepository(db)
        log = repo.create(
            AuditLogRecord(
                user_id="admin-1",
                action="APPROVE",
                entity_type="property",
                entity_id="1",
                old_data={"verification_status": "pending"},
                new_data={"verification_status": "approved"},
            )
        )
        db.commit()
        db.expire_all()

        stored = repo.get(log.id)
        assert stored.old_data == {"verification_status": "pending"}
        assert stored.new_data == {"verification_status": "approved"}
        assert stored.created_at is not None
