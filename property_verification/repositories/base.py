"""Generic base repository."""

from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from property_verification.core.database import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """Thin data-access layer over SQLAlchemy.

    Repositories only add and flush; the caller decides when to commit or
    roll back.
    """

    def __init__(self, db: Session, model: type[T]) -> None:
        self.db = db
        self.model = model

    def get(self, id: int) -> T | None:
        return self.db.get(self.model, id)

    def create(self, obj: T) -> T:
        """Add object to session and assign its id (caller must commit)."""
        self.db.add(obj)
        self.db.flush()
        return obj

    def update(self, obj: T) -> T:
        """Flush pending changes on an attached object (caller must commit)."""
        self.db.flush()
        return obj
