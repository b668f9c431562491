"""Property listing repository."""

from sqlalchemy.orm import Session

from property_verification.models.records import PropertyRecord
from property_verification.repositories.base import BaseRepository


class PropertyRepository(BaseRepository[PropertyRecord]):
    def __init__(self, db: Session) -> None:
        super().__init__(db, PropertyRecord)
