import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from services.prototype_engine.models import PrototypeEngineError, UserPrototype
from src.db.models import UserPrototypeRecord

logger = logging.getLogger(__name__)


class StorageError(PrototypeEngineError):
    """Persisting or loading a prototype failed."""
    pass


class PrototypeStore:
    """
    Load/save contract for finalized prototypes. A save writes the whole record
    in one transaction; on failure nothing is written.
    """

    def __init__(self, db: Session):
        self.db = db

    def save(self, prototype: UserPrototype) -> UserPrototype:
        record = prototype.to_record()
        logger.info(f"Storing prototype for user '{prototype.user_id}'.")
        try:
            row = self.db.get(UserPrototypeRecord, prototype.user_id)
            if row is None:
                row = UserPrototypeRecord(user_id=prototype.user_id, created_at=prototype.created_at)
                self.db.add(row)
            row.traits = record["traits"]
            row.archetype_blend = record["archetypeBlend"]
            row.voice_profile = record["voiceProfile"]
            row.selected_value_ids = record["selectedValueIds"]
            row.selected_inspiration_ids = record["selectedInspirationIds"]
            row.future_self = record.get("futureSelf")
            row.primary_archetype = record["archetypeBlend"]["primary"]
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to store prototype for user '{prototype.user_id}': {e}", exc_info=True)
            raise StorageError(f"Could not store prototype for user '{prototype.user_id}'") from e
        return prototype

    def get(self, user_id: str) -> Optional[UserPrototype]:
        try:
            row = self.db.get(UserPrototypeRecord, user_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load prototype for user '{user_id}': {e}", exc_info=True)
            raise StorageError(f"Could not load prototype for user '{user_id}'") from e
        if row is None:
            return None
        return UserPrototype.from_record(row_to_record(row), created_at=row.created_at)

    def delete(self, user_id: str) -> bool:
        try:
            row = self.db.get(UserPrototypeRecord, user_id)
            if row is None:
                return False
            self.db.delete(row)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to delete prototype for user '{user_id}': {e}", exc_info=True)
            raise StorageError(f"Could not delete prototype for user '{user_id}'") from e
        logger.info(f"Deleted prototype for user '{user_id}'.")
        return True


def row_to_record(row: UserPrototypeRecord) -> dict:
    record = {
        "userId": row.user_id,
        "traits": row.traits,
        "archetypeBlend": row.archetype_blend,
        "voiceProfile": row.voice_profile,
        "selectedValueIds": row.selected_value_ids,
        "selectedInspirationIds": row.selected_inspiration_ids,
    }
    if row.future_self:
        record["futureSelf"] = row.future_self
    return record
