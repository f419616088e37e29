from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, MetaData, String, Text
from sqlalchemy.orm import declarative_base

# Define naming conventions for constraints and indexes
# https://alembic.sqlalchemy.org/en/latest/naming.html
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)
Base = declarative_base(metadata=metadata)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserPrototypeRecord(Base):
    """One finalized prototype per user; saving again replaces the previous one."""
    __tablename__ = "user_prototypes"

    user_id = Column(String(128), primary_key=True)
    traits = Column(JSON, nullable=False)
    archetype_blend = Column(JSON, nullable=False)
    voice_profile = Column(JSON, nullable=False)
    selected_value_ids = Column(JSON, nullable=False)
    selected_inspiration_ids = Column(JSON, nullable=False)
    future_self = Column(Text, nullable=True)
    primary_archetype = Column(String(32), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<UserPrototypeRecord(user_id='{self.user_id}', primary='{self.primary_archetype}')>"
