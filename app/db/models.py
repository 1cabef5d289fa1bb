from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text
from app.db.postgres import Base


class KeyValueEntry(Base):
    """
    Durable key-value slot.
    Each key holds one serialized document (e.g. the whole survey record list).
    """
    __tablename__ = "kv_store"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
