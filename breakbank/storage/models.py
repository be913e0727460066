"""SQLAlchemy ORM models for BreakBank."""

from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class Record(Base):
    """A JSON document stored under a string key.

    The timer keeps exactly one row (``pomodoroData``) and rewrites it
    wholesale on every save.
    """

    __tablename__ = "records"

    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, nullable=False, default=datetime.now)

    def __repr__(self) -> str:
        return f"<Record key={self.key} updated_at={self.updated_at}>"
