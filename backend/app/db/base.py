"""
Ann Investment Portal - SQLAlchemy Base
Declarative base shared by accounts and ledger entries
"""
import re
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, Integer
from sqlalchemy.orm import declarative_base, declared_attr


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseModelMixin:
    """
    Mixin providing id and audit timestamps.
    created_at is written once on insert and never updated.
    """

    @declared_attr
    def __tablename__(cls) -> str:
        """Generate table name from class name (snake_case)"""
        return re.sub(r'(?<!^)(?=[A-Z])', '_', cls.__name__).lower()

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


Base = declarative_base(cls=BaseModelMixin)
