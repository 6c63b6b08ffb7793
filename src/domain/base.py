"""Base classes and column types shared by domain entities"""

from datetime import datetime, timezone
from sqlalchemy import BigInteger, Column, DateTime, Integer
from sqlmodel import SQLModel

# SQLite only autoincrements INTEGER PRIMARY KEY columns
IdentifierType = BigInteger().with_variant(Integer(), "sqlite")


def utc_now() -> datetime:
    """Timezone-aware current time; all stored timestamps are UTC"""
    return datetime.now(timezone.utc)


def timestamp_column(nullable: bool = False) -> Column:
    return Column(DateTime(timezone=True), nullable=nullable)


class BaseModel(SQLModel):
    """Base for all persisted domain entities"""
    pass
