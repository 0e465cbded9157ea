"""
Base module for SQLAlchemy models.
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy import MetaData, Column, DateTime, String, func
from sqlalchemy.orm import declarative_base, declared_attr

# Define naming convention for constraints
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}

# Create metadata with naming convention
db_metadata = MetaData(naming_convention=convention)

# Create base model class
Base = declarative_base(metadata=db_metadata)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class CreatedAtMixin:
    @declared_attr
    def created_at(cls):
        return Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False, index=True)


class TimestampMixin(CreatedAtMixin):
    @declared_attr
    def updated_at(cls):
        return Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False)


class UUIDMixin:
    # Identifiers come from the auth provider as strings, so keep them textual
    @declared_attr
    def id(cls):
        return Column(String(36), primary_key=True, default=new_id)
