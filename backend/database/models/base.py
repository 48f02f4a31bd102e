from __future__ import annotations
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import MetaData
from sqlalchemy import DateTime, func, UUID
import uuid
from datetime import datetime

# Define custom naming conventions for indexes and constraints
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Create metadata with the naming convention
metadata_obj = MetaData(naming_convention=convention)

class BaseModel(DeclarativeBase):
    """
    Base class for SQLAlchemy models using DeclarativeBase with type hints.
    Includes default metadata with naming conventions.
    """
    metadata = metadata_obj

    __abstract__ = True

    # Common columns: store-assigned identity and store-managed timestamps
    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
