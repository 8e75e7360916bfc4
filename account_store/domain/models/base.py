"""Base entity classes for domain models with soft delete support.

This module defines the foundational entity classes used across all domain models,
providing common fields (ID, timestamps) and soft delete functionality.
"""

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import DateTime, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from uuid_extension import uuid7


class Base(DeclarativeBase):
    """Declarative base for all SQLAlchemy ORM models."""


class BaseEntity(Base):
    """Base entity with time-ordered UUIDs and soft delete capabilities.

    All domain entities inherit from this class, gaining:
    - UUIDv7 primary keys, generated when the row is inserted
    - Automatic timestamp tracking (created_at, updated_at)
    - Soft delete support (deleted_at)

    The generic ``Uuid`` type is used so the same model runs on PostgreSQL
    (native UUID) and SQLite (CHAR(32)).

    Note:
        This is an abstract class. Inherit from it to create concrete entity models.
    """

    __abstract__ = True

    id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid7,
        comment="Primary key using UUIDv7 for time-ordered identifiers",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
        comment="Timestamp of entity creation",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
        comment="Timestamp of last modification",
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
        comment="Soft delete timestamp (NULL if active, set when deleted)",
    )

    @property
    def is_deleted(self) -> bool:
        """Check whether entity is soft-deleted.

        Returns:
            True if entity has been soft-deleted, False otherwise
        """
        return self.deleted_at is not None

    def __repr__(self) -> str:
        """Generate string representation showing entity type, ID, and deletion status."""
        status = "deleted" if self.is_deleted else "active"
        return f"<{self.__class__.__name__}(id={self.id}, status={status})>"
