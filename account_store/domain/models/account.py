"""Account domain model with soft-delete-aware uniqueness.

Username and email are unique only among active rows. The constraint lives
in partial unique indexes so that it holds under concurrent writers, and a
soft-deleted account's username/email can be taken again.
"""

from sqlalchemy import Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from account_store.domain.models.base import BaseEntity


ACTIVE_ROWS = text("deleted_at IS NULL")


class Account(BaseEntity):
    """Account record.

    Attributes:
        id: UUIDv7 primary key assigned at insert
        username: Username, unique among active accounts (case-sensitive)
        email: Email address, unique among active accounts (case-sensitive)
        password_hash: One-way hashed credential, never read back by queries
        profile_picture_url: Optional display field
        bio: Optional display field
        created_at: Entity creation timestamp
        updated_at: Last modification timestamp
        deleted_at: Soft delete timestamp (NULL if active)
    """

    __tablename__ = "accounts"

    username: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Username (unique among active accounts)",
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Email address (unique among active accounts)",
    )
    password_hash: Mapped[str | None] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt hash of the account credential",
    )
    profile_picture_url: Mapped[str | None] = mapped_column(
        String(2048),
        nullable=True,
        comment="Profile picture URL (optional)",
    )
    bio: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Free-form biography (optional)",
    )

    __table_args__ = (
        Index(
            "ux_accounts_username_active",
            "username",
            unique=True,
            postgresql_where=ACTIVE_ROWS,
            sqlite_where=ACTIVE_ROWS,
        ),
        Index(
            "ux_accounts_email_active",
            "email",
            unique=True,
            postgresql_where=ACTIVE_ROWS,
            sqlite_where=ACTIVE_ROWS,
        ),
        # Listing scans active rows in creation order
        Index(
            "ix_accounts_active_created",
            "created_at",
            "id",
            postgresql_where=ACTIVE_ROWS,
            sqlite_where=ACTIVE_ROWS,
        ),
    )

    def __repr__(self) -> str:
        """Generate string representation showing account identification details."""
        return f"<Account(id={self.id}, username={self.username}, email={self.email})>"
