"""Parameterized statement construction for the accounts table.

All statements are SQLAlchemy Core constructs, so every value is sent as a
bound parameter. Read and RETURNING clauses project ``PUBLIC_COLUMNS`` only;
the stored credential hash is written but never selected.

Example:
    builder = AccountQueryBuilder()
    stmt = builder.select_active(filters={"username": "alice"}, offset=0, limit=10)
    rows = (await conn.execute(stmt)).mappings().all()
"""

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from sqlalchemy import Insert, Select, Table, Update, and_, insert, or_, select, update

from account_store.domain.models.account import Account


TABLE: Table = Account.__table__  # type: ignore[assignment]

PUBLIC_COLUMNS = tuple(column for column in TABLE.columns if column.name != "password_hash")
PUBLIC_FIELDS = frozenset(column.name for column in PUBLIC_COLUMNS)

INSERTABLE_FIELDS = frozenset({"username", "email", "password_hash", "profile_picture_url", "bio"})
MUTABLE_FIELDS = frozenset({"username", "email", "profile_picture_url", "bio"})


class AccountQueryBuilder:
    """Builds select/insert/update/delete statements with dynamic predicates.

    Builder methods raise ``ValueError`` for unknown columns; the record
    store reports that as a store failure.
    """

    def __init__(self, table: Table = TABLE) -> None:
        self._table = table

    def _column(self, name: str) -> Any:
        try:
            return self._table.c[name]
        except KeyError as e:
            raise ValueError(f"Unknown column: {name}") from e

    def _active(self) -> Any:
        return self._table.c.deleted_at.is_(None)

    def _equality(self, filters: Mapping[str, Any] | None) -> list[Any]:
        """Translate ``{column: value}`` into equality predicates."""
        if not filters:
            return []
        predicates = []
        for name, value in filters.items():
            column = self._column(name)
            predicates.append(column.is_(None) if value is None else column == value)
        return predicates

    def select_active(
        self,
        filters: Mapping[str, Any] | None = None,
        offset: int | None = None,
        limit: int | None = None,
    ) -> Select[Any]:
        """Select active accounts in creation order.

        Args:
            filters: Equality filters keyed by column name
            offset: Rows to skip
            limit: Maximum rows to return

        Returns:
            SELECT statement over public columns
        """
        stmt = (
            select(*PUBLIC_COLUMNS)
            .where(and_(self._active(), *self._equality(filters)))
            .order_by(self._table.c.created_at, self._table.c.id)
        )
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return stmt

    def select_by_id(self, id: UUID) -> Select[Any]:
        """Select one active account by identifier."""
        return self.select_active(filters={"id": id}, limit=1)

    def select_identity_conflict(
        self,
        username: str,
        email: str,
        exclude_id: UUID | None = None,
    ) -> Select[Any]:
        """Select the id of an active account holding ``username`` or ``email``.

        Args:
            username: Username to check (exact match)
            email: Email to check (exact match)
            exclude_id: Identifier to leave out, for updates

        Returns:
            SELECT statement returning at most one id
        """
        c = self._table.c
        predicates = [self._active(), or_(c.username == username, c.email == email)]
        if exclude_id is not None:
            predicates.append(c.id != exclude_id)
        return select(c.id).where(and_(*predicates)).limit(1)

    def insert(self, values: Mapping[str, Any]) -> Insert:
        """Insert a new account, returning its public columns.

        Identifier and timestamps come from column defaults, so any
        caller-supplied value for them is rejected here.
        """
        unknown = set(values) - INSERTABLE_FIELDS
        if unknown:
            raise ValueError(f"Columns not insertable: {sorted(unknown)}")
        return insert(self._table).values(**values).returning(*PUBLIC_COLUMNS)

    def update_active(self, id: UUID, values: Mapping[str, Any]) -> Update:
        """Update mutable fields of an active account.

        ``updated_at`` is always refreshed. The statement returns the public
        columns of the updated row, or nothing when no active row matched.
        """
        unknown = set(values) - MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Columns not updatable: {sorted(unknown)}")
        c = self._table.c
        return (
            update(self._table)
            .where(and_(c.id == id, self._active()))
            .values(**values, updated_at=datetime.now(UTC))
            .returning(*PUBLIC_COLUMNS)
        )

    def soft_delete(self, id: UUID, deleted_at: datetime | None = None) -> Update:
        """Mark an active account as deleted."""
        c = self._table.c
        return (
            update(self._table)
            .where(and_(c.id == id, self._active()))
            .values(deleted_at=deleted_at or datetime.now(UTC))
        )
