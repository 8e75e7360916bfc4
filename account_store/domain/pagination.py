"""Offset pagination for account listings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from account_store.infrastructure.constants import PaginationDefaults


def _positive_int(value: Any, default: int) -> int:
    """Coerce a raw page parameter, falling back to ``default``.

    Accepts ints and numeric strings (as they arrive from query strings).
    Anything missing, non-numeric or below 1 yields the default.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return default
    if isinstance(value, float) and not value.is_integer():
        return default
    return number if number >= 1 else default


@dataclass(frozen=True)
class PageRequest:
    """Normalized page request.

    There is no upper bound on ``page_size``: the store executes whatever
    size is requested.
    """

    page: int = PaginationDefaults.DEFAULT_PAGE
    page_size: int = PaginationDefaults.DEFAULT_PAGE_SIZE

    @classmethod
    def from_params(cls, page: Any = None, page_size: Any = None) -> PageRequest:
        """Build a page request from raw caller input.

        Args:
            page: 1-based page number (defaults to 1 if absent or invalid)
            page_size: Items per page (defaults to 10 if absent or invalid)

        Returns:
            Normalized PageRequest

        Example:
            >>> PageRequest.from_params("2", 0)
            PageRequest(page=2, page_size=10)
        """
        return cls(
            page=_positive_int(page, PaginationDefaults.DEFAULT_PAGE),
            page_size=_positive_int(page_size, PaginationDefaults.DEFAULT_PAGE_SIZE),
        )

    @property
    def offset(self) -> int:
        """Number of active rows to skip."""
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        """Maximum number of rows to return."""
        return self.page_size
