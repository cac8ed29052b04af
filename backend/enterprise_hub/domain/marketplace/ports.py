"""Ports (abstract interfaces) for the marketplace domain.

These define WHAT the domain needs from the outside world without
specifying HOW it's provided.  Concrete implementations live in infra/.

Note: No infrastructure types (Session, Engine) appear here.
Repositories receive their session through the UnitOfWork,
not through method parameters.
"""

from __future__ import annotations

import abc
from datetime import datetime

from enterprise_hub.domain.common.query import QuerySpec

from .models import (
    BusinessDetail,
    BusinessSummary,
    DailyOrderCount,
    OrderTotals,
    ResultPage,
    StatusCount,
    TopProduct,
)


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------


class BusinessRepository(abc.ABC):
    """Read aggregated business listings and write business records."""

    @abc.abstractmethod
    def query(self, spec: QuerySpec) -> ResultPage:
        """Return a filtered, sorted page of active businesses.

        The page's ``total`` comes from a count over the same filters
        as the returned rows.
        """
        ...

    @abc.abstractmethod
    def get_detail(self, business_id: int, *, review_limit: int) -> BusinessDetail | None:
        """Return the aggregate row with available products and recent reviews.

        Returns ``None`` when the business does not exist or is inactive.
        """
        ...

    @abc.abstractmethod
    def get_summary(self, business_id: int) -> BusinessSummary | None:
        """Return the aggregate row of an active business, or None."""
        ...

    @abc.abstractmethod
    def get_owner_id(self, business_id: int) -> int | None:
        """Owner of an active business, or None when it doesn't exist."""
        ...

    @abc.abstractmethod
    def has_active_business(self, owner_id: int) -> bool:
        ...

    @abc.abstractmethod
    def create(self, *, owner_id: int, **fields) -> int:
        """Insert an active business and return its id."""
        ...

    @abc.abstractmethod
    def update(self, business_id: int, **fields) -> None:
        """Overwrite only the given fields and refresh ``updated_at``."""
        ...

    @abc.abstractmethod
    def deactivate(self, business_id: int) -> None:
        """Soft delete: clear ``is_active`` and refresh ``updated_at``."""
        ...


class OrderAnalyticsRepository(abc.ABC):
    """Aggregate queries over a business's order history.

    Each method is an independent query so callers may run them
    concurrently on separate sessions.
    """

    @abc.abstractmethod
    def totals(self, business_id: int) -> OrderTotals:
        ...

    @abc.abstractmethod
    def status_breakdown(self, business_id: int) -> tuple[StatusCount, ...]:
        """One entry per observed status; absent statuses are not zero-filled."""
        ...

    @abc.abstractmethod
    def top_products(self, business_id: int, limit: int) -> tuple[TopProduct, ...]:
        """Best sellers by summed quantity, ties broken by product id."""
        ...

    @abc.abstractmethod
    def daily_orders(
        self, business_id: int, *, since: datetime, until: datetime
    ) -> tuple[DailyOrderCount, ...]:
        """Orders per calendar day in ``[since, until]``, ascending, no empty days."""
        ...


class UserRepository(abc.ABC):
    """Look up marketplace users."""

    @abc.abstractmethod
    def exists(self, user_id: int) -> bool:
        ...
