"""GetBusinessAnalyticsUseCase: order analytics report for one business.

Business rules:
  1. Verify the business exists and is active (raise EntityNotFoundError)
  2. Compute four independent aggregates over its order history:
     totals, status breakdown, top products, daily counts for the
     trailing window ending at ``as_of``
  3. The aggregates run concurrently, each in its own thread and its
     own Unit of Work (sessions are never shared across threads)
  4. If any aggregate fails the whole report fails; partial reports
     are never returned
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, TypeVar

from enterprise_hub.domain.common.errors import EntityNotFoundError
from enterprise_hub.domain.common.uow import UnitOfWork
from enterprise_hub.domain.marketplace.models import AnalyticsReport
from enterprise_hub.domain.marketplace.ports import OrderAnalyticsRepository
from enterprise_hub.models import utcnow

logger = logging.getLogger(__name__)

T = TypeVar("T")

UowFactory = Callable[[], UnitOfWork]


@dataclass(frozen=True)
class GetBusinessAnalyticsQuery:
    business_id: int
    as_of: datetime | None = None
    window_days: int = 30
    top_products_limit: int = 5

    def __post_init__(self) -> None:
        if self.window_days < 1:
            raise ValueError(f"window_days must be >= 1, got {self.window_days}")
        if self.top_products_limit < 1:
            raise ValueError(
                f"top_products_limit must be >= 1, got {self.top_products_limit}"
            )


@dataclass(frozen=True)
class GetBusinessAnalyticsResult:
    report: AnalyticsReport


class GetBusinessAnalyticsUseCase:
    """Scatter-gather the four order aggregates into one report."""

    async def execute(
        self, uow_factory: UowFactory, query: GetBusinessAnalyticsQuery
    ) -> GetBusinessAnalyticsResult:
        business_id = query.business_id

        exists = await asyncio.to_thread(self._business_exists, uow_factory, business_id)
        if not exists:
            raise EntityNotFoundError("Business", business_id)

        until = query.as_of or utcnow()
        since = until - timedelta(days=query.window_days)

        logger.info(
            "Business %s: computing analytics (window %s .. %s)",
            business_id,
            since.isoformat(),
            until.isoformat(),
        )

        # gather() re-raises the first failure, so the report is all or nothing.
        totals, statuses, top_products, daily = await asyncio.gather(
            self._run(uow_factory, lambda repo: repo.totals(business_id)),
            self._run(uow_factory, lambda repo: repo.status_breakdown(business_id)),
            self._run(
                uow_factory,
                lambda repo: repo.top_products(business_id, query.top_products_limit),
            ),
            self._run(
                uow_factory,
                lambda repo: repo.daily_orders(business_id, since=since, until=until),
            ),
        )

        return GetBusinessAnalyticsResult(
            report=AnalyticsReport(
                business_id=business_id,
                totals=totals,
                orders_by_status=statuses,
                top_products=top_products,
                orders_per_day=daily,
            )
        )

    @staticmethod
    def _business_exists(uow_factory: UowFactory, business_id: int) -> bool:
        with uow_factory() as uow:
            return uow.businesses.get_owner_id(business_id) is not None

    @staticmethod
    async def _run(
        uow_factory: UowFactory,
        fetch: Callable[[OrderAnalyticsRepository], T],
    ) -> T:
        def _work() -> T:
            with uow_factory() as uow:
                return fetch(uow.order_analytics)

        return await asyncio.to_thread(_work)
