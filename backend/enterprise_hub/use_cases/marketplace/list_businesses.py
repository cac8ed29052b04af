"""ListBusinessesUseCase: paginated, filtered listing of active businesses.

Rows are ordered by recency unless the caller asks otherwise; the
returned ResultPage carries the count of *all* matching businesses so
the caller can build pagination metadata.

The use case depends ONLY on domain ports, never on SQLAlchemy,
FastAPI, or any other infrastructure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from enterprise_hub.domain.common.query import QuerySpec
from enterprise_hub.domain.common.uow import UnitOfWork
from enterprise_hub.domain.marketplace.models import ResultPage

logger = logging.getLogger(__name__)


# ── Query (input) ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class ListBusinessesQuery:
    """Immutable value object describing what the caller wants to read."""

    query_spec: QuerySpec = field(default_factory=QuerySpec)


# ── Result (output) ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class ListBusinessesResult:
    """What the use case returns to the caller."""

    page: ResultPage


# ── Use Case ────────────────────────────────────────────────────────────


class ListBusinessesUseCase:
    """Retrieve a filtered, sorted, paginated page of businesses."""

    def execute(
        self, uow: UnitOfWork, query: ListBusinessesQuery
    ) -> ListBusinessesResult:
        with uow:
            page = uow.businesses.query(query.query_spec)

        logger.debug(
            "Listed %d of %d businesses (page %d)",
            len(page.items),
            page.total,
            page.page,
        )
        return ListBusinessesResult(page=page)
