"""SearchBusinessesUseCase: relevance-ranked business search.

Business rules:
  1. The free-text term filters on name OR description (same as listing)
  2. Results are ordered by relevance: name matches first, then
     description-only matches, each tier by recency
  3. Without a term the ranking tier is a no-op (plain recency)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from enterprise_hub.domain.common.query import PageSpec, QuerySpec, SortSpec
from enterprise_hub.domain.common.uow import UnitOfWork
from enterprise_hub.domain.marketplace.models import ResultPage, business_filter_spec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchBusinessesQuery:
    term: str | None = None
    category: str | None = None
    location: str | None = None
    page: PageSpec = field(default_factory=PageSpec)

    def to_query_spec(self) -> QuerySpec:
        filters = business_filter_spec(self.category, self.location, self.term)
        return QuerySpec(
            filters=filters,
            sort=SortSpec(field="relevance"),
            page=self.page,
        )


@dataclass(frozen=True)
class SearchBusinessesResult:
    page: ResultPage
    search_term: str | None
    category: str | None
    location: str | None


class SearchBusinessesUseCase:
    """Search active businesses, best name matches first."""

    def execute(
        self, uow: UnitOfWork, query: SearchBusinessesQuery
    ) -> SearchBusinessesResult:
        spec = query.to_query_spec()
        logger.info(
            "Searching businesses: term=%r category=%r location=%r",
            spec.filters.search_term,
            query.category,
            query.location,
        )
        with uow:
            page = uow.businesses.query(spec)

        return SearchBusinessesResult(
            page=page,
            search_term=spec.filters.search_term,
            category=spec.filters.value_of("category"),
            location=spec.filters.value_of("location"),
        )
