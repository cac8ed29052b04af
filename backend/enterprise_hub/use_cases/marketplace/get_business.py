"""GetBusinessUseCase: one business with its products and recent reviews.

Business rules:
  1. Only active businesses are visible
  2. Embedded products are the available ones, newest first
  3. At most ``review_limit`` reviews, newest first
  4. Raise EntityNotFoundError when the business is missing or inactive
"""

from __future__ import annotations

from dataclasses import dataclass

from enterprise_hub.domain.common.errors import EntityNotFoundError
from enterprise_hub.domain.common.uow import UnitOfWork
from enterprise_hub.domain.marketplace.models import BusinessDetail


@dataclass(frozen=True)
class GetBusinessQuery:
    business_id: int
    review_limit: int = 10

    def __post_init__(self) -> None:
        if self.review_limit < 1:
            raise ValueError(f"review_limit must be >= 1, got {self.review_limit}")


@dataclass(frozen=True)
class GetBusinessResult:
    detail: BusinessDetail


class GetBusinessUseCase:
    """Retrieve a single business aggregate by id."""

    def execute(self, uow: UnitOfWork, query: GetBusinessQuery) -> GetBusinessResult:
        with uow:
            detail = uow.businesses.get_detail(
                query.business_id, review_limit=query.review_limit
            )

        if detail is None:
            raise EntityNotFoundError("Business", query.business_id)
        return GetBusinessResult(detail=detail)
