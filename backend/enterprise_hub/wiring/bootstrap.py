"""Dependency injection bootstrap: the single place that binds ports to adapters.

Every factory function here can be used as a FastAPI ``Depends()`` target.
Routers never import concrete implementations directly; they depend on
the abstractions returned by these factories.

Example usage in a router::

    from enterprise_hub.wiring.bootstrap import get_uow, get_list_businesses_use_case

    @router.get("/businesses")
    async def list_businesses(
        uow: SqlUnitOfWork = Depends(get_uow),
        use_case: ListBusinessesUseCase = Depends(get_list_businesses_use_case),
    ):
        result = use_case.execute(uow, query)
"""

from __future__ import annotations

from typing import Callable, Iterator

from enterprise_hub.database import SessionLocal
from enterprise_hub.domain.common.uow import UnitOfWork
from enterprise_hub.infra.db.uow import SqlUnitOfWork
from enterprise_hub.use_cases.marketplace.create_business import CreateBusinessUseCase
from enterprise_hub.use_cases.marketplace.delete_business import DeleteBusinessUseCase
from enterprise_hub.use_cases.marketplace.get_business import GetBusinessUseCase
from enterprise_hub.use_cases.marketplace.get_business_analytics import (
    GetBusinessAnalyticsUseCase,
)
from enterprise_hub.use_cases.marketplace.list_businesses import ListBusinessesUseCase
from enterprise_hub.use_cases.marketplace.search_businesses import SearchBusinessesUseCase
from enterprise_hub.use_cases.marketplace.update_business import UpdateBusinessUseCase


# ── Unit of Work ─────────────────────────────────────────────────────────


def get_uow() -> Iterator[SqlUnitOfWork]:
    """Yield a SqlUnitOfWork bound to SessionLocal.

    Designed for FastAPI Depends()::

        uow: SqlUnitOfWork = Depends(get_uow)
    """
    uow = SqlUnitOfWork(SessionLocal)
    yield uow


def get_uow_factory() -> Callable[[], UnitOfWork]:
    """Return a factory producing a fresh SqlUnitOfWork per call.

    Used where one request needs several independent sessions, e.g.
    concurrent analytics queries.
    """
    return lambda: SqlUnitOfWork(SessionLocal)


# ── Use Cases ────────────────────────────────────────────────────────────


def get_list_businesses_use_case() -> ListBusinessesUseCase:
    return ListBusinessesUseCase()


def get_search_businesses_use_case() -> SearchBusinessesUseCase:
    return SearchBusinessesUseCase()


def get_get_business_use_case() -> GetBusinessUseCase:
    return GetBusinessUseCase()


def get_get_business_analytics_use_case() -> GetBusinessAnalyticsUseCase:
    return GetBusinessAnalyticsUseCase()


def get_create_business_use_case() -> CreateBusinessUseCase:
    return CreateBusinessUseCase()


def get_update_business_use_case() -> UpdateBusinessUseCase:
    return UpdateBusinessUseCase()


def get_delete_business_use_case() -> DeleteBusinessUseCase:
    return DeleteBusinessUseCase()
