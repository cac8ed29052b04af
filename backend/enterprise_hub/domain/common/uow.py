"""Unit of Work port.

Use cases open a UoW with ``with uow:`` and read/write through the
repositories it exposes; all of them share one transaction.
"""

from __future__ import annotations

import abc
from typing import Self

from enterprise_hub.domain.marketplace.ports import (
    BusinessRepository,
    OrderAnalyticsRepository,
    UserRepository,
)


class UnitOfWork(abc.ABC):
    """Transactional boundary exposing the marketplace repositories."""

    businesses: BusinessRepository
    order_analytics: OrderAnalyticsRepository
    users: UserRepository

    @abc.abstractmethod
    def __enter__(self) -> Self:
        ...

    @abc.abstractmethod
    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        ...

    @abc.abstractmethod
    def commit(self) -> None:
        ...

    @abc.abstractmethod
    def rollback(self) -> None:
        ...
