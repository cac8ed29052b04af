"""SQLAlchemy Unit of Work: concrete implementation of the domain UoW port.

Wraps a SQLAlchemy Session and exposes repository instances that share
the same session, so a use case can read/write across multiple repos
within one transaction.
"""

from __future__ import annotations

from typing import Self

from sqlalchemy.orm import Session, sessionmaker

from enterprise_hub.domain.common.uow import UnitOfWork
from enterprise_hub.infra.db.repositories.business_repo import SqlBusinessRepository
from enterprise_hub.infra.db.repositories.order_analytics_repo import SqlOrderAnalyticsRepository
from enterprise_hub.infra.db.repositories.user_repo import SqlUserRepository


class SqlUnitOfWork(UnitOfWork):
    """Transactional boundary backed by a SQLAlchemy Session."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def __enter__(self) -> Self:
        self.session: Session = self._session_factory()
        self.businesses = SqlBusinessRepository(self.session)
        self.order_analytics = SqlOrderAnalyticsRepository(self.session)
        self.users = SqlUserRepository(self.session)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is not None:
            self.rollback()
        self.session.close()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
