"""SQLAlchemy implementation of UserRepository."""

from __future__ import annotations

from sqlalchemy.orm import Session

from enterprise_hub.domain.marketplace.ports import UserRepository
from enterprise_hub.models import User


class SqlUserRepository(UserRepository):
    def __init__(self, session: Session) -> None:
        self._session = session

    def exists(self, user_id: int) -> bool:
        return self._session.query(User.id).filter(User.id == user_id).first() is not None
