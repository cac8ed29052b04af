"""Shared ownership check for business write use cases."""

from __future__ import annotations

from enterprise_hub.domain.common.errors import EntityNotFoundError, PermissionDeniedError
from enterprise_hub.domain.common.uow import UnitOfWork


def require_owner(uow: UnitOfWork, business_id: int, actor_id: int) -> None:
    """Raise unless *actor_id* owns the active business *business_id*.

    Must be called inside an open ``with uow:`` block.
    """
    owner_id = uow.businesses.get_owner_id(business_id)
    if owner_id is None:
        raise EntityNotFoundError("Business", business_id)
    if owner_id != actor_id:
        raise PermissionDeniedError("Business", business_id)
