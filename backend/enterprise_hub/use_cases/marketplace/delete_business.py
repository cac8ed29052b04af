"""DeleteBusinessUseCase: soft delete by the business owner.

The row is kept with ``is_active`` cleared; it disappears from listings
and lookups, and frees the owner to register a new business.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from enterprise_hub.domain.common.uow import UnitOfWork

from ._ownership import require_owner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteBusinessCommand:
    business_id: int
    actor_id: int


class DeleteBusinessUseCase:
    def execute(self, uow: UnitOfWork, cmd: DeleteBusinessCommand) -> None:
        with uow:
            require_owner(uow, cmd.business_id, cmd.actor_id)
            uow.businesses.deactivate(cmd.business_id)
            uow.commit()

        logger.info("Business %s deactivated by %s", cmd.business_id, cmd.actor_id)
