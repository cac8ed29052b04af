"""UpdateBusinessUseCase: partial update by the business owner.

Only fields present in the patch are written; everything else keeps its
stored value.  Required fields may be changed but not blanked.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from enterprise_hub.domain.common.errors import ValidationError
from enterprise_hub.domain.common.uow import UnitOfWork
from enterprise_hub.domain.marketplace.models import BusinessPatch, BusinessSummary

from ._ownership import require_owner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateBusinessCommand:
    business_id: int
    actor_id: int
    patch: BusinessPatch


@dataclass(frozen=True)
class UpdateBusinessResult:
    business: BusinessSummary


class UpdateBusinessUseCase:
    """Apply an owner's changes to an active business."""

    def execute(self, uow: UnitOfWork, cmd: UpdateBusinessCommand) -> UpdateBusinessResult:
        blank = cmd.patch.blank_required_fields()
        if blank:
            raise ValidationError("Required fields cannot be blank", fields=blank)

        with uow:
            require_owner(uow, cmd.business_id, cmd.actor_id)

            uow.businesses.update(cmd.business_id, **cmd.patch.changes)
            uow.commit()

            business = uow.businesses.get_summary(cmd.business_id)

        logger.info(
            "Business %s updated by %s: %s",
            cmd.business_id,
            cmd.actor_id,
            sorted(cmd.patch.changes),
        )
        return UpdateBusinessResult(business=business)
