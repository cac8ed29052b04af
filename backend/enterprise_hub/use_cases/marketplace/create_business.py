"""CreateBusinessUseCase: register a business for the authenticated user.

This use case owns the business rules for registration:
  1. All required fields are present and non-blank
  2. The owner exists
  3. The owner has no other active business
  4. Persist and return the new business aggregate

The use case depends ONLY on domain ports (abstract interfaces),
never on SQLAlchemy, FastAPI, or any other infrastructure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from enterprise_hub.domain.common.errors import ConflictError, ValidationError
from enterprise_hub.domain.common.uow import UnitOfWork
from enterprise_hub.domain.marketplace.models import BusinessDraft, BusinessSummary

logger = logging.getLogger(__name__)


# ── Command (input) ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class CreateBusinessCommand:
    owner_id: int
    draft: BusinessDraft


# ── Result (output) ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class CreateBusinessResult:
    business: BusinessSummary


# ── Use Case ─────────────────────────────────────────────────────────────


class CreateBusinessUseCase:
    """Create an active business owned by the caller."""

    def execute(self, uow: UnitOfWork, cmd: CreateBusinessCommand) -> CreateBusinessResult:
        missing = cmd.draft.missing_fields()
        if missing:
            raise ValidationError("Missing required fields", fields=missing)

        with uow:
            if not uow.users.exists(cmd.owner_id):
                raise ValidationError("User not found", fields=("owner_id",))

            if uow.businesses.has_active_business(cmd.owner_id):
                raise ConflictError("User already has an active business")

            business_id = uow.businesses.create(
                owner_id=cmd.owner_id, **cmd.draft.as_fields()
            )
            uow.commit()

            business = uow.businesses.get_summary(business_id)

        logger.info("User %s registered business %s", cmd.owner_id, business_id)
        return CreateBusinessResult(business=business)
