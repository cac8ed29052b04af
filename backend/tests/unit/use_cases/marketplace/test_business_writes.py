"""Unit tests for the create / update / delete business use cases."""

import pytest

from enterprise_hub.domain.common.errors import (
    ConflictError,
    EntityNotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from enterprise_hub.domain.marketplace.models import BusinessDraft, BusinessPatch
from enterprise_hub.use_cases.marketplace.create_business import (
    CreateBusinessCommand,
    CreateBusinessUseCase,
)
from enterprise_hub.use_cases.marketplace.delete_business import (
    DeleteBusinessCommand,
    DeleteBusinessUseCase,
)
from enterprise_hub.use_cases.marketplace.update_business import (
    UpdateBusinessCommand,
    UpdateBusinessUseCase,
)

from tests.unit.marketplace_fakes import (
    FakeBusinessRepository,
    FakeUnitOfWork,
    FakeUserRepository,
    make_summary,
)

OWNER = 101
STRANGER = 999


def _draft(**overrides) -> BusinessDraft:
    fields = dict(
        name="Fresh Juice",
        description="Cold pressed juice",
        category="Food",
        location="Kotei",
        contact_number="0200000000",
    )
    fields.update(overrides)
    return BusinessDraft(**fields)


def _uow(*businesses, users=(OWNER,)) -> FakeUnitOfWork:
    return FakeUnitOfWork(
        businesses=FakeBusinessRepository(businesses),
        users=FakeUserRepository(users),
    )


# ── Create ───────────────────────────────────────────────────────────────


class TestCreateBusiness:
    def test_creates_and_commits(self):
        uow = _uow()

        result = CreateBusinessUseCase().execute(
            uow, CreateBusinessCommand(owner_id=OWNER, draft=_draft())
        )

        assert result.business.name == "Fresh Juice"
        assert result.business.owner_id == OWNER
        assert result.business.is_active is True
        assert uow.committed == 1

    def test_missing_fields_are_reported(self):
        uow = _uow()

        with pytest.raises(ValidationError) as exc_info:
            CreateBusinessUseCase().execute(
                uow,
                CreateBusinessCommand(owner_id=OWNER, draft=_draft(name="  ", location=None)),
            )

        assert exc_info.value.fields == ("name", "location")
        assert uow.businesses.created == []

    def test_unknown_owner_is_rejected(self):
        with pytest.raises(ValidationError, match="User not found"):
            CreateBusinessUseCase().execute(
                _uow(users=()), CreateBusinessCommand(owner_id=OWNER, draft=_draft())
            )

    def test_owner_with_active_business_conflicts(self):
        uow = _uow(make_summary(1, owner_id=OWNER))

        with pytest.raises(ConflictError):
            CreateBusinessUseCase().execute(
                uow, CreateBusinessCommand(owner_id=OWNER, draft=_draft())
            )

        assert uow.committed == 0
        assert uow.rolled_back == 1

    def test_inactive_business_does_not_block_a_new_one(self):
        uow = _uow(make_summary(1, owner_id=OWNER, is_active=False))

        result = CreateBusinessUseCase().execute(
            uow, CreateBusinessCommand(owner_id=OWNER, draft=_draft())
        )

        assert result.business.id == 2


# ── Update ───────────────────────────────────────────────────────────────


class TestUpdateBusiness:
    def test_owner_updates_only_given_fields(self):
        uow = _uow(make_summary(1, owner_id=OWNER, location="Kotei"))
        patch = BusinessPatch(changes={"name": "Renamed"})

        result = UpdateBusinessUseCase().execute(
            uow, UpdateBusinessCommand(business_id=1, actor_id=OWNER, patch=patch)
        )

        assert result.business.name == "Renamed"
        assert result.business.location == "Kotei"
        assert uow.businesses.updates == [(1, {"name": "Renamed"})]
        assert uow.committed == 1

    def test_non_owner_is_denied(self):
        uow = _uow(make_summary(1, owner_id=OWNER))

        with pytest.raises(PermissionDeniedError):
            UpdateBusinessUseCase().execute(
                uow,
                UpdateBusinessCommand(
                    business_id=1, actor_id=STRANGER, patch=BusinessPatch({"name": "x"})
                ),
            )

        assert uow.businesses.updates == []

    def test_missing_business(self):
        with pytest.raises(EntityNotFoundError):
            UpdateBusinessUseCase().execute(
                _uow(),
                UpdateBusinessCommand(
                    business_id=5, actor_id=OWNER, patch=BusinessPatch({"name": "x"})
                ),
            )

    def test_required_field_cannot_be_blanked(self):
        uow = _uow(make_summary(1, owner_id=OWNER))

        with pytest.raises(ValidationError) as exc_info:
            UpdateBusinessUseCase().execute(
                uow,
                UpdateBusinessCommand(
                    business_id=1, actor_id=OWNER, patch=BusinessPatch({"category": " "})
                ),
            )

        assert exc_info.value.fields == ("category",)

    def test_optional_field_can_be_cleared(self):
        uow = _uow(make_summary(1, owner_id=OWNER, logo_url="http://logo"))

        result = UpdateBusinessUseCase().execute(
            uow,
            UpdateBusinessCommand(
                business_id=1, actor_id=OWNER, patch=BusinessPatch({"logo_url": None})
            ),
        )

        assert result.business.logo_url is None

    def test_unknown_patch_field_is_rejected(self):
        with pytest.raises(ValueError):
            BusinessPatch(changes={"owner_id": 5})


# ── Delete ───────────────────────────────────────────────────────────────


class TestDeleteBusiness:
    def test_owner_soft_deletes(self):
        uow = _uow(make_summary(1, owner_id=OWNER))

        DeleteBusinessUseCase().execute(
            uow, DeleteBusinessCommand(business_id=1, actor_id=OWNER)
        )

        assert uow.businesses.deactivated == [1]
        assert uow.businesses.get_summary(1) is None
        assert uow.committed == 1

    def test_non_owner_is_denied(self):
        uow = _uow(make_summary(1, owner_id=OWNER))

        with pytest.raises(PermissionDeniedError):
            DeleteBusinessUseCase().execute(
                uow, DeleteBusinessCommand(business_id=1, actor_id=STRANGER)
            )

        assert uow.businesses.deactivated == []

    def test_already_deleted_is_not_found(self):
        uow = _uow(make_summary(1, owner_id=OWNER, is_active=False))

        with pytest.raises(EntityNotFoundError):
            DeleteBusinessUseCase().execute(
                uow, DeleteBusinessCommand(business_id=1, actor_id=OWNER)
            )
