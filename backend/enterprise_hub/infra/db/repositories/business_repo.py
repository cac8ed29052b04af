"""SQLAlchemy implementation of BusinessRepository."""

from __future__ import annotations

import logging

from sqlalchemy.engine import Row
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from enterprise_hub.domain.common.errors import ConflictError
from enterprise_hub.domain.common.query import QuerySpec
from enterprise_hub.domain.marketplace.models import (
    BusinessDetail,
    BusinessSummary,
    ProductItem,
    ResultPage,
    ReviewItem,
)
from enterprise_hub.domain.marketplace.ports import BusinessRepository
from enterprise_hub.infra.query.business_query import build_predicate, fetch_one, fetch_page
from enterprise_hub.models import Business, Product, Review, User, utcnow

logger = logging.getLogger(__name__)


def display_name(
    first_name: str | None, last_name: str | None, username: str | None = None
) -> str | None:
    """"First Last", falling back to the username."""
    full = " ".join(part for part in (first_name, last_name) if part)
    return full or username or None


def _row_to_summary(row: Row) -> BusinessSummary:
    """Map an aggregated business row to a BusinessSummary."""
    (
        business,
        first_name,
        last_name,
        username,
        product_count,
        average_rating,
        review_count,
    ) = row
    return BusinessSummary(
        id=business.id,
        name=business.name,
        description=business.description,
        category=business.category,
        location=business.location,
        contact_number=business.contact_number,
        whatsapp_link=business.whatsapp_link,
        instagram_handle=business.instagram_handle,
        logo_url=business.logo_url,
        owner_id=business.owner_id,
        owner_name=display_name(first_name, last_name, username),
        is_active=bool(business.is_active),
        created_at=business.created_at,
        updated_at=business.updated_at,
        product_count=int(product_count or 0),
        # AVG is NULL without reviews; keep that distinct from 0.
        average_rating=float(average_rating) if average_rating is not None else None,
        review_count=int(review_count or 0),
    )


def _product_to_domain(product: Product) -> ProductItem:
    return ProductItem(
        id=product.id,
        business_id=product.business_id,
        name=product.name,
        description=product.description,
        price=float(product.price),
        image_url=product.image_url,
        is_available=bool(product.is_available),
        created_at=product.created_at,
    )


class SqlBusinessRepository(BusinessRepository):
    """Persist and retrieve businesses via SQLAlchemy."""

    def __init__(self, session: Session) -> None:
        self._session = session

    # -- Reads -------------------------------------------------------------

    def query(self, spec: QuerySpec) -> ResultPage:
        predicate = build_predicate(spec.filters)
        logger.debug(
            "Business query: %d criteria, sort=%s, page=%d/%d",
            len(predicate.clauses),
            spec.sort.field,
            spec.page.page,
            spec.page.per_page,
        )
        rows, total = fetch_page(self._session, predicate, spec.sort, spec.page)
        return ResultPage(
            items=tuple(_row_to_summary(row) for row in rows),
            total=total,
            page=spec.page.page,
            per_page=spec.page.per_page,
        )

    def get_summary(self, business_id: int) -> BusinessSummary | None:
        row = fetch_one(self._session, business_id)
        return _row_to_summary(row) if row is not None else None

    def get_detail(self, business_id: int, *, review_limit: int) -> BusinessDetail | None:
        summary = self.get_summary(business_id)
        if summary is None:
            return None

        products = (
            self._session.query(Product)
            .filter(Product.business_id == business_id, Product.is_available.is_(True))
            .order_by(Product.created_at.desc(), Product.id.desc())
            .all()
        )

        review_rows = (
            self._session.query(Review, User.first_name, User.last_name, User.username)
            .join(User, User.id == Review.user_id)
            .filter(Review.business_id == business_id)
            .order_by(Review.created_at.desc(), Review.id.desc())
            .limit(review_limit)
            .all()
        )
        reviews = tuple(
            ReviewItem(
                id=review.id,
                business_id=review.business_id,
                user_id=review.user_id,
                rating=review.rating,
                comment=review.comment,
                created_at=review.created_at,
                author_name=display_name(first_name, last_name, username) or "Anonymous",
                author_username=username,
            )
            for review, first_name, last_name, username in review_rows
        )

        return BusinessDetail(
            business=summary,
            products=tuple(_product_to_domain(p) for p in products),
            reviews=reviews,
        )

    def get_owner_id(self, business_id: int) -> int | None:
        return (
            self._session.query(Business.owner_id)
            .filter(Business.id == business_id, Business.is_active.is_(True))
            .scalar()
        )

    def has_active_business(self, owner_id: int) -> bool:
        return (
            self._session.query(Business.id)
            .filter(Business.owner_id == owner_id, Business.is_active.is_(True))
            .first()
            is not None
        )

    # -- Writes ------------------------------------------------------------

    def create(self, *, owner_id: int, **fields) -> int:
        business = Business(owner_id=owner_id, is_active=True, **fields)
        self._session.add(business)
        try:
            self._session.flush()
        except IntegrityError as exc:
            # uq_businesses_active_owner lost a race with a concurrent create
            logger.warning("Business insert for owner %s rejected by constraint", owner_id)
            raise ConflictError("User already has an active business") from exc
        return business.id

    def update(self, business_id: int, **fields) -> None:
        (
            self._session.query(Business)
            .filter(Business.id == business_id)
            .update({**fields, "updated_at": utcnow()}, synchronize_session=False)
        )

    def deactivate(self, business_id: int) -> None:
        (
            self._session.query(Business)
            .filter(Business.id == business_id)
            .update({"is_active": False, "updated_at": utcnow()}, synchronize_session=False)
        )
