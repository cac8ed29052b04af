"""Domain models for the marketplace bounded context.

Plain frozen dataclasses: repositories build them from rows, use cases
pass them around, routers map them onto response schemas.  Nothing here
knows about SQLAlchemy or FastAPI.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

from enterprise_hub.domain.common.query import FilterSpec


# ---------------------------------------------------------------------------
# Business listings
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BusinessSummary:
    """A business row annotated with aggregates over its products/reviews.

    ``average_rating`` is ``None`` when the business has no reviews;
    callers must not treat that as a zero rating.
    """

    id: int
    name: str
    description: str
    category: str
    location: str
    contact_number: str
    owner_id: int
    is_active: bool
    created_at: datetime
    updated_at: datetime
    whatsapp_link: str | None = None
    instagram_handle: str | None = None
    logo_url: str | None = None
    owner_name: str | None = None
    product_count: int = 0
    average_rating: float | None = None
    review_count: int = 0


@dataclass(frozen=True)
class ProductItem:
    id: int
    business_id: int
    name: str
    price: float
    is_available: bool
    created_at: datetime
    description: str | None = None
    image_url: str | None = None


@dataclass(frozen=True)
class ReviewItem:
    """A review enriched with its author's display name."""

    id: int
    business_id: int
    user_id: int
    rating: int
    created_at: datetime
    author_name: str
    author_username: str | None = None
    comment: str | None = None


@dataclass(frozen=True)
class BusinessDetail:
    """Single-business view: aggregate row plus embedded collections."""

    business: BusinessSummary
    products: tuple[ProductItem, ...] = ()
    reviews: tuple[ReviewItem, ...] = ()


@dataclass(frozen=True)
class ResultPage:
    """Paginated result set with metadata.

    Centralises pagination math so ports return a single
    aggregate instead of ``(list, int)`` tuples.  ``total`` always comes
    from a count query, never from ``len(items)``.
    """

    items: tuple[BusinessSummary, ...]
    total: int
    page: int
    per_page: int

    @property
    def total_pages(self) -> int:
        if self.per_page <= 0:
            return 0
        return (self.total + self.per_page - 1) // self.per_page

    @property
    def has_next(self) -> bool:
        return self.page * self.per_page < self.total

    @property
    def has_prev(self) -> bool:
        return self.page > 1


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


REQUIRED_BUSINESS_FIELDS: tuple[str, ...] = (
    "name",
    "description",
    "category",
    "location",
    "contact_number",
)

EDITABLE_BUSINESS_FIELDS: tuple[str, ...] = REQUIRED_BUSINESS_FIELDS + (
    "whatsapp_link",
    "instagram_handle",
    "logo_url",
)

# Free-text search always spans these columns, in listing and search alike.
BUSINESS_SEARCH_FIELDS: tuple[str, ...] = ("name", "description")


def business_filter_spec(
    category: str | None = None,
    location: str | None = None,
    term: str | None = None,
) -> FilterSpec:
    """Listing and search criteria, always in the order category, location, term.

    Parameter numbering downstream follows this order.
    """
    return (
        FilterSpec()
        .add_equals("category", category)
        .add_equals("location", location)
        .add_text_search(BUSINESS_SEARCH_FIELDS, term)
    )


@dataclass(frozen=True)
class BusinessDraft:
    """Fields for registering a new business."""

    name: str | None = None
    description: str | None = None
    category: str | None = None
    location: str | None = None
    contact_number: str | None = None
    whatsapp_link: str | None = None
    instagram_handle: str | None = None
    logo_url: str | None = None

    def missing_fields(self) -> tuple[str, ...]:
        return tuple(
            name
            for name in REQUIRED_BUSINESS_FIELDS
            if not (getattr(self, name) or "").strip()
        )

    def as_fields(self) -> dict[str, str | None]:
        return {name: getattr(self, name) for name in EDITABLE_BUSINESS_FIELDS}


@dataclass(frozen=True)
class BusinessPatch:
    """Partial update: only keys present in ``changes`` are written."""

    changes: dict[str, str | None] = field(default_factory=dict)

    def __post_init__(self) -> None:
        unknown = set(self.changes) - set(EDITABLE_BUSINESS_FIELDS)
        if unknown:
            raise ValueError(f"Unknown business fields: {sorted(unknown)}")

    def blank_required_fields(self) -> tuple[str, ...]:
        return tuple(
            name
            for name in REQUIRED_BUSINESS_FIELDS
            if name in self.changes and not (self.changes[name] or "").strip()
        )


# ---------------------------------------------------------------------------
# Analytics
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OrderTotals:
    """Order totals; all zero (never None) when there are no orders."""

    total_orders: int = 0
    total_revenue: float = 0.0
    avg_order_value: float = 0.0


@dataclass(frozen=True)
class StatusCount:
    status: str
    count: int


@dataclass(frozen=True)
class TopProduct:
    product_id: int
    name: str
    total_sold: int


@dataclass(frozen=True)
class DailyOrderCount:
    day: date
    orders: int


@dataclass(frozen=True)
class AnalyticsReport:
    business_id: int
    totals: OrderTotals
    orders_by_status: tuple[StatusCount, ...]
    top_products: tuple[TopProduct, ...]
    orders_per_day: tuple[DailyOrderCount, ...]
