"""Pydantic schemas for business API endpoints.

Contains request/response models for listings, search, business detail,
analytics reports, and business registration/updates.
"""

from datetime import date, datetime
from typing import List, Optional, Self

from pydantic import BaseModel, Field

from ..domain.marketplace.models import (
    AnalyticsReport,
    BusinessDetail,
    BusinessDraft,
    BusinessPatch,
    BusinessSummary,
    ProductItem,
    ResultPage,
    ReviewItem,
)


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class BusinessCreateRequest(BaseModel):
    """Request model for registering a business."""

    name: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = None
    category: Optional[str] = Field(default=None, max_length=100)
    location: Optional[str] = Field(default=None, max_length=200)
    contact_number: Optional[str] = Field(default=None, max_length=30)
    whatsapp_link: Optional[str] = Field(default=None, max_length=500)
    instagram_handle: Optional[str] = Field(default=None, max_length=100)
    logo_url: Optional[str] = Field(default=None, max_length=500)

    def to_draft(self) -> BusinessDraft:
        return BusinessDraft(**self.model_dump())


class BusinessUpdateRequest(BusinessCreateRequest):
    """Partial update; omitted fields are left unchanged."""

    def to_patch(self) -> BusinessPatch:
        return BusinessPatch(changes=self.model_dump(exclude_unset=True))


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class BusinessItem(BaseModel):
    """One business with its aggregate metrics."""

    id: int
    name: str
    description: str
    category: str
    location: str
    contact_number: str
    whatsapp_link: Optional[str] = None
    instagram_handle: Optional[str] = None
    logo_url: Optional[str] = None
    owner_id: int
    owner_name: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
    product_count: int
    average_rating: Optional[float] = Field(
        default=None, description="Mean review rating; null when there are no reviews"
    )
    review_count: int

    @classmethod
    def from_domain(cls, item: BusinessSummary) -> Self:
        return cls(
            id=item.id,
            name=item.name,
            description=item.description,
            category=item.category,
            location=item.location,
            contact_number=item.contact_number,
            whatsapp_link=item.whatsapp_link,
            instagram_handle=item.instagram_handle,
            logo_url=item.logo_url,
            owner_id=item.owner_id,
            owner_name=item.owner_name,
            is_active=item.is_active,
            created_at=item.created_at,
            updated_at=item.updated_at,
            product_count=item.product_count,
            average_rating=item.average_rating,
            review_count=item.review_count,
        )


class ProductResponse(BaseModel):
    id: int
    business_id: int
    name: str
    description: Optional[str] = None
    price: float
    image_url: Optional[str] = None
    is_available: bool
    created_at: datetime

    @classmethod
    def from_domain(cls, item: ProductItem) -> Self:
        return cls(
            id=item.id,
            business_id=item.business_id,
            name=item.name,
            description=item.description,
            price=item.price,
            image_url=item.image_url,
            is_available=item.is_available,
            created_at=item.created_at,
        )


class ReviewResponse(BaseModel):
    id: int
    business_id: int
    user_id: int
    rating: int
    comment: Optional[str] = None
    author_name: str
    author_username: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_domain(cls, item: ReviewItem) -> Self:
        return cls(
            id=item.id,
            business_id=item.business_id,
            user_id=item.user_id,
            rating=item.rating,
            comment=item.comment,
            author_name=item.author_name,
            author_username=item.author_username,
            created_at=item.created_at,
        )


class BusinessDetailResponse(BusinessItem):
    """Business aggregate with embedded products and recent reviews."""

    products: List[ProductResponse] = Field(default_factory=list)
    reviews: List[ReviewResponse] = Field(default_factory=list)

    @classmethod
    def from_detail(cls, detail: BusinessDetail) -> Self:
        base = BusinessItem.from_domain(detail.business).model_dump()
        return cls(
            **base,
            products=[ProductResponse.from_domain(p) for p in detail.products],
            reviews=[ReviewResponse.from_domain(r) for r in detail.reviews],
        )


class PaginationResponse(BaseModel):
    """Page metadata computed from the total match count."""

    current_page: int
    per_page: int
    total_pages: int
    total_count: int
    has_next: bool
    has_prev: bool

    @classmethod
    def from_page(cls, page: ResultPage) -> Self:
        return cls(
            current_page=page.page,
            per_page=page.per_page,
            total_pages=page.total_pages,
            total_count=page.total,
            has_next=page.has_next,
            has_prev=page.has_prev,
        )


class BusinessListResponse(BaseModel):
    """Response model for paginated business listings."""

    businesses: List[BusinessItem]
    pagination: PaginationResponse


class SearchFilters(BaseModel):
    category: Optional[str] = None
    location: Optional[str] = None


class BusinessSearchResponse(BusinessListResponse):
    """Listing response plus the echoed search input."""

    search_query: Optional[str] = None
    filters: SearchFilters


class MessageResponse(BaseModel):
    message: str


# ---------------------------------------------------------------------------
# Analytics
# ---------------------------------------------------------------------------


class OrderTotalsResponse(BaseModel):
    total_orders: int
    total_revenue: float
    avg_order_value: float


class StatusCountResponse(BaseModel):
    status: str
    count: int


class TopProductResponse(BaseModel):
    id: int
    name: str
    total_sold: int


class DailyOrdersResponse(BaseModel):
    day: date
    orders: int


class AnalyticsResponse(BaseModel):
    """Merged order analytics for one business."""

    business_id: int
    totals: OrderTotalsResponse
    orders_by_status: List[StatusCountResponse]
    top_products: List[TopProductResponse]
    orders_per_day: List[DailyOrdersResponse]

    @classmethod
    def from_report(cls, report: AnalyticsReport) -> Self:
        return cls(
            business_id=report.business_id,
            totals=OrderTotalsResponse(
                total_orders=report.totals.total_orders,
                total_revenue=report.totals.total_revenue,
                avg_order_value=report.totals.avg_order_value,
            ),
            orders_by_status=[
                StatusCountResponse(status=s.status, count=s.count)
                for s in report.orders_by_status
            ],
            top_products=[
                TopProductResponse(id=p.product_id, name=p.name, total_sold=p.total_sold)
                for p in report.top_products
            ],
            orders_per_day=[
                DailyOrdersResponse(day=d.day, orders=d.orders)
                for d in report.orders_per_day
            ],
        )
