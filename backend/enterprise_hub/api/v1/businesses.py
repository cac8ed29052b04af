"""
API endpoints for business listings, search, detail, analytics and
owner-only writes.

Blocking use cases are offloaded with ``asyncio.to_thread`` so the event
loop keeps serving other requests while the database works.  Unexpected
failures are logged with full detail and reported to the client with a
fixed message that never includes query text or parameters.
"""
import asyncio
import logging
from typing import Callable, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ...config import settings
from ...domain.common.errors import (
    ConflictError,
    EntityNotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from ...domain.common.query import FilterSpec, PageSpec, QuerySpec
from ...domain.common.uow import UnitOfWork
from ...infra.db.uow import SqlUnitOfWork
from ...schemas.business import (
    AnalyticsResponse,
    BusinessCreateRequest,
    BusinessDetailResponse,
    BusinessItem,
    BusinessListResponse,
    BusinessSearchResponse,
    BusinessUpdateRequest,
    MessageResponse,
    PaginationResponse,
    SearchFilters,
)
from ...use_cases.marketplace.create_business import (
    CreateBusinessCommand,
    CreateBusinessUseCase,
)
from ...use_cases.marketplace.delete_business import (
    DeleteBusinessCommand,
    DeleteBusinessUseCase,
)
from ...use_cases.marketplace.get_business import GetBusinessQuery, GetBusinessUseCase
from ...use_cases.marketplace.get_business_analytics import (
    GetBusinessAnalyticsQuery,
    GetBusinessAnalyticsUseCase,
)
from ...use_cases.marketplace.list_businesses import (
    ListBusinessesQuery,
    ListBusinessesUseCase,
)
from ...use_cases.marketplace.search_businesses import (
    SearchBusinessesQuery,
    SearchBusinessesUseCase,
)
from ...use_cases.marketplace.update_business import (
    UpdateBusinessCommand,
    UpdateBusinessUseCase,
)
from ...wiring.bootstrap import (
    get_create_business_use_case,
    get_delete_business_use_case,
    get_get_business_analytics_use_case,
    get_get_business_use_case,
    get_list_businesses_use_case,
    get_search_businesses_use_case,
    get_update_business_use_case,
    get_uow,
    get_uow_factory,
)
from ..security import get_current_user_id
from .business_filter_params import parse_business_filters, parse_page

logger = logging.getLogger(__name__)

router = APIRouter()

_NOT_FOUND = "Business not found"


def _validation_detail(e: ValidationError) -> dict:
    return {"message": str(e), "fields": list(e.fields)}


@router.get("", response_model=BusinessListResponse)
async def list_businesses(
    filters: FilterSpec = Depends(parse_business_filters),
    page: PageSpec = Depends(parse_page),
    uow: SqlUnitOfWork = Depends(get_uow),
    use_case: ListBusinessesUseCase = Depends(get_list_businesses_use_case),
):
    """
    List active businesses, newest first.

    Optional filters: category, location (exact) and search
    (name/description substring). Pagination metadata is computed from
    the total match count, not from the size of the returned page.
    """
    query = ListBusinessesQuery(query_spec=QuerySpec(filters=filters, page=page))
    try:
        result = await asyncio.to_thread(use_case.execute, uow, query)
    except Exception:
        logger.exception("Error fetching businesses")
        raise HTTPException(status_code=500, detail="Error fetching businesses")

    return BusinessListResponse(
        businesses=[BusinessItem.from_domain(b) for b in result.page.items],
        pagination=PaginationResponse.from_page(result.page),
    )


@router.get("/search", response_model=BusinessSearchResponse)
async def search_businesses(
    q: Optional[str] = Query(None, description="Search term"),
    category: Optional[str] = Query(None),
    location: Optional[str] = Query(None),
    page: PageSpec = Depends(parse_page),
    uow: SqlUnitOfWork = Depends(get_uow),
    use_case: SearchBusinessesUseCase = Depends(get_search_businesses_use_case),
):
    """
    Search active businesses.

    Businesses whose name matches ``q`` come before those matching only
    on description; ties are broken by recency.
    """
    query = SearchBusinessesQuery(term=q, category=category, location=location, page=page)
    try:
        result = await asyncio.to_thread(use_case.execute, uow, query)
    except Exception:
        logger.exception("Error searching businesses")
        raise HTTPException(status_code=500, detail="Error searching businesses")

    return BusinessSearchResponse(
        businesses=[BusinessItem.from_domain(b) for b in result.page.items],
        pagination=PaginationResponse.from_page(result.page),
        search_query=result.search_term,
        filters=SearchFilters(category=result.category, location=result.location),
    )


@router.get("/{business_id}", response_model=BusinessDetailResponse)
async def get_business(
    business_id: int,
    uow: SqlUnitOfWork = Depends(get_uow),
    use_case: GetBusinessUseCase = Depends(get_get_business_use_case),
):
    """Get one active business with its available products and recent reviews."""
    query = GetBusinessQuery(
        business_id=business_id, review_limit=settings.business_review_limit
    )
    try:
        result = await asyncio.to_thread(use_case.execute, uow, query)
    except EntityNotFoundError:
        raise HTTPException(status_code=404, detail=_NOT_FOUND)
    except Exception:
        logger.exception("Error fetching business %s", business_id)
        raise HTTPException(status_code=500, detail="Error fetching business")

    return BusinessDetailResponse.from_detail(result.detail)


@router.get("/{business_id}/analytics", response_model=AnalyticsResponse)
async def get_business_analytics(
    business_id: int,
    uow_factory: Callable[[], UnitOfWork] = Depends(get_uow_factory),
    use_case: GetBusinessAnalyticsUseCase = Depends(get_get_business_analytics_use_case),
):
    """
    Order analytics: totals, orders by status, top products and orders per
    day over the trailing window. All or nothing: if any part fails the
    request fails.
    """
    query = GetBusinessAnalyticsQuery(
        business_id=business_id,
        window_days=settings.analytics_window_days,
        top_products_limit=settings.analytics_top_products,
    )
    try:
        result = await use_case.execute(uow_factory, query)
    except EntityNotFoundError:
        raise HTTPException(status_code=404, detail=_NOT_FOUND)
    except Exception:
        logger.exception("Error fetching analytics for business %s", business_id)
        raise HTTPException(status_code=500, detail="Error fetching analytics")

    return AnalyticsResponse.from_report(result.report)


@router.post("", response_model=BusinessItem, status_code=201)
async def create_business(
    request: BusinessCreateRequest,
    user_id: int = Depends(get_current_user_id),
    uow: SqlUnitOfWork = Depends(get_uow),
    use_case: CreateBusinessUseCase = Depends(get_create_business_use_case),
):
    """Register a business owned by the authenticated user."""
    cmd = CreateBusinessCommand(owner_id=user_id, draft=request.to_draft())
    try:
        result = await asyncio.to_thread(use_case.execute, uow, cmd)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=_validation_detail(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception:
        logger.exception("Error creating business for user %s", user_id)
        raise HTTPException(status_code=500, detail="Error creating business")

    return BusinessItem.from_domain(result.business)


@router.put("/{business_id}", response_model=BusinessItem)
async def update_business(
    business_id: int,
    request: BusinessUpdateRequest,
    user_id: int = Depends(get_current_user_id),
    uow: SqlUnitOfWork = Depends(get_uow),
    use_case: UpdateBusinessUseCase = Depends(get_update_business_use_case),
):
    """Update the caller's business; omitted fields keep their values."""
    cmd = UpdateBusinessCommand(
        business_id=business_id, actor_id=user_id, patch=request.to_patch()
    )
    try:
        result = await asyncio.to_thread(use_case.execute, uow, cmd)
    except EntityNotFoundError:
        raise HTTPException(status_code=404, detail=_NOT_FOUND)
    except PermissionDeniedError:
        raise HTTPException(status_code=403, detail="Not authorized to update this business")
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=_validation_detail(e))
    except Exception:
        logger.exception("Error updating business %s", business_id)
        raise HTTPException(status_code=500, detail="Error updating business")

    return BusinessItem.from_domain(result.business)


@router.delete("/{business_id}", response_model=MessageResponse)
async def delete_business(
    business_id: int,
    user_id: int = Depends(get_current_user_id),
    uow: SqlUnitOfWork = Depends(get_uow),
    use_case: DeleteBusinessUseCase = Depends(get_delete_business_use_case),
):
    """Soft-delete the caller's business."""
    cmd = DeleteBusinessCommand(business_id=business_id, actor_id=user_id)
    try:
        await asyncio.to_thread(use_case.execute, uow, cmd)
    except EntityNotFoundError:
        raise HTTPException(status_code=404, detail=_NOT_FOUND)
    except PermissionDeniedError:
        raise HTTPException(status_code=403, detail="Not authorized to delete this business")
    except Exception:
        logger.exception("Error deleting business %s", business_id)
        raise HTTPException(status_code=500, detail="Error deleting business")

    return MessageResponse(message="Business deleted successfully")
