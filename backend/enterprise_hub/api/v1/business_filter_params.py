"""Reusable FastAPI dependencies for business filter/pagination parsing.

Listing criteria come from the same ``business_filter_spec`` helper the
search use case uses, and both endpoints share ``parse_page``.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Query

from enterprise_hub.config import settings
from enterprise_hub.domain.common.query import FilterSpec, PageSpec
from enterprise_hub.domain.marketplace.models import business_filter_spec


def parse_business_filters(
    category: Optional[str] = Query(None, description="Exact category"),
    location: Optional[str] = Query(None, description="Exact location"),
    search: Optional[str] = Query(
        None, description="Case-insensitive substring of name or description"
    ),
) -> FilterSpec:
    """Build a FilterSpec from listing query parameters."""
    return business_filter_spec(category, location, search)


def parse_page(
    # Strings on purpose: junk input falls back to defaults instead of a 422.
    page: Optional[str] = Query(None, description="Page number (default 1)"),
    limit: Optional[str] = Query(None, description="Page size (default 10, max 100)"),
) -> PageSpec:
    """Build a PageSpec, coercing invalid values to the defaults."""
    return PageSpec.from_raw(
        page,
        limit,
        default_per_page=settings.default_page_size,
        max_per_page=settings.max_page_size,
    )
