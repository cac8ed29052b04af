"""Marketplace domain: businesses, their listings and order analytics."""

from .models import (
    AnalyticsReport,
    BusinessDetail,
    BusinessDraft,
    BusinessPatch,
    BusinessSummary,
    business_filter_spec,
    DailyOrderCount,
    OrderTotals,
    ProductItem,
    ResultPage,
    ReviewItem,
    StatusCount,
    TopProduct,
)

__all__ = [
    "AnalyticsReport",
    "BusinessDetail",
    "BusinessDraft",
    "BusinessPatch",
    "BusinessSummary",
    "business_filter_spec",
    "DailyOrderCount",
    "OrderTotals",
    "ProductItem",
    "ResultPage",
    "ReviewItem",
    "StatusCount",
    "TopProduct",
]
