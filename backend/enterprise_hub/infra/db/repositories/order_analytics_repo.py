"""SQLAlchemy implementation of OrderAnalyticsRepository.

Each method issues exactly one aggregate query and touches no shared
state, so the analytics use case can run them on separate sessions
at the same time.
"""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from enterprise_hub.domain.marketplace.models import (
    DailyOrderCount,
    OrderTotals,
    StatusCount,
    TopProduct,
)
from enterprise_hub.domain.marketplace.ports import OrderAnalyticsRepository
from enterprise_hub.models import Order, OrderItem, Product


def _as_date(value: date | datetime | str) -> date:
    """DATE() comes back as a string on SQLite and a date on PostgreSQL."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


class SqlOrderAnalyticsRepository(OrderAnalyticsRepository):
    """Aggregate order history via SQLAlchemy."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def totals(self, business_id: int) -> OrderTotals:
        total_orders, total_revenue, avg_order_value = (
            self._session.query(
                func.count(Order.id),
                func.coalesce(func.sum(Order.total_amount), 0),
                func.coalesce(func.avg(Order.total_amount), 0),
            )
            .filter(Order.business_id == business_id)
            .one()
        )
        return OrderTotals(
            total_orders=int(total_orders or 0),
            total_revenue=float(total_revenue or 0),
            avg_order_value=float(avg_order_value or 0),
        )

    def status_breakdown(self, business_id: int) -> tuple[StatusCount, ...]:
        rows = (
            self._session.query(Order.status, func.count(Order.id))
            .filter(Order.business_id == business_id)
            .group_by(Order.status)
            .order_by(Order.status)
            .all()
        )
        return tuple(StatusCount(status=status, count=int(count)) for status, count in rows)

    def top_products(self, business_id: int, limit: int) -> tuple[TopProduct, ...]:
        total_sold = func.sum(OrderItem.quantity).label("total_sold")
        rows = (
            self._session.query(Product.id, Product.name, total_sold)
            .join(OrderItem, OrderItem.product_id == Product.id)
            .filter(Product.business_id == business_id)
            .group_by(Product.id, Product.name)
            .order_by(total_sold.desc(), Product.id.asc())
            .limit(limit)
            .all()
        )
        return tuple(
            TopProduct(product_id=product_id, name=name, total_sold=int(sold))
            for product_id, name, sold in rows
        )

    def daily_orders(
        self, business_id: int, *, since: datetime, until: datetime
    ) -> tuple[DailyOrderCount, ...]:
        day = func.date(Order.created_at).label("day")
        rows = (
            self._session.query(day, func.count(Order.id))
            .filter(
                Order.business_id == business_id,
                Order.created_at >= since,
                Order.created_at <= until,
            )
            .group_by(day)
            .order_by(day.asc())
            .all()
        )
        return tuple(
            DailyOrderCount(day=_as_date(value), orders=int(count)) for value, count in rows
        )
