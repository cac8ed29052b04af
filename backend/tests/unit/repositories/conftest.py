"""Shared fixtures for repository integration tests.

Provides an in-memory SQLite engine with FK enforcement, a session,
a query-counting context manager, and a ``seed`` helper for building
marketplace rows with controlled timestamps.
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from enterprise_hub.database import Base

# Force model registration so create_all picks up every table.
import enterprise_hub.models  # noqa: F401
from enterprise_hub.models import Business, Order, OrderItem, Product, Review, User

BASE_TIME = datetime(2024, 3, 1, 12, 0, 0)


@pytest.fixture
def engine():
    """Function-scoped :memory: SQLite engine with FK enforcement."""
    eng = create_engine("sqlite:///:memory:")

    @event.listens_for(eng, "connect")
    def _set_fk_pragma(dbapi_conn, _):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session(engine):
    """Function-scoped session bound to the in-memory engine."""
    factory = sessionmaker(bind=engine)
    sess = factory()
    yield sess
    sess.close()


@contextmanager
def count_queries(engine):
    """Context manager that counts SQL statements executed.

    Usage::

        with count_queries(engine) as counter:
            repo.query(spec)
        assert counter["count"] <= 2
    """
    counter = {"count": 0}

    def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        counter["count"] += 1

    event.listen(engine, "before_cursor_execute", _before_cursor_execute)
    try:
        yield counter
    finally:
        event.remove(engine, "before_cursor_execute", _before_cursor_execute)


class Seeder:
    """Adds marketplace rows to a session and flushes so ids are assigned."""

    def __init__(self, session) -> None:
        self.session = session
        self._users = 0

    def _add(self, obj):
        self.session.add(obj)
        self.session.flush()
        return obj

    def user(self, first_name="Ama", last_name="Mensah", username=None) -> User:
        self._users += 1
        username = username or f"user{self._users}"
        return self._add(
            User(
                username=username,
                email=f"{username}@st.knust.edu.gh",
                first_name=first_name,
                last_name=last_name,
            )
        )

    def business(self, owner=None, *, hours=0, **fields) -> Business:
        owner = owner or self.user()
        ts = BASE_TIME + timedelta(hours=hours)
        defaults = dict(
            name="Campus Shop",
            description="Everything a student needs",
            category="Retail",
            location="Ayeduase",
            contact_number="0240000000",
            is_active=True,
            created_at=ts,
            updated_at=ts,
        )
        defaults.update(fields)
        return self._add(Business(owner_id=owner.id, **defaults))

    def product(self, business, *, hours=0, **fields) -> Product:
        defaults = dict(
            name="Item",
            price=10.0,
            is_available=True,
            created_at=BASE_TIME + timedelta(hours=hours),
        )
        defaults.update(fields)
        return self._add(Product(business_id=business.id, **defaults))

    def review(self, business, rating, *, author=None, hours=0, **fields) -> Review:
        author = author or self.user()
        return self._add(
            Review(
                business_id=business.id,
                user_id=author.id,
                rating=rating,
                created_at=BASE_TIME + timedelta(hours=hours),
                **fields,
            )
        )

    def order(self, business, total_amount, *, status="pending", created_at=None, items=()) -> Order:
        order = self._add(
            Order(
                business_id=business.id,
                status=status,
                total_amount=total_amount,
                created_at=created_at or BASE_TIME,
            )
        )
        for product, quantity in items:
            self._add(
                OrderItem(
                    order_id=order.id,
                    product_id=product.id,
                    quantity=quantity,
                    unit_price=product.price,
                )
            )
        return order


@pytest.fixture
def seed(session):
    return Seeder(session)
