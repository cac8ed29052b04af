"""SQLAlchemy query builder for business listings.

Translates domain FilterSpec / SortSpec / PageSpec into a parameterized
WHERE predicate, an ORDER BY key and LIMIT/OFFSET bounds over the
aggregated business query (product count, average rating, review count).

Every user-supplied value travels as a bound parameter named ``p1``,
``p2``, ... in the order the criteria were added; none is ever rendered
into the SQL text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Self

from sqlalchemy import and_, asc, bindparam, case, desc, distinct, func, or_
from sqlalchemy.engine import Row
from sqlalchemy.orm import Query, Session
from sqlalchemy.sql.elements import BindParameter, ColumnElement

from enterprise_hub.domain.common.query import (
    FilterSpec,
    PageSpec,
    SortOrder,
    SortSpec,
)
from enterprise_hub.models import Business, Product, Review, User

# ── Column resolution ───────────────────────────────────────────────────

# Maps domain filter field names to Business column attributes.
_COLUMN_MAP: dict[str, Any] = {
    "name": Business.name,
    "description": Business.description,
    "category": Business.category,
    "location": Business.location,
}

# Sortable fields; anything else falls back to recency.
_SORT_COLUMN_MAP: dict[str, Any] = {
    "created_at": Business.created_at,
    "updated_at": Business.updated_at,
    "name": Business.name,
}

RELEVANCE_SORT = "relevance"

_LIKE_ESCAPE = "\\"


def like_pattern(term: str) -> str:
    """Substring LIKE pattern with the term's own wildcards escaped."""
    escaped = (
        term.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


# ── Predicate ───────────────────────────────────────────────────────────


@dataclass(frozen=True, eq=False)
class Clause:
    """One rendered criterion and the values it binds, in order."""

    expression: ColumnElement[bool]
    params: tuple[Any, ...]


@dataclass(frozen=True, eq=False)
class Predicate:
    """Immutable WHERE predicate shared by the count and row queries.

    The base condition (business is active) is always applied; each
    clause is ANDed onto it.
    """

    clauses: tuple[Clause, ...] = ()
    search_param: BindParameter | None = None

    @property
    def params(self) -> list[Any]:
        """Positional parameter values, matching ``p1..pN``."""
        return [value for clause in self.clauses for value in clause.params]

    def where_clause(self) -> ColumnElement[bool]:
        return and_(
            Business.is_active.is_(True),
            *(clause.expression for clause in self.clauses),
        )


class PredicateBuilder:
    """Accumulates typed clause/parameter pairs and renders them on build()."""

    def __init__(self) -> None:
        self._clauses: list[Clause] = []
        self._search_param: BindParameter | None = None
        self._param_count = 0

    def _bind(self, value: Any) -> BindParameter:
        self._param_count += 1
        return bindparam(f"p{self._param_count}", value)

    def equals(self, column: Any, value: Any) -> Self:
        if value is None:
            return self
        param = self._bind(value)
        self._clauses.append(Clause(expression=column == param, params=(value,)))
        return self

    def contains_text(self, columns: list[Any], term: str | None) -> Self:
        """Case-insensitive substring match on any of *columns*.

        A single parameter is shared by every column.
        """
        if not term:
            return self
        pattern = like_pattern(term)
        param = self._bind(pattern)
        expression = or_(*(col.ilike(param, escape=_LIKE_ESCAPE) for col in columns))
        self._clauses.append(Clause(expression=expression, params=(pattern,)))
        if self._search_param is None:
            self._search_param = param
        return self

    def build(self) -> Predicate:
        return Predicate(clauses=tuple(self._clauses), search_param=self._search_param)


def _resolve_column(field: str) -> Any:
    try:
        return _COLUMN_MAP[field]
    except KeyError:
        raise ValueError(f"Unknown business filter field: {field!r}") from None


def build_predicate(filters: FilterSpec) -> Predicate:
    """Translate a FilterSpec into a Predicate.

    Equality filters are added first, in insertion order, followed by
    text searches.
    """
    builder = PredicateBuilder()
    for ef in filters.equality_filters:
        builder.equals(_resolve_column(ef.field), ef.value)
    for ts in filters.text_searches:
        if ts.is_empty():
            continue
        builder.contains_text([_resolve_column(f) for f in ts.fields], ts.pattern)
    return builder.build()


# ── Aggregation ─────────────────────────────────────────────────────────


def aggregated_business_query(session: Session) -> Query:
    """Businesses joined to products/reviews/owner, one row per business.

    Counts use DISTINCT ids so the product x review fan-out cannot inflate
    them.  AVG runs over the raw joined ratings: every rating is repeated
    once per product, which leaves the mean unchanged, and it is NULL
    when there are no reviews.
    """
    product_count = func.count(distinct(Product.id)).label("product_count")
    average_rating = func.avg(Review.rating).label("average_rating")
    review_count = func.count(distinct(Review.id)).label("review_count")

    return (
        session.query(
            Business,
            User.first_name,
            User.last_name,
            User.username,
            product_count,
            average_rating,
            review_count,
        )
        .outerjoin(Product, Product.business_id == Business.id)
        .outerjoin(Review, Review.business_id == Business.id)
        .outerjoin(User, User.id == Business.owner_id)
        .group_by(Business.id, User.first_name, User.last_name, User.username)
    )


# ── Ordering ────────────────────────────────────────────────────────────


def relevance_rank(predicate: Predicate) -> ColumnElement[int] | None:
    """1 for rows whose name matches the search term, 2 otherwise.

    ``None`` when the predicate has no search term, so the tier drops out.
    """
    if predicate.search_param is None:
        return None
    return case(
        (Business.name.ilike(predicate.search_param, escape=_LIKE_ESCAPE), 1),
        else_=2,
    )


def order_clauses(sort: SortSpec, predicate: Predicate) -> list[ColumnElement[Any]]:
    """ORDER BY key: optional relevance tier, sort column, then id."""
    clauses: list[ColumnElement[Any]] = []

    if sort.field == RELEVANCE_SORT:
        rank = relevance_rank(predicate)
        if rank is not None:
            clauses.append(rank.asc())
        clauses.extend([desc(Business.created_at), desc(Business.id)])
        return clauses

    col = _SORT_COLUMN_MAP.get(sort.field, Business.created_at)
    order_fn = asc if sort.order == SortOrder.ASC else desc
    clauses.append(order_fn(col))
    # Deterministic order under ties
    clauses.append(order_fn(Business.id))
    return clauses


# ── Public API ──────────────────────────────────────────────────────────


def count_matching(session: Session, predicate: Predicate) -> int:
    """Number of businesses satisfying *predicate* (no joins needed)."""
    return (
        session.query(func.count(Business.id))
        .filter(predicate.where_clause())
        .scalar()
        or 0
    )


def fetch_page(
    session: Session,
    predicate: Predicate,
    sort: SortSpec,
    page: PageSpec,
) -> tuple[list[Row], int]:
    """Run the count and row queries for one page.  Returns (rows, total).

    Both queries use the same *predicate* object, so the total always
    describes the same result set the rows were cut from.
    """
    total = count_matching(session, predicate)
    if total == 0:
        return [], 0

    rows = (
        aggregated_business_query(session)
        .filter(predicate.where_clause())
        .order_by(*order_clauses(sort, predicate))
        .offset(page.offset)
        .limit(page.limit)
        .all()
    )
    return rows, total


def fetch_one(session: Session, business_id: int) -> Row | None:
    """Aggregate row for one active business, or None."""
    return (
        aggregated_business_query(session)
        .filter(Business.id == business_id, Business.is_active.is_(True))
        .one_or_none()
    )
