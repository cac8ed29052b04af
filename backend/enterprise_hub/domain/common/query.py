"""Filter, sort, and pagination specifications for domain queries.

These types express query intent in domain terms, independent of
any persistence mechanism.  Adapters translate them into SQL WHERE
clauses, in-memory predicates, or whatever the infra layer requires.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 10
MAX_PER_PAGE = 100

# Largest value a BIGINT / SQLite INTEGER can hold.
MAX_SQL_INTEGER = 2**63 - 1


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


# ---------------------------------------------------------------------------
# Individual Filter Types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EqualityFilter:
    """Exact match on a single field."""

    field: str
    value: str


@dataclass(frozen=True)
class TextSearchFilter:
    """Case-insensitive substring search across one or more text fields.

    A row matches when *any* of ``fields`` contains ``pattern``.
    """

    fields: tuple[str, ...]
    pattern: str

    def is_empty(self) -> bool:
        return not self.pattern


# ---------------------------------------------------------------------------
# Composite Specifications
# ---------------------------------------------------------------------------


@dataclass
class FilterSpec:
    """Holds all active filters, combined with AND.

    Builder methods return ``self`` for fluent chaining and silently
    skip empty / None values so callers don't need guard clauses.
    Insertion order is preserved and decides parameter order downstream.
    """

    equality_filters: list[EqualityFilter] = field(default_factory=list)
    text_searches: list[TextSearchFilter] = field(default_factory=list)

    # -- Builder helpers ---------------------------------------------------

    def add_equals(self, field_name: str, value: str | None) -> FilterSpec:
        if value is not None and value.strip():
            self.equality_filters.append(
                EqualityFilter(field=field_name, value=value.strip())
            )
        return self

    def add_text_search(
        self, field_names: tuple[str, ...] | list[str], pattern: str | None
    ) -> FilterSpec:
        if pattern is not None and pattern.strip():
            self.text_searches.append(
                TextSearchFilter(fields=tuple(field_names), pattern=pattern.strip())
            )
        return self

    # -- Introspection -----------------------------------------------------

    @property
    def search_term(self) -> str | None:
        """The first free-text term, used for relevance ranking."""
        return self.text_searches[0].pattern if self.text_searches else None

    def value_of(self, field_name: str) -> str | None:
        return next(
            (f.value for f in self.equality_filters if f.field == field_name), None
        )

    def criteria_count(self) -> int:
        return len(self.equality_filters) + len(self.text_searches)


@dataclass(frozen=True)
class SortSpec:
    """Sort directive for query results.

    ``field="relevance"`` ranks name matches of the search term ahead of
    description-only matches, then falls back to recency.
    """

    field: str = "created_at"
    order: SortOrder = SortOrder.DESC


def _coerce_positive(raw: Any, default: int) -> int:
    """Positive int from *raw*, or *default* for anything else."""
    if raw is None or isinstance(raw, bool):
        return default
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return default
    return value if value >= 1 else default


@dataclass
class PageSpec:
    """Pagination parameters with validation.

    OFFSET and LIMIT must fit a signed 64-bit SQL integer.
    """

    page: int = DEFAULT_PAGE
    per_page: int = DEFAULT_PER_PAGE

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.per_page < 1:
            raise ValueError(f"per_page must be >= 1, got {self.per_page}")
        if self.per_page > MAX_SQL_INTEGER or self.offset > MAX_SQL_INTEGER:
            raise ValueError(
                f"page {self.page} x per_page {self.per_page} exceeds the SQL integer range"
            )

    @classmethod
    def from_raw(
        cls,
        page: Any = None,
        per_page: Any = None,
        *,
        default_per_page: int = DEFAULT_PER_PAGE,
        max_per_page: int = MAX_PER_PAGE,
    ) -> PageSpec:
        """Lenient constructor for request input.

        Non-numeric or non-positive values fall back to the defaults
        instead of raising.  ``per_page`` is capped at *max_per_page*;
        a page beyond the last representable offset is pinned to it,
        which still yields an empty page.
        """
        size = min(_coerce_positive(per_page, default_per_page), max_per_page)
        last_page = MAX_SQL_INTEGER // size + 1
        return cls(
            page=min(_coerce_positive(page, DEFAULT_PAGE), last_page),
            per_page=size,
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        return self.per_page


@dataclass
class QuerySpec:
    """Complete query = filters + sort + pagination."""

    filters: FilterSpec = field(default_factory=FilterSpec)
    sort: SortSpec = field(default_factory=SortSpec)
    page: PageSpec = field(default_factory=PageSpec)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "DEFAULT_PAGE",
    "DEFAULT_PER_PAGE",
    "MAX_PER_PAGE",
    "MAX_SQL_INTEGER",
    "SortOrder",
    "EqualityFilter",
    "TextSearchFilter",
    "FilterSpec",
    "SortSpec",
    "PageSpec",
    "QuerySpec",
]
