"""Integration tests for SqlBusinessRepository against in-memory SQLite."""

from __future__ import annotations

import pytest

from enterprise_hub.domain.common.errors import ConflictError
from enterprise_hub.domain.common.query import FilterSpec, PageSpec, QuerySpec, SortSpec
from enterprise_hub.infra.db.repositories.business_repo import (
    SqlBusinessRepository,
    display_name,
)

from tests.unit.repositories.conftest import count_queries

SEARCH = ("name", "description")


def _search_spec(term, page=None, **equals) -> QuerySpec:
    filters = FilterSpec()
    for field, value in equals.items():
        filters.add_equals(field, value)
    filters.add_text_search(SEARCH, term)
    return QuerySpec(
        filters=filters,
        sort=SortSpec(field="relevance"),
        page=page or PageSpec(),
    )


@pytest.fixture
def repo(session):
    return SqlBusinessRepository(session)


class TestAggregation:
    def test_counts_and_average_are_not_inflated_by_joins(self, repo, seed):
        business = seed.business(name="Kente Corner")
        seed.product(business, name="P1", is_available=True)
        seed.product(business, name="P2", is_available=False)
        for rating in (3, 4, 5):
            seed.review(business, rating)

        summary = repo.get_summary(business.id)

        assert summary.product_count == 2
        assert summary.review_count == 3
        assert summary.average_rating == pytest.approx(4.0)

    def test_average_is_none_without_reviews(self, repo, seed):
        business = seed.business()
        seed.product(business)

        summary = repo.get_summary(business.id)

        assert summary.average_rating is None
        assert summary.review_count == 0
        assert summary.product_count == 1

    def test_owner_name_from_owner_row(self, repo, seed):
        owner = seed.user(first_name="Kwame", last_name="Asante")
        business = seed.business(owner)

        assert repo.get_summary(business.id).owner_name == "Kwame Asante"

    def test_listing_uses_bounded_number_of_queries(self, repo, seed, engine):
        for i in range(5):
            business = seed.business(hours=i)
            seed.product(business)
            seed.review(business, 5)

        with count_queries(engine) as counter:
            page = repo.query(QuerySpec())

        assert len(page.items) == 5
        assert counter["count"] <= 2


class TestDetail:
    def test_embeds_available_products_and_recent_reviews(self, repo, seed):
        business = seed.business()
        seed.product(business, name="P1", is_available=True)
        seed.product(business, name="P2", is_available=False)
        reviewer = seed.user(first_name=None, last_name=None, username="yaw")
        seed.review(business, 2, author=reviewer, hours=1, comment="old")
        seed.review(business, 4, hours=2, comment="middle")
        seed.review(business, 5, hours=3, comment="new")

        detail = repo.get_detail(business.id, review_limit=2)

        assert [p.name for p in detail.products] == ["P1"]
        assert [r.comment for r in detail.reviews] == ["new", "middle"]
        assert detail.business.review_count == 3

    def test_author_name_falls_back_to_username(self, repo, seed):
        business = seed.business()
        reviewer = seed.user(first_name=None, last_name=None, username="yaw")
        seed.review(business, 3, author=reviewer)

        (review,) = repo.get_detail(business.id, review_limit=10).reviews

        assert review.author_name == "yaw"
        assert review.author_username == "yaw"

    def test_missing_or_inactive_business(self, repo, seed):
        inactive = seed.business(is_active=False)

        assert repo.get_detail(999, review_limit=10) is None
        assert repo.get_detail(inactive.id, review_limit=10) is None


class TestListing:
    def test_newest_first(self, repo, seed):
        old = seed.business(name="Old", hours=0)
        new = seed.business(name="New", hours=5)

        page = repo.query(QuerySpec())

        assert [b.id for b in page.items] == [new.id, old.id]

    def test_filters_are_anded(self, repo, seed):
        seed.business(name="A", category="Food", location="Kotei")
        seed.business(name="B", category="Food", location="Ayeduase")
        seed.business(name="C", category="Retail", location="Kotei")

        spec = QuerySpec(
            filters=FilterSpec().add_equals("category", "Food").add_equals("location", "Kotei")
        )
        page = repo.query(spec)

        assert [b.name for b in page.items] == ["A"]
        assert page.total == 1

    def test_total_counts_all_matches_not_page_size(self, repo, seed):
        for i in range(25):
            seed.business(name=f"Shop {i}", hours=i)

        page = repo.query(QuerySpec(page=PageSpec(page=3, per_page=10)))

        assert page.total == 25
        assert len(page.items) == 5
        assert page.total_pages == 3
        assert page.has_next is False
        assert page.has_prev is True

    def test_page_past_the_end_is_empty_with_real_total(self, repo, seed):
        for i in range(3):
            seed.business(hours=i)

        page = repo.query(QuerySpec(page=PageSpec(page=5, per_page=10)))

        assert page.items == ()
        assert page.total == 3

    def test_huge_page_number_returns_empty_page(self, repo, seed):
        seed.business()

        page = repo.query(QuerySpec(page=PageSpec.from_raw("99999999999999999999", "10")))

        assert page.items == ()
        assert page.total == 1

    def test_huge_limit_is_clamped(self, repo, seed):
        business = seed.business()

        page = repo.query(QuerySpec(page=PageSpec.from_raw("1", "99999999999999999999")))

        assert page.per_page == 100
        assert [b.id for b in page.items] == [business.id]

    def test_inactive_businesses_are_excluded(self, repo, seed):
        seed.business(name="Visible")
        seed.business(name="Hidden", is_active=False)

        page = repo.query(QuerySpec())

        assert [b.name for b in page.items] == ["Visible"]
        assert page.total == 1


class TestSearch:
    def test_name_matches_rank_before_description_matches(self, repo, seed):
        a = seed.business(name="Jollof Spot", description="Rice dishes", hours=0)
        b = seed.business(name="Campus Eats", description="Best jollof in town", hours=5)
        seed.business(name="Book Nook", description="Textbooks", hours=9)

        page = repo.query(_search_spec("jollof"))

        assert [x.id for x in page.items] == [a.id, b.id]
        assert page.total == 2

    def test_recency_breaks_ties_within_a_tier(self, repo, seed):
        older = seed.business(name="Jollof One", hours=0)
        newer = seed.business(name="Jollof Two", hours=1)

        page = repo.query(_search_spec("jollof"))

        assert [x.id for x in page.items] == [newer.id, older.id]

    def test_case_insensitive(self, repo, seed):
        seed.business(name="Jollof Spot")

        assert repo.query(_search_spec("JOLLOF")).total == 1

    def test_wildcards_in_term_match_literally(self, repo, seed):
        seed.business(name="100% Natural")
        seed.business(name="Plain Shop")

        page = repo.query(_search_spec("%"))

        assert [b.name for b in page.items] == ["100% Natural"]

    def test_search_combines_with_category(self, repo, seed):
        seed.business(name="Jollof Spot", category="Food")
        seed.business(name="Jollof Prints", category="Printing")

        page = repo.query(_search_spec("jollof", category="Printing"))

        assert [b.name for b in page.items] == ["Jollof Prints"]

    def test_inactive_matches_are_excluded(self, repo, seed):
        seed.business(name="Jollof Spot", is_active=False)

        page = repo.query(_search_spec("jollof"))

        assert page.items == ()
        assert page.total == 0


class TestWrites:
    def test_create_returns_id_of_active_business(self, repo, seed):
        owner = seed.user()

        business_id = repo.create(
            owner_id=owner.id,
            name="Fresh Juice",
            description="Cold pressed",
            category="Food",
            location="Kotei",
            contact_number="0200000000",
        )

        summary = repo.get_summary(business_id)
        assert summary.name == "Fresh Juice"
        assert summary.is_active is True
        assert repo.has_active_business(owner.id) is True

    def test_second_active_business_is_a_conflict(self, repo, seed):
        owner = seed.user()
        seed.business(owner)

        with pytest.raises(ConflictError):
            repo.create(
                owner_id=owner.id,
                name="Second",
                description="Nope",
                category="Food",
                location="Kotei",
                contact_number="0200000000",
            )

    def test_update_writes_only_given_fields(self, repo, seed, session):
        business = seed.business(name="Old Name", location="Kotei")
        before = business.updated_at

        repo.update(business.id, name="New Name")
        session.expire_all()

        summary = repo.get_summary(business.id)
        assert summary.name == "New Name"
        assert summary.location == "Kotei"
        assert summary.updated_at > before

    def test_deactivate_hides_business_and_frees_owner(self, repo, seed, session):
        owner = seed.user()
        business = seed.business(owner)

        repo.deactivate(business.id)
        session.expire_all()

        assert repo.get_summary(business.id) is None
        assert repo.get_owner_id(business.id) is None
        assert repo.has_active_business(owner.id) is False
        # The partial unique index only covers active rows.
        repo.create(
            owner_id=owner.id,
            name="Second Act",
            description="Back again",
            category="Food",
            location="Kotei",
            contact_number="0200000000",
        )


class TestDisplayName:
    @pytest.mark.parametrize(
        "first, last, username, expected",
        [
            ("Ama", "Mensah", "ama", "Ama Mensah"),
            ("Ama", None, "ama", "Ama"),
            (None, None, "ama", "ama"),
            (None, None, None, None),
        ],
    )
    def test_display_name(self, first, last, username, expected):
        assert display_name(first, last, username) == expected
