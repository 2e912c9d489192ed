"""Tests for TaxonomyRepository."""

import pytest
from sqlalchemy.orm import Session

from blog_taxonomy.db.models import Category, Tag
from blog_taxonomy.db.repositories import TaxonomyRepository
from blog_taxonomy.logging import configure_logging
from blog_taxonomy.validation import TaxonomyType
from tests.seed import (
    CAT_SLUG,
    CAT_TITLE,
    TAG1_TITLE,
    TAG2_SLUG,
    TAG2_TITLE,
    seed_test_post,
    seed_test_posts,
)


class TestTaxonomyRepository:
    """Tests for TaxonomyRepository lookups."""

    @pytest.fixture
    def tag_repo(self, db_session: Session) -> TaxonomyRepository:
        return TaxonomyRepository(db_session, TaxonomyType.TAG)

    @pytest.fixture
    def category_repo(self, db_session: Session) -> TaxonomyRepository:
        return TaxonomyRepository(db_session, TaxonomyType.CATEGORY)

    def test_list_titles_scoped_to_type(
        self,
        db_session: Session,
        tag_repo: TaxonomyRepository,
        category_repo: TaxonomyRepository,
    ) -> None:
        seed_test_post(db_session)

        assert sorted(tag_repo.list_titles()) == [TAG1_TITLE, TAG2_TITLE]
        assert category_repo.list_titles() == [CAT_TITLE]

    def test_list_titles_excludes_entry(
        self, db_session: Session, tag_repo: TaxonomyRepository
    ) -> None:
        post = seed_test_post(db_session)
        tag1 = next(t for t in post.tags if t.title == TAG1_TITLE)

        assert tag_repo.list_titles(exclude_id=tag1.id) == [TAG2_TITLE]

    def test_list_slugs_excludes_entry(
        self, db_session: Session, category_repo: TaxonomyRepository
    ) -> None:
        post = seed_test_post(db_session)

        assert category_repo.list_slugs() == [CAT_SLUG]
        assert category_repo.list_slugs(exclude_id=post.category_id) == []

    def test_get_by_title_ignores_case(
        self, db_session: Session, category_repo: TaxonomyRepository
    ) -> None:
        seed_test_post(db_session)

        found = category_repo.get_by_title("TECHNOLOGY")
        assert found is not None
        assert found.title == CAT_TITLE

    def test_get_by_slug(
        self, db_session: Session, tag_repo: TaxonomyRepository
    ) -> None:
        seed_test_post(db_session)

        found = tag_repo.get_by_slug(TAG2_SLUG)
        assert found is not None
        assert found.title == TAG2_TITLE
        assert tag_repo.get_by_slug(CAT_SLUG) is None

    def test_get_is_scoped_to_type(
        self, db_session: Session, tag_repo: TaxonomyRepository
    ) -> None:
        post = seed_test_post(db_session)

        assert tag_repo.get(post.category_id) is None

    def test_add_and_list_all_ordered_by_title(
        self, db_session: Session, tag_repo: TaxonomyRepository
    ) -> None:
        tag_repo.add("rust", "rust")
        tag_repo.add("Go", "go", description="Gophers")
        db_session.commit()

        entries = tag_repo.list_all()
        assert [e.title for e in entries] == ["Go", "rust"]
        assert all(isinstance(e, Tag) for e in entries)
        assert entries[0].description == "Gophers"

    def test_delete(self, db_session: Session, category_repo: TaxonomyRepository) -> None:
        entry = category_repo.add("Temp", "temp")
        db_session.commit()

        category_repo.delete(entry)
        db_session.commit()

        assert category_repo.list_all() == []

    def test_delete_fresh_lookup_after_commit(
        self, db_session: Session, tag_repo: TaxonomyRepository
    ) -> None:
        tag_repo.add("Temp", "temp")
        db_session.commit()
        entry = tag_repo.get_by_slug("temp")
        db_session.commit()

        tag_repo.delete(entry)
        db_session.commit()

        assert tag_repo.get_by_slug("temp") is None

    def test_log_events_carry_taxonomy_type(
        self, db_session: Session, capsys: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging()
        repo = TaxonomyRepository(db_session, TaxonomyType.TAG)

        repo.add("Rust", "rust")

        out = capsys.readouterr().out
        assert "Added taxonomy" in out
        assert "taxonomy_type" in out
        assert "Tag" in out


class TestPostCounts:
    """Tests for list_with_post_counts."""

    def test_tag_counts_only_published(self, db_session: Session) -> None:
        seed_test_posts(db_session, 5)
        repo = TaxonomyRepository(db_session, TaxonomyType.TAG)

        counts = {tag.title: count for tag, count in repo.list_with_post_counts()}
        # odd posts (1, 3, 5) are published asp.net posts; even ones are c# drafts
        assert counts == {TAG1_TITLE: 3, TAG2_TITLE: 0}

    def test_category_counts(self, db_session: Session) -> None:
        seed_test_posts(db_session, 4)
        db_session.add(Category(title="Empty", slug="empty"))
        db_session.commit()
        repo = TaxonomyRepository(db_session, TaxonomyType.CATEGORY)

        rows = repo.list_with_post_counts()
        assert [(c.title, n) for c, n in rows] == [("Empty", 0), (CAT_TITLE, 2)]
