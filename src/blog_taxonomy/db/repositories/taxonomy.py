"""Taxonomy repository for database operations."""

from collections.abc import Sequence

from sqlalchemy import and_, func, select
from sqlalchemy.orm import Session

from blog_taxonomy.db.models import MODEL_BY_TYPE, Post, PostStatus, Taxonomy, post_tags
from blog_taxonomy.logging import get_logger
from blog_taxonomy.validation import TaxonomyType, title_key


class TaxonomyRepository:
    """Repository for Category or Tag persistence operations.

    One repository instance serves one taxonomy type; every query is scoped
    to that type's namespace.
    """

    def __init__(self, session: Session, taxonomy_type: TaxonomyType) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations.
            taxonomy_type: Which taxonomy namespace this repository serves.
        """
        self._session = session
        self._type = taxonomy_type
        self._model = MODEL_BY_TYPE[taxonomy_type]
        self._log = get_logger(taxonomy_type=taxonomy_type.value)

    @property
    def taxonomy_type(self) -> TaxonomyType:
        return self._type

    def list_all(self) -> Sequence[Taxonomy]:
        """Return all entries ordered by title."""
        stmt = select(self._model).order_by(self._model.title_key)
        return self._session.scalars(stmt).all()

    def get(self, taxonomy_id: int) -> Taxonomy | None:
        stmt = select(self._model).where(self._model.id == taxonomy_id)
        return self._session.scalars(stmt).first()

    def get_by_slug(self, slug: str) -> Taxonomy | None:
        stmt = select(self._model).where(self._model.slug == slug.lower())
        return self._session.scalars(stmt).first()

    def get_by_title(self, title: str) -> Taxonomy | None:
        """Find an entry whose title equals title, ignoring case."""
        stmt = select(self._model).where(self._model.title_key == title_key(title))
        return self._session.scalars(stmt).first()

    def list_titles(self, exclude_id: int | None = None) -> list[str]:
        """Return current titles, optionally leaving one entry out.

        Args:
            exclude_id: Entry to leave out, e.g. the one being renamed.
        """
        stmt = select(self._model.title)
        if exclude_id is not None:
            stmt = stmt.where(self._model.id != exclude_id)
        return list(self._session.scalars(stmt).all())

    def list_slugs(self, exclude_id: int | None = None) -> list[str]:
        """Return current slugs, optionally leaving one entry out."""
        stmt = select(self._model.slug)
        if exclude_id is not None:
            stmt = stmt.where(self._model.id != exclude_id)
        return list(self._session.scalars(stmt).all())

    def list_with_post_counts(self) -> list[tuple[Taxonomy, int]]:
        """Return all entries with the number of published posts using each.

        Drafts are not counted. Entries without posts are included with 0.
        """
        model = self._model
        published = Post.status == PostStatus.PUBLISHED

        if self._type is TaxonomyType.CATEGORY:
            stmt = select(model, func.count(Post.id)).outerjoin(
                Post, and_(Post.category_id == model.id, published)
            )
        else:
            stmt = (
                select(model, func.count(Post.id))
                .outerjoin(post_tags, post_tags.c.tag_id == model.id)
                .outerjoin(Post, and_(Post.id == post_tags.c.post_id, published))
            )

        stmt = stmt.group_by(model.id).order_by(model.title_key)
        return [(entry, count) for entry, count in self._session.execute(stmt).all()]

    def add(self, title: str, slug: str, description: str | None = None) -> Taxonomy:
        """Create a new entry in the session.

        The entry is only flushed by the caller; uniqueness is enforced by
        the database at that point.
        """
        entry = self._model(title=title, slug=slug, description=description)
        self._session.add(entry)
        self._log.debug("Added taxonomy", title=title, slug=slug)
        return entry

    def delete(self, entry: Taxonomy) -> None:
        slug = entry.slug
        self._session.delete(entry)
        self._log.debug("Deleted taxonomy", slug=slug)
