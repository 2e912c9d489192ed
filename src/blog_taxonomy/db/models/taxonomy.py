"""Taxonomy models: categories and tags."""

from typing import TYPE_CHECKING

from sqlalchemy import Enum, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from blog_taxonomy.config import TAXONOMY_TITLE_SLUG_MAXLEN
from blog_taxonomy.db.base import Base, TimestampMixin
from blog_taxonomy.validation import (
    TaxonomyType,
    TaxonomyValidationError,
    ValidationError,
    check_title_length,
    title_key,
    validate_slug,
)

if TYPE_CHECKING:
    from blog_taxonomy.db.models.post import Post


class Taxonomy(TimestampMixin, Base):
    """Named classification entry attached to posts.

    Categories and tags share the ``taxonomies`` table and are told apart by
    ``type``. Titles and slugs are unique per type; ``title_key`` holds the
    casefolded title so the database enforces case-insensitive uniqueness.

    Attributes:
        id: Auto-increment primary key.
        type: Category or Tag.
        title: Human-readable title.
        title_key: Normalized title used for uniqueness.
        slug: URL-safe identifier derived from the title.
        description: Optional free text.
        created_at: When the entry was created.
        updated_at: When the entry was last modified.
    """

    __tablename__ = "taxonomies"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    type: Mapped[TaxonomyType] = mapped_column(
        Enum(TaxonomyType, name="taxonomy_type"), nullable=False
    )
    title: Mapped[str] = mapped_column(
        String(TAXONOMY_TITLE_SLUG_MAXLEN), nullable=False
    )
    title_key: Mapped[str] = mapped_column(String(1024), nullable=False)
    slug: Mapped[str] = mapped_column(String(TAXONOMY_TITLE_SLUG_MAXLEN), nullable=False)
    description: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    __mapper_args__ = {"polymorphic_on": "type"}

    __table_args__ = (
        UniqueConstraint("type", "slug", name="uq_taxonomies_type_slug"),
        UniqueConstraint("type", "title_key", name="uq_taxonomies_type_title_key"),
        Index("ix_taxonomies_type", "type"),
    )

    @validates("title")
    def validate_title_bounds(self, _key: str, value: str) -> str:
        """Check title bounds and keep title_key in sync.

        Raises:
            ValueError: If the title is empty or too long.
        """
        try:
            check_title_length(value, TaxonomyType(self.__mapper__.polymorphic_identity))
        except TaxonomyValidationError as e:
            raise ValueError(str(e)) from e
        self.title_key = title_key(value)
        return value

    @validates("slug")
    def validate_slug_format(self, _key: str, value: str) -> str:
        """Validate and normalize the slug.

        Raises:
            ValueError: If the slug is not valid.
        """
        try:
            return validate_slug(value, field_name="slug")
        except ValidationError as e:
            raise ValueError(str(e)) from e

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self.id}, slug={self.slug!r})>"


class Category(Taxonomy):
    """A post's single primary classification."""

    __mapper_args__ = {"polymorphic_identity": TaxonomyType.CATEGORY}

    posts: Mapped[list["Post"]] = relationship(back_populates="category")


class Tag(Taxonomy):
    """A free-form label; posts can carry many."""

    __mapper_args__ = {"polymorphic_identity": TaxonomyType.TAG}

    posts: Mapped[list["Post"]] = relationship(
        secondary="post_tags", back_populates="tags"
    )


MODEL_BY_TYPE: dict[TaxonomyType, type[Taxonomy]] = {
    TaxonomyType.CATEGORY: Category,
    TaxonomyType.TAG: Tag,
}
