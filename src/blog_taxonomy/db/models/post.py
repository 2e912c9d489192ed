"""Post model and its tag association table."""

import enum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Column, Enum, ForeignKey, Index, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blog_taxonomy.db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from blog_taxonomy.db.models.taxonomy import Category, Tag


class PostStatus(str, enum.Enum):
    """Publication state of a post."""

    DRAFT = "draft"
    PUBLISHED = "published"


post_tags = Table(
    "post_tags",
    Base.metadata,
    Column("post_id", ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True),
    Column(
        "tag_id", ForeignKey("taxonomies.id", ondelete="CASCADE"), primary_key=True
    ),
)


class Post(TimestampMixin, Base):
    """Blog post classified by one category and any number of tags."""

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(250), nullable=False)
    slug: Mapped[str] = mapped_column(String(250), unique=True, nullable=False)
    body: Mapped[str] = mapped_column(Text, default="", nullable=False)
    status: Mapped[PostStatus] = mapped_column(
        Enum(PostStatus, name="post_status"), default=PostStatus.DRAFT, nullable=False
    )
    category_id: Mapped[int | None] = mapped_column(
        ForeignKey("taxonomies.id"), nullable=True
    )

    # Relationships
    category: Mapped[Optional["Category"]] = relationship(back_populates="posts")
    tags: Mapped[list["Tag"]] = relationship(
        secondary=post_tags, back_populates="posts"
    )

    __table_args__ = (Index("ix_posts_category_id", "category_id"),)

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, slug={self.slug!r})>"
