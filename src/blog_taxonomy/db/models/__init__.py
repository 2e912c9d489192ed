"""ORM models."""

from blog_taxonomy.db.models.post import Post, PostStatus, post_tags
from blog_taxonomy.db.models.taxonomy import (
    MODEL_BY_TYPE,
    Category,
    Tag,
    Taxonomy,
)

__all__ = [
    "MODEL_BY_TYPE",
    "Category",
    "Post",
    "PostStatus",
    "Tag",
    "Taxonomy",
    "post_tags",
]
