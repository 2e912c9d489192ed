"""Repository classes for database operations."""

from blog_taxonomy.db.repositories.taxonomy import TaxonomyRepository

__all__ = ["TaxonomyRepository"]
