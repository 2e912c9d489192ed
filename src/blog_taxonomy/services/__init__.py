"""Service layer exports."""

from blog_taxonomy.services.taxonomy import (
    DefaultCategoryDeletionError,
    TaxonomyNotFoundError,
    TaxonomyService,
)

__all__ = ["DefaultCategoryDeletionError", "TaxonomyNotFoundError", "TaxonomyService"]
