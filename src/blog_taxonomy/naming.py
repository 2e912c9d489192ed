"""Title validation and slug derivation for categories and tags."""

from collections.abc import Iterable
from dataclasses import dataclass

from blog_taxonomy.slugs import derive_slug
from blog_taxonomy.validation import (
    TaxonomyType,
    TaxonomyValidationError,
    validate_title,
)


@dataclass(frozen=True)
class TitleValidation:
    """Outcome of validating a candidate title.

    Exactly one of ``title`` and ``error`` is set.
    """

    title: str | None = None
    error: TaxonomyValidationError | None = None

    @property
    def is_valid(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str | None:
        """User-facing message for a failed validation."""
        return self.error.message if self.error else None


class TaxonomyNamingService:
    """Decides whether a title is acceptable and derives its slug.

    The service is stateless: callers pass in a snapshot of the titles
    and slugs currently stored for the taxonomy type. It does not close the
    race between reading that snapshot and writing the new entry; the
    storage layer's unique constraints do.
    """

    def validate(
        self,
        candidate_title: str,
        existing_titles: Iterable[str],
        taxonomy_type: TaxonomyType,
    ) -> TitleValidation:
        """Validate a title against existing titles of the same type.

        Args:
            candidate_title: Proposed title.
            existing_titles: Current titles of taxonomy_type, without the
                entry being renamed.
            taxonomy_type: Category or Tag.

        Returns:
            TitleValidation holding the unchanged title or the typed error.
        """
        try:
            title = validate_title(candidate_title, existing_titles, taxonomy_type)
        except TaxonomyValidationError as e:
            return TitleValidation(error=e)
        return TitleValidation(title=title)

    def derive_slug(self, title: str, existing_slugs: Iterable[str] = ()) -> str:
        """Derive a slug for title, unique among existing_slugs."""
        return derive_slug(title, existing_slugs)
