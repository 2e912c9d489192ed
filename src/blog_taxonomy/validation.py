"""Validation utilities for taxonomy titles and slugs."""

import enum
import re
import unicodedata
from collections.abc import Iterable

from blog_taxonomy.config import TAXONOMY_TITLE_SLUG_MAXLEN

# Slug pattern: lowercase alphanumeric words joined by single hyphens
SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
SLUG_MAX_LENGTH = TAXONOMY_TITLE_SLUG_MAXLEN


class TaxonomyType(str, enum.Enum):
    """Kind of taxonomy entry; each kind is its own title/slug namespace."""

    CATEGORY = "Category"
    TAG = "Tag"


class ValidationError(Exception):
    """Raised when a slug fails validation."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class TaxonomyValidationError(Exception):
    """Base class for user-facing taxonomy title errors.

    Attributes:
        taxonomy_type: Kind of entry the title was proposed for.
        title: The candidate title as the caller supplied it.
        message: Message meant to be shown next to the title input.
    """

    def __init__(self, taxonomy_type: TaxonomyType, title: str, message: str) -> None:
        self.taxonomy_type = taxonomy_type
        self.title = title
        self.message = message
        super().__init__(message)


class EmptyTitleError(TaxonomyValidationError):
    """Raised when a title is empty after trimming."""

    def __init__(self, taxonomy_type: TaxonomyType, title: str) -> None:
        super().__init__(
            taxonomy_type, title, f"{taxonomy_type.value} title cannot be empty."
        )


class TitleTooLongError(TaxonomyValidationError):
    """Raised when a title exceeds the shared title/slug length bound."""

    def __init__(self, taxonomy_type: TaxonomyType, title: str) -> None:
        self.max_length = TAXONOMY_TITLE_SLUG_MAXLEN
        super().__init__(
            taxonomy_type,
            title,
            f"{taxonomy_type.value} title cannot exceed "
            f"{TAXONOMY_TITLE_SLUG_MAXLEN} characters.",
        )


class DuplicateTitleError(TaxonomyValidationError):
    """Raised when a title clashes case-insensitively with an existing one."""

    def __init__(self, taxonomy_type: TaxonomyType, title: str) -> None:
        super().__init__(
            taxonomy_type,
            title,
            f"{taxonomy_type.value} '{title}' is not available, "
            "please choose a different one.",
        )


def title_key(title: str) -> str:
    """Return the comparison key used for case-insensitive title equality.

    Titles are NFKC-normalized, trimmed and casefolded, so "Technology",
    " technology " and "TECHNOLOGY" share one key.
    """
    return unicodedata.normalize("NFKC", title).strip().casefold()


def check_title_length(title: str, taxonomy_type: TaxonomyType) -> str:
    """Check a title is non-empty and within the length bound.

    Args:
        title: Candidate title.
        taxonomy_type: Kind of entry, used to phrase the error.

    Returns:
        The title, unchanged.

    Raises:
        EmptyTitleError: If the title is empty after trimming.
        TitleTooLongError: If the title is longer than the bound.
    """
    if not title or not title.strip():
        raise EmptyTitleError(taxonomy_type, title or "")

    if len(title) > TAXONOMY_TITLE_SLUG_MAXLEN:
        raise TitleTooLongError(taxonomy_type, title)

    return title


def validate_title(
    title: str, existing_titles: Iterable[str], taxonomy_type: TaxonomyType
) -> str:
    """Validate a candidate title against the titles already in use.

    Args:
        title: Candidate title.
        existing_titles: Current titles of the same taxonomy type, without
            the entry being renamed.
        taxonomy_type: Kind of entry being created or renamed.

    Returns:
        The title, unchanged.

    Raises:
        EmptyTitleError: If the title is empty after trimming.
        TitleTooLongError: If the title is longer than the bound.
        DuplicateTitleError: If the title is already taken.
    """
    check_title_length(title, taxonomy_type)

    taken = {title_key(existing) for existing in existing_titles}
    if title_key(title) in taken:
        raise DuplicateTitleError(taxonomy_type, title)

    return title


def validate_slug(value: str, field_name: str = "slug") -> str:
    """Validate and normalize a slug string.

    Args:
        value: The string to validate.
        field_name: Name of the field for error messages.

    Returns:
        The normalized (lowercase) slug.

    Raises:
        ValidationError: If the value is not a valid slug.
    """
    if not value:
        raise ValidationError(field_name, "cannot be empty")

    # Normalize to lowercase
    normalized = value.lower()

    if len(normalized) > SLUG_MAX_LENGTH:
        raise ValidationError(field_name, f"cannot exceed {SLUG_MAX_LENGTH} characters")

    if not SLUG_PATTERN.match(normalized):
        raise ValidationError(
            field_name,
            "must contain only lowercase letters and numbers separated by "
            "single hyphens",
        )

    return normalized


def is_valid_slug(value: str) -> bool:
    """Check if a string is a valid slug without raising.

    Args:
        value: The string to check.

    Returns:
        True if valid, False otherwise.
    """
    try:
        validate_slug(value)
        return True
    except ValidationError:
        return False
