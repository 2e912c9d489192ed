"""Slug derivation for taxonomy titles."""

import hashlib
from collections.abc import Iterable

from slugify import slugify

from blog_taxonomy.config import SLUG_SUFFIX_MAX_ATTEMPTS, TAXONOMY_TITLE_SLUG_MAXLEN

# Length of the hash used when a title has no sluggable characters
FALLBACK_SLUG_LENGTH = 8

# Commas separate words even between digits ("10,000" -> "10-000")
SEPARATOR_REPLACEMENTS = [[",", "-"]]


class SlugCollisionUnresolvedError(Exception):
    """Raised when no free numeric suffix is found for a slug."""

    def __init__(self, base_slug: str, attempts: int) -> None:
        """Initialize SlugCollisionUnresolvedError.

        Args:
            base_slug: Slug that kept colliding.
            attempts: Number of suffixes tried.
        """
        self.base_slug = base_slug
        self.attempts = attempts
        super().__init__(
            f"Could not find a free slug for {base_slug!r} after {attempts} attempts"
        )


def slugify_title(title: str, max_length: int = TAXONOMY_TITLE_SLUG_MAXLEN) -> str:
    """Convert a title to a URL-safe slug.

    Rules:
    - transliterate to ASCII and lowercase
    - collapse runs of characters outside [a-z0-9] to a single hyphen; HTML
      entities and digit groupings are kept as text, not decoded
    - trim leading/trailing hyphens
    - truncate to max_length

    Titles with nothing left after these rules (emoji, symbols) get a short
    hash of the title instead, so the result is never empty.
    """
    slug = slugify(
        title,
        max_length=max_length,
        word_boundary=False,
        entities=False,
        decimal=False,
        hexadecimal=False,
        replacements=SEPARATOR_REPLACEMENTS,
    )
    if not slug:
        digest = hashlib.sha1(title.encode("utf-8")).hexdigest()
        slug = digest[: min(FALLBACK_SLUG_LENGTH, max_length)]
    return slug


def derive_slug(
    title: str,
    existing_slugs: Iterable[str] = (),
    max_length: int = TAXONOMY_TITLE_SLUG_MAXLEN,
) -> str:
    """Derive a slug for title that is unique among existing_slugs.

    If the base slug is free it is used. Otherwise a numeric suffix is
    appended: ``slug-2``, ``slug-3``, etc. The base is shortened as needed
    so the suffixed slug still fits max_length.

    Args:
        title: Title to derive from.
        existing_slugs: Slugs already used by entries of the same type.
        max_length: Upper bound on the slug length.

    Returns:
        The derived slug.

    Raises:
        SlugCollisionUnresolvedError: If SLUG_SUFFIX_MAX_ATTEMPTS suffixes
            are all taken.
    """
    base_slug = slugify_title(title, max_length)
    taken = {slug.lower() for slug in existing_slugs if slug}
    if base_slug not in taken:
        return base_slug

    for counter in range(2, SLUG_SUFFIX_MAX_ATTEMPTS + 2):
        suffix = f"-{counter}"
        base_part = base_slug[: max_length - len(suffix)].rstrip("-")
        candidate = f"{base_part}{suffix}"
        if candidate not in taken:
            return candidate

    raise SlugCollisionUnresolvedError(base_slug, SLUG_SUFFIX_MAX_ATTEMPTS)
