"""Create, rename and delete flows for categories and tags."""

from collections.abc import Iterable, Mapping

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blog_taxonomy.config import DEFAULT_CATEGORY_TITLE
from blog_taxonomy.db.models import Tag, Taxonomy
from blog_taxonomy.db.repositories import TaxonomyRepository
from blog_taxonomy.logging import get_logger
from blog_taxonomy.naming import TaxonomyNamingService
from blog_taxonomy.validation import (
    DuplicateTitleError,
    TaxonomyType,
    check_title_length,
    title_key,
)


class TaxonomyNotFoundError(Exception):
    """Raised when a category or tag does not exist."""

    def __init__(self, taxonomy_type: TaxonomyType, identifier: int | str) -> None:
        """Initialize TaxonomyNotFoundError.

        Args:
            taxonomy_type: Kind of entry that was looked up.
            identifier: Id or slug that was not found.
        """
        self.taxonomy_type = taxonomy_type
        self.identifier = identifier
        self.message = f"{taxonomy_type.value} '{identifier}' not found."
        super().__init__(self.message)


class DefaultCategoryDeletionError(Exception):
    """Raised when trying to delete the default category."""

    def __init__(self, title: str) -> None:
        self.title = title
        self.message = f"Category '{title}' is the default category and cannot be deleted."
        super().__init__(self.message)


class TaxonomyService:
    """Business operations for categories and tags.

    Titles are validated against the current snapshot read from the
    repository, then the entry is flushed. A unique-constraint violation on
    flush means another writer took the title in between; it is reported
    as DuplicateTitleError after rolling back the session.
    """

    def __init__(
        self,
        session: Session,
        repositories: Mapping[TaxonomyType, TaxonomyRepository] | None = None,
        naming: TaxonomyNamingService | None = None,
    ) -> None:
        """Initialize service.

        Args:
            session: SQLAlchemy session shared by the repositories.
            repositories: Repository per taxonomy type; built from session
                when omitted.
            naming: Title/slug naming service.
        """
        self._session = session
        self._repos = dict(repositories) if repositories else {
            taxonomy_type: TaxonomyRepository(session, taxonomy_type)
            for taxonomy_type in TaxonomyType
        }
        self._naming = naming or TaxonomyNamingService()
        self._log = get_logger()

    def repository(self, taxonomy_type: TaxonomyType) -> TaxonomyRepository:
        return self._repos[taxonomy_type]

    def create(
        self,
        taxonomy_type: TaxonomyType,
        title: str,
        description: str | None = None,
    ) -> Taxonomy:
        """Create a category or tag from a title.

        Args:
            taxonomy_type: Kind of entry to create.
            title: Proposed title.
            description: Optional description.

        Returns:
            The flushed entry, with its derived slug.

        Raises:
            EmptyTitleError: If the title is blank.
            TitleTooLongError: If the title is too long.
            DuplicateTitleError: If the title is taken.
            SlugCollisionUnresolvedError: If no free slug could be found.
        """
        repo = self.repository(taxonomy_type)
        result = self._naming.validate(title, repo.list_titles(), taxonomy_type)
        if result.error is not None:
            self._log.warning(
                "Rejected taxonomy title",
                taxonomy_type=taxonomy_type.value,
                title=title,
                error=result.message,
            )
            raise result.error

        slug = self._naming.derive_slug(title, repo.list_slugs())
        entry = repo.add(title, slug, description)
        self._flush(taxonomy_type, title)
        self._log.info(
            "Created taxonomy", taxonomy_type=taxonomy_type.value, title=title, slug=slug
        )
        return entry

    def update(
        self,
        taxonomy_type: TaxonomyType,
        taxonomy_id: int,
        title: str,
        description: str | None = None,
    ) -> Taxonomy:
        """Rename an entry and re-derive its slug.

        The entry's own current title and slug are left out of the
        uniqueness checks, so changing only the case of a title succeeds.

        Raises:
            TaxonomyNotFoundError: If the entry does not exist.
            TaxonomyValidationError: If the new title is rejected.
        """
        repo = self.repository(taxonomy_type)
        entry = repo.get(taxonomy_id)
        if entry is None:
            raise TaxonomyNotFoundError(taxonomy_type, taxonomy_id)

        result = self._naming.validate(
            title, repo.list_titles(exclude_id=taxonomy_id), taxonomy_type
        )
        if result.error is not None:
            self._log.warning(
                "Rejected taxonomy rename",
                taxonomy_type=taxonomy_type.value,
                taxonomy_id=taxonomy_id,
                title=title,
                error=result.message,
            )
            raise result.error

        old_slug = entry.slug
        entry.title = title
        entry.slug = self._naming.derive_slug(
            title, repo.list_slugs(exclude_id=taxonomy_id)
        )
        if description is not None:
            entry.description = description
        self._flush(taxonomy_type, title)
        self._log.info(
            "Updated taxonomy",
            taxonomy_type=taxonomy_type.value,
            taxonomy_id=taxonomy_id,
            old_slug=old_slug,
            slug=entry.slug,
        )
        return entry

    def delete(self, taxonomy_type: TaxonomyType, taxonomy_id: int) -> None:
        """Delete an entry.

        Posts of a deleted category move to the default category. Deleting a
        tag only removes its post associations.

        Raises:
            TaxonomyNotFoundError: If the entry does not exist.
            DefaultCategoryDeletionError: If the entry is the default category.
        """
        repo = self.repository(taxonomy_type)
        entry = repo.get(taxonomy_id)
        if entry is None:
            raise TaxonomyNotFoundError(taxonomy_type, taxonomy_id)

        if taxonomy_type is TaxonomyType.CATEGORY:
            if entry.title_key == title_key(DEFAULT_CATEGORY_TITLE):
                raise DefaultCategoryDeletionError(entry.title)
            default = self.ensure_default_category()
            posts = list(entry.posts)
            for post in posts:
                post.category = default
            self._log.info(
                "Moved posts to default category",
                from_slug=entry.slug,
                to_slug=default.slug,
                count=len(posts),
            )

        slug = entry.slug
        repo.delete(entry)
        self._session.flush()
        self._log.info("Deleted taxonomy", taxonomy_type=taxonomy_type.value, slug=slug)

    def get_by_slug(self, taxonomy_type: TaxonomyType, slug: str) -> Taxonomy:
        """Return the entry with slug.

        Raises:
            TaxonomyNotFoundError: If no entry has that slug.
        """
        entry = self.repository(taxonomy_type).get_by_slug(slug)
        if entry is None:
            raise TaxonomyNotFoundError(taxonomy_type, slug)
        return entry

    def list_with_counts(self, taxonomy_type: TaxonomyType) -> list[tuple[Taxonomy, int]]:
        """Return entries of a type with their published post counts."""
        return self.repository(taxonomy_type).list_with_post_counts()

    def ensure_default_category(self) -> Taxonomy:
        """Return the default category, creating it if missing."""
        existing = self.repository(TaxonomyType.CATEGORY).get_by_title(
            DEFAULT_CATEGORY_TITLE
        )
        if existing is not None:
            return existing
        return self.create(TaxonomyType.CATEGORY, DEFAULT_CATEGORY_TITLE)

    def get_or_create_tags(self, titles: Iterable[str]) -> list[Tag]:
        """Resolve tag titles to tags, creating the missing ones.

        Matching is case-insensitive, so "C#" reuses an existing "c#" tag.
        Blank titles are skipped. When the batch repeats a title, the first
        spelling is used and the tag is returned once.

        Args:
            titles: Tag titles, e.g. from a post editor.

        Returns:
            Tags in the order their titles first appeared.
        """
        repo = self.repository(TaxonomyType.TAG)
        tags: list[Tag] = []
        seen_keys: set[str] = set()

        for title in titles:
            if not title or not title.strip():
                self._log.debug("Skipping blank tag title")
                continue

            title = title.strip()
            key = title_key(title)
            if key in seen_keys:
                self._log.debug("Skipping duplicate tag title in batch", title=title)
                continue
            seen_keys.add(key)

            existing = repo.get_by_title(title)
            if existing is not None:
                tags.append(existing)
                continue

            tags.append(self.create(TaxonomyType.TAG, title))

        return tags

    def preview_slug(self, taxonomy_type: TaxonomyType, title: str) -> str:
        """Return the slug a new entry with title would get right now."""
        check_title_length(title, taxonomy_type)
        return self._naming.derive_slug(
            title, self.repository(taxonomy_type).list_slugs()
        )

    def _flush(self, taxonomy_type: TaxonomyType, title: str) -> None:
        """Flush pending changes, mapping unique violations to duplicates."""
        try:
            self._session.flush()
        except IntegrityError as e:
            self._session.rollback()
            self._log.warning(
                "Taxonomy write lost uniqueness race",
                taxonomy_type=taxonomy_type.value,
                title=title,
            )
            raise DuplicateTitleError(taxonomy_type, title) from e
