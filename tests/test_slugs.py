"""Tests for slug derivation."""

import pytest

from blog_taxonomy.config import SLUG_SUFFIX_MAX_ATTEMPTS, TAXONOMY_TITLE_SLUG_MAXLEN
from blog_taxonomy.slugs import (
    FALLBACK_SLUG_LENGTH,
    SlugCollisionUnresolvedError,
    derive_slug,
    slugify_title,
)
from blog_taxonomy.validation import is_valid_slug


class TestSlugifyTitle:
    """Tests for slugify_title function."""

    def test_lowercases(self) -> None:
        assert slugify_title("Rust") == "rust"

    def test_collapses_punctuation_and_whitespace(self) -> None:
        assert slugify_title("Hello,   World!") == "hello-world"

    def test_trims_edge_hyphens(self) -> None:
        assert slugify_title("  --Web Dev--  ") == "web-dev"

    def test_transliterates_accents(self) -> None:
        assert slugify_title("Crème Brûlée") == "creme-brulee"

    def test_symbol_only_title_falls_back_to_hash(self) -> None:
        slug = slugify_title("!!!")
        assert len(slug) == FALLBACK_SLUG_LENGTH
        assert is_valid_slug(slug)

    def test_fallback_is_deterministic(self) -> None:
        assert slugify_title("@#$%") == slugify_title("@#$%")
        assert slugify_title("@#$%") != slugify_title("!!!")

    def test_truncates_to_max_length(self) -> None:
        assert len(slugify_title("a" * 300)) == TAXONOMY_TITLE_SLUG_MAXLEN

    def test_truncation_does_not_leave_trailing_hyphen(self) -> None:
        slug = slugify_title("word " * 100)
        assert len(slug) <= TAXONOMY_TITLE_SLUG_MAXLEN
        assert not slug.endswith("-")

    def test_comma_between_digits_separates(self) -> None:
        assert slugify_title("10,000 Tips") == "10-000-tips"
        assert slugify_title("Version 1,2") == "version-1-2"

    def test_html_entities_kept_as_text(self) -> None:
        assert slugify_title("Q&amp;A") == "q-amp-a"
        assert slugify_title("C&#35; Tips") == "c-35-tips"

    def test_apostrophe_separates(self) -> None:
        assert slugify_title("Don't Panic") == "don-t-panic"


class TestDeriveSlug:
    """Tests for derive_slug function."""

    def test_free_slug_used_as_is(self) -> None:
        assert derive_slug("Rust", ["aspnet", "cs"]) == "rust"

    def test_collision_appends_suffix(self) -> None:
        assert derive_slug("Rust", ["rust"]) == "rust-2"

    def test_suffix_skips_taken_numbers(self) -> None:
        assert derive_slug("Rust", ["rust", "rust-2", "rust-3"]) == "rust-4"

    def test_existing_slugs_compared_lowercase(self) -> None:
        assert derive_slug("Rust", ["RUST"]) == "rust-2"

    def test_same_inputs_give_same_slug(self) -> None:
        existing = ["web-dev", "web-dev-2"]
        assert derive_slug("Web Dev", existing) == derive_slug("Web Dev", existing)

    def test_suffixed_slug_fits_max_length(self) -> None:
        title = "a" * TAXONOMY_TITLE_SLUG_MAXLEN
        slug = derive_slug(title, [title])
        assert len(slug) == TAXONOMY_TITLE_SLUG_MAXLEN
        assert slug.endswith("-2")

    def test_last_allowed_suffix_used(self) -> None:
        last = SLUG_SUFFIX_MAX_ATTEMPTS + 1
        taken = ["rust"] + [f"rust-{n}" for n in range(2, last)]
        assert derive_slug("Rust", taken) == f"rust-{last}"

    def test_gives_up_after_max_attempts(self) -> None:
        taken = ["rust"] + [f"rust-{n}" for n in range(2, SLUG_SUFFIX_MAX_ATTEMPTS + 2)]
        with pytest.raises(SlugCollisionUnresolvedError) as exc_info:
            derive_slug("Rust", taken)
        assert exc_info.value.base_slug == "rust"
        assert exc_info.value.attempts == SLUG_SUFFIX_MAX_ATTEMPTS
