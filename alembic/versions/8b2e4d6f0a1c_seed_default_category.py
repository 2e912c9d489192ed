"""seed default category

Revision ID: 8b2e4d6f0a1c
Revises: 3f1a9c2d7b4e
Create Date: 2026-10-12 10:21:07.552913

"""

from collections.abc import Sequence

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "8b2e4d6f0a1c"
down_revision: str | Sequence[str] | None = "3f1a9c2d7b4e"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Seed the Uncategorized category."""
    op.execute(
        """
        INSERT INTO taxonomies (type, title, title_key, slug, created_at, updated_at)
        SELECT
            'CATEGORY',
            'Uncategorized',
            'uncategorized',
            'uncategorized',
            CURRENT_TIMESTAMP,
            CURRENT_TIMESTAMP
        WHERE NOT EXISTS (
            SELECT 1 FROM taxonomies
            WHERE type = 'CATEGORY' AND title_key = 'uncategorized'
        )
        """
    )


def downgrade() -> None:
    """Remove the Uncategorized category."""
    op.execute(
        "DELETE FROM taxonomies WHERE type = 'CATEGORY' AND title_key = 'uncategorized'"
    )
