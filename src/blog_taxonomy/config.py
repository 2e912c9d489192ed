"""Central configuration for the blog-taxonomy project."""

import os
from pathlib import Path

# Paths
PROJECT_ROOT = Path(__file__).parent.parent.parent
DATA_DIR = PROJECT_ROOT / "data"

# Database
DATABASE_URL = os.environ.get(
    "BLOG_TAXONOMY_DATABASE_URL", f"sqlite:///{DATA_DIR}/blog_taxonomy.db"
)

# Shared upper bound for taxonomy titles and slugs
TAXONOMY_TITLE_SLUG_MAXLEN = 250

# Numeric slug suffixes tried (-2, -3, ...) before giving up
SLUG_SUFFIX_MAX_ATTEMPTS = 100

# Category that receives posts whose category is deleted
DEFAULT_CATEGORY_TITLE = "Uncategorized"


def ensure_data_dir() -> None:
    """Create data directory if it doesn't exist."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)
