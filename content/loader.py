"""
Site content loader.

Reads data/site.json (or the file named by SITE_CONTENT_FILE) and validates
it into a frozen Site. Content is read once per process via get_site().
"""

import logging
import os
from functools import lru_cache
from pathlib import Path

from content.models import Site

DATA_DIR     = Path(__file__).parent.parent / "data"
CONTENT_FILE = DATA_DIR / "site.json"

log = logging.getLogger(__name__)


def content_path() -> Path:
    override = os.getenv("SITE_CONTENT_FILE")
    return Path(override) if override else CONTENT_FILE


def load_site(path: Path | None = None) -> Site:
    """Load and validate site content; raises on a missing or malformed file."""
    path = path or content_path()
    if not path.exists():
        raise FileNotFoundError(f"Site content not found at {path}. Set SITE_CONTENT_FILE or restore data/site.json.")

    site = Site.model_validate_json(path.read_text(encoding="utf-8"))
    log.info(
        "Loaded site content from %s (%d use cases, %d FAQ entries)",
        path, len(site.use_cases), len(site.faq),
    )
    return site


@lru_cache(maxsize=1)
def get_site() -> Site:
    return load_site()
