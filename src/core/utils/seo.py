"""SEO friendly name generation for picture filenames."""

import re
import unicodedata

from core.utils.constants import SEO_ALLOWED_CHARS, SEO_MAX_LENGTH

_WHITESPACE = re.compile(r"\s+")
_REPEATED_DASHES = re.compile(r"-{2,}")


def get_se_name(name: str | None, *, max_length: int = SEO_MAX_LENGTH) -> str:
    """Convert a display name into a URL-friendly slug.

    Example:
        "Blue Sneakers (Größe 42)!" -> "blue-sneakers-groe-42"
    """
    if not name:
        return ""

    # Fold accents to their ASCII base letter where one exists
    folded = unicodedata.normalize("NFKD", name.strip().lower())
    folded = "".join(ch for ch in folded if not unicodedata.combining(ch))
    folded = _WHITESPACE.sub("-", folded)

    slug = "".join(ch for ch in folded if ch in SEO_ALLOWED_CHARS)
    slug = _REPEATED_DASHES.sub("-", slug).strip("-")

    return slug[:max_length].rstrip("-")
