"""URL slugs derived from display names.

Format: lowercase ASCII words joined by single hyphens.
E.g., "Docking Stations" -> "docking-stations", "Crème Brûlée" -> "creme-brulee"
"""

import re

from django.utils.text import slugify

_CANONICAL_SLUG = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def generate_slug(name: str) -> str:
    """Derive a URL-safe slug from ``name``.

    Non-ASCII characters are transliterated where a decomposition exists and
    dropped otherwise. Underscores separate words, like spaces do.
    """
    slug = slugify(str(name).replace("_", " "), allow_unicode=False)
    return re.sub(r"-{2,}", "-", slug).strip("-")


def is_canonical_slug(value: str) -> bool:
    return bool(value) and _CANONICAL_SLUG.match(value) is not None
