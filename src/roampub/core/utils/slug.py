"""Slug generation for output filenames and wiki links"""

import re
import unicodedata


APOSTROPHES = re.compile(r"['’]")
SEPARATORS = re.compile(r'[\W_]+')


def slugify(text: str) -> str:
    """Lowercase text and join its words with single hyphens.

    Accented letters are folded to their base letter; other letters are kept,
    so non-Latin titles still produce a slug.
    """
    decomposed = unicodedata.normalize('NFKD', text)
    folded = ''.join(c for c in decomposed if not unicodedata.combining(c))
    folded = APOSTROPHES.sub('', folded.lower())
    return SEPARATORS.sub('-', folded).strip('-')


def with_extension(slug: str, ext: str) -> str:
    """Return 'slug.ext'; ext may be given with or without the leading dot."""
    return f"{slug}.{ext.lstrip('.')}"
