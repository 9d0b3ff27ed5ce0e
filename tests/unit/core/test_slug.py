"""Unit tests for utils/slug.py"""

import pytest

from roampub.core.utils.slug import slugify, with_extension


@pytest.mark.parametrize("text, expected", [
    ("Hello World", "hello-world"),
    ("  Leading and trailing  ", "leading-and-trailing"),
    ("What's new?", "whats-new"),
    ("snake_case title", "snake-case-title"),
    ("a -- b", "a-b"),
    ("Café au lait", "cafe-au-lait"),
    ("Ångström’s law", "angstroms-law"),
    ("日本語 ノート", "日本語-ノート"),
    ("!!!", ""),
])
def test_slugify(text, expected):
    """Accents fold, apostrophes vanish, every other separator run becomes one hyphen."""
    assert slugify(text) == expected


@pytest.mark.parametrize("ext", ["md", ".md"])
def test_with_extension(ext):
    """The extension is accepted with or without its dot."""
    assert with_extension("notes", ext) == "notes.md"
