"""Unit tests for frontmatter.py"""

import yaml

from roampub.core.frontmatter import FrontMatter, build_document


def test_render_preserves_encounter_order():
    fm = FrontMatter()
    fm.add("title", "Notes")
    fm.add("author", "Someone")
    assert fm.render() == "---\ntitle: Notes\nauthor: Someone\n---\n\n"


def test_duplicate_key_keeps_first_position_last_value():
    """A repeated key stays where it first appeared but takes its latest value."""
    fm = FrontMatter()
    fm.add("title", "First")
    fm.add("author", "Someone")
    fm.add("title", "Second")
    assert list(fm.as_dict().items()) == [("title", "Second"), ("author", "Someone")]


def test_add_strips_whitespace():
    fm = FrontMatter()
    fm.add("  key ", "  value  ")
    assert fm.entries == [("key", "value")]


def test_setdefault_inserts_first_only_when_missing():
    fm = FrontMatter()
    fm.add("ID", "F1")
    fm.setdefault("title", "notes")
    fm.setdefault("ID", "other")
    assert fm.keys() == ["title", "ID"]
    assert fm.as_dict()["ID"] == "F1"


def test_render_is_valid_yaml():
    """Values that need quoting survive a YAML round trip."""
    fm = FrontMatter()
    fm.add("title", "Colons: and # hashes")
    fm.add("tags", "yes")
    fm.add("name", "Café")
    header = fm.render()
    assert "Café" in header
    loaded = yaml.safe_load(header.strip().strip("-"))
    assert loaded == {"title": "Colons: and # hashes", "tags": "yes", "name": "Café"}


def test_empty_front_matter():
    assert FrontMatter().render() == "---\n{}\n---\n\n"


def test_build_document_strips_leading_newlines():
    fm = FrontMatter()
    fm.add("title", "T")
    assert build_document(fm, "\n\nbody\n") == "---\ntitle: T\n---\n\nbody\n"
