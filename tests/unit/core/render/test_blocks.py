"""Unit tests for render/blocks.py"""

import pytest

from roampub.core.render.blocks import BlockKind, tokenize_blocks


def kinds(lines):
    return [b.kind for b in tokenize_blocks(lines)]


def test_blank_lines_only_separate():
    """Two paragraphs split by blank lines; no block for the blanks themselves."""
    blocks = tokenize_blocks(["", "one", "still one", "", "", "two", ""])
    assert [b.kind for b in blocks] == [BlockKind.paragraph, BlockKind.paragraph]
    assert blocks[0].lines == ["one", "still one"]


def test_paragraph_lines_are_stripped():
    assert tokenize_blocks(["   indented text  "])[0].lines == ["indented text"]


def test_paragraph_ends_at_list():
    """A list item directly after text starts a new block."""
    assert kinds(["text", "- item"]) == [BlockKind.paragraph, BlockKind.list]


def test_src_block_language():
    """Named blocks keep their body lines and first argument."""
    block, = tokenize_blocks(["#+BEGIN_SRC python :results none", "x = 1", "#+END_SRC"])
    assert block.kind is BlockKind.src
    assert block.value == "python"
    assert block.lines == ["x = 1"]


@pytest.mark.parametrize("name, kind", [
    ("example", BlockKind.example),
    ("quote", BlockKind.quote),
    ("comment", BlockKind.comment_block),
    ("export", BlockKind.export),
    ("verse", BlockKind.special),
    ("center", BlockKind.special),
])
def test_named_blocks(name, kind):
    assert kinds([f"#+begin_{name}", "body", f"#+end_{name}"]) == [kind]


def test_unterminated_block_is_text():
    """A begin line without its end is rendered as an ordinary paragraph."""
    blocks = tokenize_blocks(["#+begin_src", "x = 1"])
    assert [b.kind for b in blocks] == [BlockKind.paragraph]
    assert blocks[0].lines == ["#+begin_src", "x = 1"]


def test_drawer_entries():
    """Drawer lines are parsed into (key, value) pairs."""
    block, = tokenize_blocks([":PROPERTIES:", ":ID:       abc", ":CUSTOM: some value", ":END:"])
    assert block.kind is BlockKind.drawer
    assert block.name == "PROPERTIES"
    assert block.entries == [("ID", "abc"), ("CUSTOM", "some value")]


def test_unterminated_drawer_is_text():
    assert kinds([":LOGBOOK:", "entry"]) == [BlockKind.paragraph]


def test_keyword_and_comment():
    blocks = tokenize_blocks(["#+title: My Title", "# a comment"])
    assert [b.kind for b in blocks] == [BlockKind.keyword, BlockKind.comment]
    assert (blocks[0].name, blocks[0].value) == ("title", "My Title")
    assert blocks[1].lines == ["a comment"]


def test_table_lines_grouped():
    block, = tokenize_blocks(["| a | b |", "|---+---|", "| 1 | 2 |"])
    assert block.kind is BlockKind.table
    assert len(block.lines) == 3


def test_rule_and_fixed_width():
    blocks = tokenize_blocks(["-----", ": one", ":   two"])
    assert [b.kind for b in blocks] == [BlockKind.rule, BlockKind.fixed_width]
    assert blocks[1].lines == ["one", "  two"]


def test_latex_environment():
    block, = tokenize_blocks(["\\begin{equation}", "x = y", "\\end{equation}"])
    assert block.kind is BlockKind.latex_env
    assert len(block.lines) == 3


def test_list_items_and_continuations():
    """Continuation lines must be indented past the bullet."""
    block, = tokenize_blocks(["- first", "  more of first", "- second", "1. numbered"])
    assert block.kind is BlockKind.list
    assert [i.bullet for i in block.items] == ["-", "-", "1."]
    assert block.items[0].lines == ["first", "  more of first"]


def test_list_survives_single_blank_line():
    block, = tokenize_blocks(["- a", "", "- b"])
    assert len(block.items) == 2


def test_nested_list_items():
    block, = tokenize_blocks(["- outer", "  - inner"])
    assert [(i.indent, i.bullet) for i in block.items] == [("", "-"), ("  ", "-")]


def test_star_at_column_zero_is_not_a_bullet():
    assert kinds(["* not an item"]) == [BlockKind.paragraph]
    assert kinds(["  * item"]) == [BlockKind.list]


def test_list_item_keeps_indented_block_after_blank_line():
    """A blank line inside an item is kept when indented content follows it."""
    block, = tokenize_blocks(["- step", "", "  #+begin_src sh", "", "  echo hi", "  #+end_src", "- next"])
    assert len(block.items) == 2
    assert block.items[0].lines == ["step", "", "  #+begin_src sh", "", "  echo hi", "  #+end_src"]
