"""Org body lines to typed blocks"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class BlockKind(str, Enum):
    paragraph     = "paragraph"
    list          = "list"
    src           = "src"
    example       = "example"
    fixed_width   = "fixed_width"
    quote         = "quote"
    special       = "special"        # verse, center and custom #+begin_x blocks
    export        = "export"
    comment_block = "comment_block"
    comment       = "comment"
    rule          = "rule"
    table         = "table"
    latex_env     = "latex_env"
    keyword       = "keyword"
    drawer        = "drawer"


@dataclass
class ListItem:
    indent: str                 # leading whitespace, verbatim
    bullet: str                 # '-', '+', '*', '1.', '2)' ...
    lines:  list[str]           # first line without bullet, then raw continuation lines


@dataclass
class Block:
    kind:    BlockKind
    lines:   list[str] = field(default_factory=list)
    items:   list[ListItem] = field(default_factory=list)
    name:    Optional[str] = None   # block/drawer name, keyword key
    value:   Optional[str] = None   # src language, keyword value
    entries: list[tuple[str, str]] = field(default_factory=list)   # drawer properties


BEGIN_RE     = re.compile(r'^\s*#\+begin_(\S+)\s*(.*)$', re.IGNORECASE)
KEYWORD_RE   = re.compile(r'^\s*#\+([^\s:]+):\s*(.*)$')
COMMENT_RE   = re.compile(r'^\s*#(?:\s(.*))?$')
DRAWER_RE    = re.compile(r'^\s*:([\w-]+):\s*$')
END_RE       = re.compile(r'^\s*:END:\s*$', re.IGNORECASE)
PROPERTY_RE  = re.compile(r'^\s*:([^\s:]+?)(\+)?:(?:\s+(.*))?$')
RULE_RE      = re.compile(r'^\s*-{5,}\s*$')
TABLE_RE     = re.compile(r'^\s*(\||\+-)')
FIXED_RE     = re.compile(r'^\s*:(\s|$)')
LATEX_RE     = re.compile(r'^\s*\\begin\{([^}]+)\}')
ITEM_RE      = re.compile(r'^(\s*)([-+*]|\d+[.)])(?:\s+(.*)|$)')

NAMED_BLOCKS = {
    'src':     BlockKind.src,
    'example': BlockKind.example,
    'quote':   BlockKind.quote,
    'comment': BlockKind.comment_block,
    'export':  BlockKind.export,
}


def _indent_width(line: str) -> int:
    return len(line) - len(line.lstrip())


def _find(lines: list[str], start: int, pattern: re.Pattern) -> Optional[int]:
    for j in range(start, len(lines)):
        if pattern.match(lines[j]):
            return j
    return None


def _match_item(line: str) -> Optional[re.Match]:
    # A '*' bullet must be indented; at column 0 it is a headline.
    m = ITEM_RE.match(line)
    if m and m.group(2) == '*' and not m.group(1):
        return None
    return m


def _starts_block(line: str) -> bool:
    """True if line opens a construct that ends the current paragraph."""
    return bool(
        BEGIN_RE.match(line) or KEYWORD_RE.match(line) or COMMENT_RE.match(line)
        or DRAWER_RE.match(line) or RULE_RE.match(line) or TABLE_RE.match(line)
        or FIXED_RE.match(line) or LATEX_RE.match(line) or _match_item(line)
    )


def _parse_list(lines: list[str], i: int) -> tuple[Block, int]:
    """Consume consecutive list items and their more-indented continuation lines."""
    items: list[ListItem] = []
    while i < len(lines):
        m = _match_item(lines[i])
        if m is None:
            break
        item = ListItem(indent=m.group(1), bullet=m.group(2), lines=[m.group(3) or ''])
        width = len(m.group(1))
        i += 1
        while i < len(lines):
            line = lines[i]
            if not line.strip():
                # A blank line stays in the item only when indented content follows it.
                nxt = next((j for j in range(i + 1, len(lines)) if lines[j].strip()), None)
                if nxt is None or _indent_width(lines[nxt]) <= width:
                    break
                item.lines.append(line)
                i += 1
                continue
            if _match_item(line) or _indent_width(line) <= width:
                break
            item.lines.append(line)
            i += 1
        items.append(item)
        # One blank line between items keeps the list open.
        if i + 1 < len(lines) and not lines[i].strip() and _match_item(lines[i + 1]):
            i += 1
    return Block(BlockKind.list, items=items), i


def _parse_drawer(lines: list[str], i: int, end: int) -> Block:
    name = DRAWER_RE.match(lines[i]).group(1)
    entries = []
    for line in lines[i + 1:end]:
        m = PROPERTY_RE.match(line)
        if m:
            entries.append((m.group(1), (m.group(3) or '').strip()))
    return Block(BlockKind.drawer, lines=lines[i + 1:end], name=name, entries=entries)


def tokenize_blocks(lines: list[str]) -> list[Block]:
    """Split body lines into blocks. Blank lines only separate; they yield no block."""
    blocks: list[Block] = []
    i = 0
    while i < len(lines):
        line = lines[i]

        if not line.strip():
            i += 1
            continue

        m = BEGIN_RE.match(line)
        if m:
            name = m.group(1).lower()
            end = _find(lines, i + 1, re.compile(rf'^\s*#\+end_{re.escape(name)}\s*$', re.IGNORECASE))
            if end is not None:
                kind = NAMED_BLOCKS.get(name, BlockKind.special)
                args = m.group(2).split()
                blocks.append(Block(
                    kind,
                    lines=lines[i + 1:end],
                    name=name,
                    value=args[0] if args else None,
                ))
                i = end + 1
                continue

        m = DRAWER_RE.match(line)
        if m and not END_RE.match(line):
            end = _find(lines, i + 1, END_RE)
            if end is not None:
                blocks.append(_parse_drawer(lines, i, end))
                i = end + 1
                continue

        m = LATEX_RE.match(line)
        if m:
            end = _find(lines, i, re.compile(rf'.*\\end\{{{re.escape(m.group(1))}\}}'))
            if end is not None:
                blocks.append(Block(BlockKind.latex_env, lines=lines[i:end + 1]))
                i = end + 1
                continue

        if TABLE_RE.match(line):
            j = i
            while j < len(lines) and TABLE_RE.match(lines[j]):
                j += 1
            blocks.append(Block(BlockKind.table, lines=lines[i:j]))
            i = j
            continue

        if RULE_RE.match(line):
            blocks.append(Block(BlockKind.rule))
            i += 1
            continue

        m = KEYWORD_RE.match(line)
        if m and not BEGIN_RE.match(line):
            blocks.append(Block(BlockKind.keyword, name=m.group(1), value=m.group(2).strip()))
            i += 1
            continue

        m = COMMENT_RE.match(line)
        if m:
            blocks.append(Block(BlockKind.comment, lines=[(m.group(1) or '').strip()]))
            i += 1
            continue

        if FIXED_RE.match(line):
            j = i
            while j < len(lines) and FIXED_RE.match(lines[j]):
                j += 1
            text = [re.sub(r'^\s*:\s?', '', l) for l in lines[i:j]]
            blocks.append(Block(BlockKind.fixed_width, lines=text))
            i = j
            continue

        if _match_item(line):
            block, i = _parse_list(lines, i)
            blocks.append(block)
            continue

        # Paragraph: up to a blank line or the start of another construct.
        j = i + 1
        while j < len(lines) and lines[j].strip() and not _starts_block(lines[j]):
            j += 1
        blocks.append(Block(BlockKind.paragraph, lines=[l.strip() for l in lines[i:j]]))
        i = j

    return blocks
