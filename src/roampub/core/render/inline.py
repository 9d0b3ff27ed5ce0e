"""Inline org markup (emphasis, links, scripts, LaTeX, entities) to tokens"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from roampub.core.render.entities import expand_entity


class InlineKind(str, Enum):
    text        = "text"
    bold        = "bold"
    italic      = "italic"
    strike      = "strike"
    underline   = "underline"
    code        = "code"
    verbatim    = "verbatim"
    link        = "link"
    superscript = "superscript"
    subscript   = "subscript"
    latex       = "latex"
    entity      = "entity"
    line_break  = "line_break"
    timestamp   = "timestamp"
    snippet     = "snippet"


@dataclass
class Inline:
    kind:        InlineKind
    text:        str = ''                                   # literal text, code, link path, entity value
    children:    list['Inline'] = field(default_factory=list)
    description: Optional[str] = None                       # raw link description


LINK_RE       = re.compile(r'\[\[([^\[\]]+)\](?:\[(.+?)\])?\]')
TIMESTAMP_RE  = re.compile(
    r'<\d{4}-\d{2}-\d{2}[^<>\n]*>(?:--<\d{4}-\d{2}-\d{2}[^<>\n]*>)?'
    r'|\[\d{4}-\d{2}-\d{2}[^\[\]\n]*\](?:--\[\d{4}-\d{2}-\d{2}[^\[\]\n]*\])?'
)
SNIPPET_RE    = re.compile(r'@@[\w-]+:.*?@@')
LATEX_RE      = re.compile(
    r'\$\$.+?\$\$|\\\(.+?\\\)|\\\[.+?\\\]'
    r'|(?<![\w$])\$[^\s$](?:[^$\n]*?[^\s$])?\$(?![\w$])'
)
LINE_BREAK_RE = re.compile(r'\\\\[ \t]*(?=\n|$)')
ENTITY_RE     = re.compile(r'\\([a-zA-Z]+)(\{\})?')
SCRIPT_RE     = re.compile(r'(?<=\S)([_^])\{([^{}\n]*)\}')
EMPHASIS_RE   = re.compile(
    r'''(?:^|(?<=[\s\-({'"]))([*/+_=~])(\S|\S[^\n]*?(?:\n[^\n]*?)?\S)\1(?=[\s\-.,:!?;'")}\[]|$)'''
)

EMPHASIS = {
    '*': InlineKind.bold,
    '/': InlineKind.italic,
    '+': InlineKind.strike,
    '_': InlineKind.underline,
    '=': InlineKind.verbatim,
    '~': InlineKind.code,
}

# Earlier entries win when two constructs start at the same offset.
PATTERNS: list[tuple[InlineKind, re.Pattern]] = [
    (InlineKind.link,        LINK_RE),
    (InlineKind.timestamp,   TIMESTAMP_RE),
    (InlineKind.snippet,     SNIPPET_RE),
    (InlineKind.latex,       LATEX_RE),
    (InlineKind.line_break,  LINE_BREAK_RE),
    (InlineKind.entity,      ENTITY_RE),
    (InlineKind.superscript, SCRIPT_RE),
    (InlineKind.bold,        EMPHASIS_RE),
]


def _append_text(tokens: list[Inline], text: str) -> None:
    if not text:
        return
    if tokens and tokens[-1].kind is InlineKind.text:
        tokens[-1].text += text
    else:
        tokens.append(Inline(InlineKind.text, text))


def _build(kind: InlineKind, m: re.Match) -> Optional[Inline]:
    """Turn a pattern match into a token; None means keep the match as plain text."""
    if kind is InlineKind.link:
        description = m.group(2)
        return Inline(
            kind,
            text=m.group(1).strip(),
            children=tokenize_inline(description) if description else [],
            description=description,
        )
    if kind is InlineKind.entity:
        value = expand_entity(m.group(1))
        return Inline(kind, text=value) if value is not None else None
    if kind is InlineKind.superscript:
        script = InlineKind.superscript if m.group(1) == '^' else InlineKind.subscript
        return Inline(script, children=tokenize_inline(m.group(2)))
    if kind is InlineKind.bold:
        emphasis = EMPHASIS[m.group(1)]
        if emphasis in (InlineKind.code, InlineKind.verbatim):
            return Inline(emphasis, text=m.group(2))
        return Inline(emphasis, children=tokenize_inline(m.group(2)))
    if kind is InlineKind.line_break:
        return Inline(kind)
    return Inline(kind, text=m.group(0))


def tokenize_inline(text: str) -> list[Inline]:
    """Scan text left to right, always taking the construct that starts first."""
    tokens: list[Inline] = []
    pos = 0
    while pos < len(text):
        best: Optional[tuple[InlineKind, re.Match]] = None
        for kind, pattern in PATTERNS:
            m = pattern.search(text, pos)
            if m and (best is None or m.start() < best[1].start()):
                best = (kind, m)
        if best is None:
            break

        kind, m = best
        token = _build(kind, m)
        if token is None:
            _append_text(tokens, text[pos:m.end()])
        else:
            _append_text(tokens, text[pos:m.start()])
            tokens.append(token)
        pos = m.end()

    _append_text(tokens, text[pos:])
    return tokens


def plain_text(tokens: list[Inline]) -> str:
    """Flatten tokens to their visible text (used for slugs)."""
    parts = []
    for tok in tokens:
        if tok.kind in (InlineKind.timestamp, InlineKind.snippet):
            continue
        if tok.kind is InlineKind.line_break:
            parts.append(' ')
        elif tok.kind is InlineKind.link:
            parts.append(plain_text(tok.children) if tok.children else tok.text.split(':', 1)[-1])
        elif tok.children:
            parts.append(plain_text(tok.children))
        else:
            parts.append(tok.text)
    return ''.join(parts)
