"""Data models shared by the indexing, splitting and writing passes"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, NamedTuple, Optional

from roampub.core.diagnostics import Diagnostics
from roampub.core.frontmatter import FrontMatter


class NodeKind(str, Enum):
    file = "file"
    section = "section"


class SourceRange(NamedTuple):
    """1-based, inclusive line span of a headline and its subtree."""
    start: int
    end:   int


@dataclass(frozen=True)
class CorpusNode:
    """An identified unit of the corpus: a whole file or a headline."""
    identifier: str
    kind:       NodeKind
    path:       Path
    title:      str
    range:      Optional[SourceRange] = None   # None for file nodes
    depth:      int = 0                        # heading level; 0 for file nodes
    exported:   bool = False

    @property
    def location(self) -> str:
        """'path:line' for diagnostics."""
        return f"{self.path}:{self.range.start if self.range else 1}"


@dataclass
class Heading:
    """A headline as seen by the splitter (parser-independent view)."""
    level:      int
    title:      str                 # raw title: TODO keyword and tags removed, inline markup kept
    tags:       set[str]
    properties: dict[str, str]
    range:      SourceRange
    body:       list[str]


@dataclass
class ParsedDoc:
    """Internal parse result; not persisted."""
    path:      Path
    text:      str
    preamble:  list[str]        # lines before the first headline
    headings:  list[Heading]    # document order
    root:      Any = None       # orgparse root node


@dataclass
class ExportContext:
    """An open output target: the whole file or an exported headline."""
    kind:         NodeKind
    title:        str
    depth:        int = 0
    range:        Optional[SourceRange] = None
    front_matter: FrontMatter = field(default_factory=FrontMatter)
    parts:        list[str] = field(default_factory=list)

    def write(self, text: str) -> None:
        if text:
            self.parts.append(text)

    def ends_with_newline(self) -> bool:
        return not self.parts or self.parts[-1].endswith(('\n', '\r'))

    def ensure_newline(self) -> None:
        """Terminate the current line unless the buffer is empty or already does."""
        if not self.ends_with_newline():
            self.parts.append('\n')

    @property
    def body(self) -> str:
        return ''.join(self.parts)


@dataclass(frozen=True)
class ExportRecord:
    """A finalized context: ready to be written under its resolved filename."""
    source:   Path
    kind:     NodeKind
    title:    str
    filename: Optional[str]
    content:  str


@dataclass
class DocumentExport:
    """Pass 2 result for one document."""
    path:        Path
    records:     list[ExportRecord]
    diagnostics: Diagnostics
