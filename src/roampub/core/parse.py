"""File discovery, source reading and org outline parsing"""

import re
from pathlib import Path

from orgparse import loads
from orgparse.node import OrgEnv

from roampub.config import Settings
from roampub.core.errors import SourceReadError
from roampub.core.models import Heading, ParsedDoc, SourceRange
from roampub.core.render.blocks import BlockKind, tokenize_blocks


# Same headline test orgparse uses to split a file into nodes.
HEADLINE_RE = re.compile(r'^\*+ ')


def discover_files(path: Path, extension: str = 'org') -> list[Path]:
    """Return sorted source files under path, or [path] if a single matching file."""
    suffix = f".{extension.lstrip('.')}"
    if path.is_file():
        return [path] if path.suffix == suffix else []
    return sorted(p for p in path.rglob(f'*{suffix}') if p.is_file())


def read_source(path: Path) -> str:
    """Read a document as UTF-8; any failure is fatal for the run."""
    try:
        return path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(path, e) from e


def headline_lines(lines: list[str]) -> list[int]:
    """Return the 1-based line numbers of every headline."""
    return [i + 1 for i, line in enumerate(lines) if HEADLINE_RE.match(line)]


def subtree_ranges(starts: list[int], levels: list[int], total: int) -> list[SourceRange]:
    """Compute each headline's subtree span: up to the next headline of the same or lower level."""
    ranges = []
    for i, (start, level) in enumerate(zip(starts, levels)):
        end = total
        for j in range(i + 1, len(starts)):
            if levels[j] <= level:
                end = starts[j] - 1
                break
        ranges.append(SourceRange(start, end))
    return ranges


def drawer_properties(lines: list[str]) -> dict[str, str]:
    """Entries of the first PROPERTIES drawer in a headline's own lines, values verbatim."""
    for block in tokenize_blocks(lines):
        if block.kind is BlockKind.drawer and block.name.upper() == 'PROPERTIES':
            return dict(block.entries)
    return {}


def parse_text(text: str, path: Path, settings: Settings = None) -> ParsedDoc:
    """Parse org text into a ParsedDoc: preamble lines plus headlines in document order."""
    settings = settings or Settings()
    name = str(path)
    env = OrgEnv(todos=settings.todo_keywords, dones=settings.done_keywords, filename=name)
    root = loads(text, filename=name, env=env)

    lines = text.splitlines()
    nodes = list(root[1:])
    starts = headline_lines(lines)
    scanned = len(starts) == len(nodes)
    if not scanned:
        starts = [n.linenumber for n in nodes]
    ranges = subtree_ranges(starts, [n.level for n in nodes], len(lines))

    headings = []
    for i, (node, rng) in enumerate(zip(nodes, ranges)):
        if scanned:
            # Own lines run up to the next headline of any level.
            end = starts[i + 1] - 1 if i + 1 < len(starts) else len(lines)
            properties = drawer_properties(lines[starts[i]:end])
        else:
            properties = {str(k): str(v) for k, v in node.properties.items()}
        headings.append(Heading(
            level=node.level,
            title=node.get_heading(format='raw'),
            tags=set(node.shallow_tags),
            properties=properties,
            range=rng,
            body=node.get_body(format='raw').splitlines(),
        ))
    preamble = lines[:starts[0] - 1] if starts else lines
    return ParsedDoc(path=path, text=text, preamble=preamble, headings=headings, root=root)


def parse_file(path: Path, settings: Settings = None) -> ParsedDoc:
    """Read and parse a single org file."""
    return parse_text(read_source(path), path, settings)
