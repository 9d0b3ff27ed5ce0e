"""Pass 1: collect every identified file and headline in the corpus"""

import re
import uuid
from pathlib import Path
from typing import Iterable

from roampub.config import Settings
from roampub.core.errors import DuplicateIdentifierError, InvalidIdentifierError
from roampub.core.markers import get_property, is_export_keyword, is_export_property
from roampub.core.models import CorpusNode, NodeKind, ParsedDoc
from roampub.core.parse import parse_file
from roampub.core.render.blocks import BlockKind, tokenize_blocks


def check_identifier(identifier: str, path: Path, where: str, settings: Settings) -> str:
    """Return identifier unchanged, or raise InvalidIdentifierError."""
    if not re.match(settings.id_pattern, identifier):
        raise InvalidIdentifierError(identifier, path, where)
    if settings.strict_uuid:
        try:
            uuid.UUID(identifier)
        except ValueError as e:
            raise InvalidIdentifierError(identifier, path, where) from e
    return identifier


def index_document(parsed: ParsedDoc, settings: Settings) -> list[CorpusNode]:
    """Return the file node (if the preamble drawer has an id) and every identified headline."""
    nodes: list[CorpusNode] = []

    file_id = None
    title = None
    exported = False
    for block in tokenize_blocks(parsed.preamble):
        if block.kind is BlockKind.keyword:
            if block.name.lower() == 'title' and title is None:
                title = block.value
            elif is_export_keyword(block.name, block.value, settings):
                exported = True
        elif block.kind is BlockKind.drawer and block.name.upper() == 'PROPERTIES':
            for key, value in block.entries:
                if key.upper() == settings.id_property.upper() and file_id is None:
                    file_id = value
                elif is_export_property(key, value, settings):
                    exported = True

    if file_id is not None:
        nodes.append(CorpusNode(
            identifier=check_identifier(file_id, parsed.path, "file", settings),
            kind=NodeKind.file,
            path=parsed.path,
            title=title or parsed.path.stem,
            exported=exported,
        ))

    for heading in parsed.headings:
        identifier = get_property(heading.properties, settings.id_property)
        if identifier is None:
            continue
        nodes.append(CorpusNode(
            identifier=check_identifier(identifier, parsed.path, f"headline {heading.title!r}", settings),
            kind=NodeKind.section,
            path=parsed.path,
            title=heading.title,
            range=heading.range,
            depth=heading.level,
            exported=settings.export_tag in heading.tags,
        ))
    return nodes


def index_file(path: Path, settings: Settings) -> list[CorpusNode]:
    return index_document(parse_file(path, settings), settings)


def merge_index(per_document: Iterable[list[CorpusNode]]) -> dict[str, CorpusNode]:
    """Merge per-document results into one id -> node map; any repeated id is fatal."""
    index: dict[str, CorpusNode] = {}
    for nodes in per_document:
        for node in nodes:
            first = index.get(node.identifier)
            if first is not None:
                raise DuplicateIdentifierError(node.identifier, first.location, node.location)
            index[node.identifier] = node
    return index
