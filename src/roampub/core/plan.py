"""Export planning: the read-only filename tables consumed by Pass 2"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from roampub.config import Settings
from roampub.core.errors import SlugCollisionError
from roampub.core.models import CorpusNode, NodeKind, SourceRange
from roampub.core.render.inline import plain_text, tokenize_inline
from roampub.core.utils.slug import slugify, with_extension


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportPlan:
    """Immutable snapshot shared by every Pass 2 task.

    filenames: identifier -> link slug (no extension)
    sections:  (document path, headline range) -> output filename
    files:     document path -> file slug
    """
    filenames: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    sections:  Mapping[tuple[Path, SourceRange], str] = field(default_factory=lambda: MappingProxyType({}))
    files:     Mapping[Path, str] = field(default_factory=lambda: MappingProxyType({}))
    extension: str = "md"

    def file_filename(self, path: Path) -> Optional[str]:
        slug = self.files.get(path)
        return with_extension(slug, self.extension) if slug else None

    def section_filename(self, path: Path, rng: SourceRange) -> Optional[str]:
        return self.sections.get((path, rng))

    def output_filename(self, kind: NodeKind, path: Path, rng: Optional[SourceRange] = None) -> Optional[str]:
        """Resolve the filename of a finalized context; None when it has no identifier."""
        if kind is NodeKind.file:
            return self.file_filename(path)
        return self.section_filename(path, rng)


def node_slug(node: CorpusNode) -> str:
    """File nodes keep their file stem; headlines slugify their visible title."""
    if node.kind is NodeKind.file:
        return node.path.stem
    return slugify(plain_text(tokenize_inline(node.title)))


def build_plan(nodes: Iterable[CorpusNode], settings: Settings) -> ExportPlan:
    """Derive the three lookup tables; warn about (or reject) filename collisions."""
    filenames: dict[str, str] = {}
    sections: dict[tuple[Path, SourceRange], str] = {}
    files: dict[Path, str] = {}
    owners: dict[str, list[str]] = defaultdict(list)

    for node in sorted(nodes, key=lambda n: (str(n.path), n.range or SourceRange(0, 0))):
        slug = node_slug(node)
        if not slug:
            logger.warning(f"{node.location}: {node.kind.value} {node.title!r} has an empty slug; not exported")
            continue
        filenames[node.identifier] = slug
        filename = with_extension(slug, settings.output_extension)
        if node.kind is NodeKind.file:
            files[node.path] = slug
        else:
            sections[(node.path, node.range)] = filename
        if node.exported:
            owners[filename].append(node.location)

    for filename, locations in sorted(owners.items()):
        if len(locations) < 2:
            continue
        if settings.slug_collisions == 'error':
            raise SlugCollisionError(filename, locations)
        logger.warning(f"output filename {filename} produced by {', '.join(locations)}; last one written wins")

    return ExportPlan(
        filenames=MappingProxyType(filenames),
        sections=MappingProxyType(sections),
        files=MappingProxyType(files),
        extension=settings.output_extension.lstrip('.'),
    )
