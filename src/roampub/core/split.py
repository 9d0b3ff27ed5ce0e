"""Pass 2: split one document into export contexts and render each into Markdown"""

from typing import Optional

from roampub.config import Settings
from roampub.core.diagnostics import Diagnostics
from roampub.core.frontmatter import FrontMatter, build_document
from roampub.core.markers import is_export_keyword, is_export_property
from roampub.core.models import (
    DocumentExport, ExportContext, ExportRecord, Heading, NodeKind, ParsedDoc,
)
from roampub.core.plan import ExportPlan
from roampub.core.render.blocks import BlockKind, tokenize_blocks
from roampub.core.render.markdown import MarkdownRenderer


MAX_HEADING_DEPTH = 6


class DocumentSplitter:
    """Walks a parsed document once, keeping a stack of open export contexts.

    The stack holds at most one file context at the bottom, then section
    contexts of strictly increasing depth. A headline at depth L closes every
    section context at depth >= L before it is rendered. Not safe to share
    between threads; build one per document.
    """

    def __init__(self, parsed: ParsedDoc, plan: ExportPlan, settings: Settings):
        self.parsed = parsed
        self.plan = plan
        self.settings = settings
        self.diagnostics = Diagnostics(parsed.path)
        self.renderer = MarkdownRenderer(plan.filenames, self.diagnostics)

        self.stack: list[ExportContext] = []
        self.finished: list[ExportRecord] = []
        self.file_matter = FrontMatter()
        self.file_opened = False

    @property
    def top(self) -> Optional[ExportContext]:
        return self.stack[-1] if self.stack else None

    def run(self) -> DocumentExport:
        self._preamble()
        for heading in self.parsed.headings:
            self._headline(heading)
        while self.stack:
            self._finalize(self.stack.pop())
        return DocumentExport(self.parsed.path, self.finished, self.diagnostics)

    # --- file scope ---

    def _open_file(self) -> None:
        if self.file_opened:
            return
        self.file_opened = True
        self.stack.insert(0, ExportContext(
            kind=NodeKind.file,
            title=self.parsed.path.stem,
            front_matter=self.file_matter,
        ))

    def _preamble(self) -> None:
        """Collect file front matter and export markers; render the rest into the file context."""
        for block in tokenize_blocks(self.parsed.preamble):
            if block.kind is BlockKind.keyword:
                if is_export_keyword(block.name, block.value, self.settings):
                    self._open_file()
                else:
                    self.file_matter.add(block.name.lower(), block.value)
            elif block.kind is BlockKind.drawer and block.name.upper() == 'PROPERTIES':
                for key, value in block.entries:
                    if is_export_property(key, value, self.settings):
                        self._open_file()
                    else:
                        self.file_matter.add(key, value)
            elif self.top is not None:
                self.renderer.block(self.top, block)

    # --- headlines ---

    def _headline(self, heading: Heading) -> None:
        while self.top is not None and self.top.kind is NodeKind.section and self.top.depth >= heading.level:
            self._finalize(self.stack.pop())

        exported = self.settings.export_tag in heading.tags
        if exported:
            self._open_section(heading)

        ctx = self.top
        if ctx is None:
            return
        if not exported or self.settings.anchor_heading:
            depth = min(max(heading.level - ctx.depth, 1), MAX_HEADING_DEPTH)
            self.renderer.heading(ctx, heading.title, depth)
        self.renderer.blocks(ctx, tokenize_blocks(heading.body))

    def _open_section(self, heading: Heading) -> None:
        parent = self.top
        if parent is not None:
            filename = self.plan.section_filename(self.parsed.path, heading.range)
            parent.ensure_newline()
            if filename:
                parent.write(f"![[{filename}]]\n\n")
            else:
                message = f"exported headline {heading.title} with no id"
                self.diagnostics.warn(message, parent.title)
                parent.write(f"{message}\n\n")

        ctx = ExportContext(
            kind=NodeKind.section,
            title=heading.title,
            depth=heading.level,
            range=heading.range,
        )
        ctx.front_matter.add('title', heading.title)
        for key, value in heading.properties.items():
            ctx.front_matter.add(key, value)
        self.stack.append(ctx)

    def _finalize(self, ctx: ExportContext) -> None:
        if ctx.kind is NodeKind.file:
            ctx.front_matter.setdefault('title', self.parsed.path.stem)
        self.finished.append(ExportRecord(
            source=self.parsed.path,
            kind=ctx.kind,
            title=ctx.title,
            filename=self.plan.output_filename(ctx.kind, self.parsed.path, ctx.range),
            content=build_document(ctx.front_matter, ctx.body),
        ))


def split_document(parsed: ParsedDoc, plan: ExportPlan, settings: Settings) -> DocumentExport:
    return DocumentSplitter(parsed, plan, settings).run()
