"""Markdown rendering of org blocks and inline tokens into an export context"""

import re
import textwrap
from pathlib import PurePosixPath
from typing import Callable, Mapping

from roampub.core.diagnostics import Diagnostics
from roampub.core.models import ExportContext
from roampub.core.render.blocks import Block, BlockKind, ListItem, tokenize_blocks
from roampub.core.render.inline import Inline, InlineKind, tokenize_inline


IMAGE_EXTENSIONS = {'.png', '.jpg', '.jpeg', '.gif', '.svg', '.webp', '.bmp', '.tif', '.tiff'}
SCHEME_RE = re.compile(r'^[A-Za-z][A-Za-z0-9+.-]*:')
TABLE_PLACEHOLDER = "[table omitted]"


def is_local_path(path: str) -> bool:
    """file: links and bare paths; anything with another scheme is passed through."""
    return path.startswith('file:') or not SCHEME_RE.match(path)


def is_image(path: str) -> bool:
    return PurePosixPath(path).suffix.lower() in IMAGE_EXTENSIONS


class MarkdownRenderer:
    """Appends Markdown for each visited construct to the given context's buffer.

    Link targets are resolved against the corpus-wide id -> slug table. Problems
    that don't stop rendering (unresolved ids, tables) go to the diagnostics
    collector with the enclosing context's title.
    """

    def __init__(self, filenames: Mapping[str, str], diagnostics: Diagnostics):
        self.filenames = filenames
        self.diagnostics = diagnostics
        self._blocks: dict[BlockKind, Callable[[ExportContext, Block], None]] = {
            BlockKind.paragraph:     self._paragraph,
            BlockKind.list:          self._list,
            BlockKind.src:           self._src,
            BlockKind.example:       self._example,
            BlockKind.fixed_width:   self._example,
            BlockKind.quote:         self._quote,
            BlockKind.special:       self._special,
            BlockKind.export:        self._skip,
            BlockKind.comment_block: self._comment_block,
            BlockKind.comment:       self._comment,
            BlockKind.rule:          self._rule,
            BlockKind.table:         self._table,
            BlockKind.latex_env:     self._latex_env,
            BlockKind.keyword:       self._skip,
            BlockKind.drawer:        self._skip,
        }
        self._inlines: dict[InlineKind, Callable[[Inline, str], str]] = {
            InlineKind.text:        lambda tok, ctx: tok.text,
            InlineKind.bold:        lambda tok, ctx: f"**{self.inline(tok.children, ctx)}**",
            InlineKind.italic:      lambda tok, ctx: f"*{self.inline(tok.children, ctx)}*",
            InlineKind.strike:      lambda tok, ctx: f"~~{self.inline(tok.children, ctx)}~~",
            InlineKind.underline:   lambda tok, ctx: self.inline(tok.children, ctx),
            InlineKind.code:        lambda tok, ctx: f"`{tok.text}`",
            InlineKind.verbatim:    lambda tok, ctx: f"`{tok.text}`",
            InlineKind.link:        self._link,
            InlineKind.superscript: lambda tok, ctx: f"<sup>{self.inline(tok.children, ctx)}</sup>",
            InlineKind.subscript:   lambda tok, ctx: f"<sub>{self.inline(tok.children, ctx)}</sub>",
            InlineKind.latex:       lambda tok, ctx: tok.text,
            InlineKind.entity:      lambda tok, ctx: tok.text,
            InlineKind.line_break:  lambda tok, ctx: '',
            InlineKind.timestamp:   lambda tok, ctx: '',
            InlineKind.snippet:     lambda tok, ctx: '',
        }

    # --- inline ---

    def inline(self, tokens: list[Inline], context: str) -> str:
        return ''.join(self._inlines[tok.kind](tok, context) for tok in tokens)

    def text(self, text: str, context: str) -> str:
        return self.inline(tokenize_inline(text), context)

    def _link(self, tok: Inline, context: str) -> str:
        path = tok.text
        label = self.inline(tok.children, context) if tok.children else ''

        if path.startswith('id:'):
            identifier = path[3:].strip()
            slug = self.filenames.get(identifier)
            if slug is None:
                self.diagnostics.warn(
                    f"link to non-existent id {identifier} (description: {tok.description!r})", context,
                )
                return f"link to non-existent id {identifier}"
            return f"[[{slug}|{label}]]" if label else f"[[{slug}]]"

        if is_local_path(path):
            path = path.removeprefix('file:')
            if not label and is_image(path):
                return f"![]({path})"
        if not label:
            return f"[{path}]({path})"
        return f"[{label}]({path})"

    # --- blocks ---

    def heading(self, ctx: ExportContext, title: str, depth: int) -> None:
        ctx.ensure_newline()
        ctx.write(f"{'#' * depth} {self.text(title, ctx.title)}\n")

    def block(self, ctx: ExportContext, block: Block) -> None:
        self._blocks[block.kind](ctx, block)

    def blocks(self, ctx: ExportContext, blocks: list[Block]) -> None:
        for block in blocks:
            self.block(ctx, block)

    def _skip(self, ctx: ExportContext, block: Block) -> None:
        pass

    def _paragraph(self, ctx: ExportContext, block: Block) -> None:
        ctx.ensure_newline()
        ctx.write(self.text('\n'.join(block.lines), ctx.title) + '\n')
        ctx.write('\n')

    def _list(self, ctx: ExportContext, block: Block) -> None:
        ctx.ensure_newline()
        for item in block.items:
            first, rest = item.lines[0], item.lines[1:]
            line = f"{item.indent}{item.bullet}"
            if first:
                line += f" {self.text(first, ctx.title)}"
            ctx.write(line + '\n')
            if rest:
                self._list_body(ctx, item, rest)
        ctx.write('\n')

    def _list_body(self, ctx: ExportContext, item: ListItem, lines: list[str]) -> None:
        """Render an item's continuation lines as blocks, indented under its bullet."""
        inner = ExportContext(kind=ctx.kind, title=ctx.title, depth=ctx.depth)
        self.blocks(inner, tokenize_blocks(textwrap.dedent('\n'.join(lines)).split('\n')))
        body = inner.body.strip('\n')
        if not body:
            return
        pad = item.indent + ' ' * (len(item.bullet) + 1)
        for line in body.split('\n'):
            ctx.write(f"{pad}{line}\n" if line else '\n')

    def _fence(self, ctx: ExportContext, lines: list[str], language: str) -> None:
        ctx.ensure_newline()
        code = textwrap.dedent('\n'.join(lines)).strip('\n')
        ctx.write(f"```{language}\n")
        if code:
            ctx.write(code + '\n')
        ctx.write("```\n")

    def _src(self, ctx: ExportContext, block: Block) -> None:
        self._fence(ctx, block.lines, block.value or '')

    def _example(self, ctx: ExportContext, block: Block) -> None:
        self._fence(ctx, block.lines, '')

    def _quote(self, ctx: ExportContext, block: Block) -> None:
        inner = ExportContext(kind=ctx.kind, title=ctx.title, depth=ctx.depth)
        self.blocks(inner, tokenize_blocks(block.lines))
        ctx.ensure_newline()
        for line in inner.body.strip('\n').split('\n'):
            ctx.write(f"> {line}\n" if line else ">\n")
        ctx.write('\n')

    def _special(self, ctx: ExportContext, block: Block) -> None:
        self.blocks(ctx, tokenize_blocks(block.lines))

    def _comment_block(self, ctx: ExportContext, block: Block) -> None:
        ctx.ensure_newline()
        ctx.write("<!--\n" + ''.join(f"{line}\n" for line in block.lines) + "-->\n")

    def _comment(self, ctx: ExportContext, block: Block) -> None:
        ctx.ensure_newline()
        ctx.write(f"<!-- {block.lines[0]} -->\n")

    def _rule(self, ctx: ExportContext, block: Block) -> None:
        ctx.ensure_newline()
        ctx.write("\n-----\n\n")

    def _table(self, ctx: ExportContext, block: Block) -> None:
        self.diagnostics.warn(f"table with {len(block.lines)} line(s) not exported, placeholder emitted", ctx.title)
        ctx.ensure_newline()
        ctx.write(f"{TABLE_PLACEHOLDER}\n\n")

    def _latex_env(self, ctx: ExportContext, block: Block) -> None:
        ctx.ensure_newline()
        ctx.write('\n'.join(block.lines) + '\n')
