"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError

from roampub.config import Settings, load_config
from roampub.core.errors import RoampubError
from roampub.core.pipeline import run_export, run_index
from roampub.core.plan import node_slug
from roampub.core.utils.slug import with_extension
from roampub.log import setup_logging


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except (ValueError, ValidationError) as e:
        _fail("Invalid configuration", e)


def _logging(settings: Settings, verbose: int) -> None:
    try:
        setup_logging(verbosity=verbose, level=settings.log_level)
    except ValueError as e:
        _fail(str(e))


def export_cmd(
    notes: Annotated[Path, typer.Argument(help="Directory (or single file) of org notes")],
    output: Annotated[Path, typer.Argument(help="Directory to write exported files to")],
    dry: Annotated[bool, typer.Option("--dry", "--dry-run", help="Don't write anything, only print target paths")] = False,
    workers: Annotated[Optional[int], typer.Option("--workers", "-j", help="Worker threads per pass")] = None,
    ext: Annotated[Optional[str], typer.Option("--ext", help="Output file extension")] = None,
    anchor_heading: Annotated[Optional[bool], typer.Option("--anchor-heading/--no-anchor-heading", help="Repeat an exported headline as the top heading of its file")] = None,
    verbose: Annotated[int, typer.Option("--verbose", "-v", count=True, help="-v for info, -vv for debug")] = 0,
    ):
    """Export every tagged file and headline to its own Markdown file."""
    settings = _settings(overrides={"workers": workers, "output_extension": ext, "anchor_heading": anchor_heading})
    _logging(settings, verbose)
    if not notes.exists():
        _fail(f"{notes} does not exist")

    try:
        report = run_export(notes, output, settings, dry_run=dry, on_write=lambda p: typer.echo(str(p)))
    except RoampubError as e:
        _fail("Export failed", e)

    verb = "Would write" if dry else "Wrote"
    typer.echo(
        f"{verb} {len(report.written)} file(s) to {output}/ - "
        f"{len(report.skipped)} skipped, "
        f"{len(report.diagnostics)} warning(s), "
        f"{len(report.failed)} failed",
        err=True,
    )
    if not report.ok:
        for path, error in report.failed.items():
            typer.echo(f"  failed: {path}: {error}", err=True)
        raise typer.Exit(1)


def index_cmd(
    notes: Annotated[Path, typer.Argument(help="Directory (or single file) of org notes")],
    verbose: Annotated[int, typer.Option("--verbose", "-v", count=True, help="-v for info, -vv for debug")] = 0,
    ):
    """Run the id pass only and list every identifier with its output filename."""
    settings = _settings()
    _logging(settings, verbose)
    if not notes.exists():
        _fail(f"{notes} does not exist")

    try:
        index = run_index(notes, settings)
    except RoampubError as e:
        _fail("Indexing failed", e)

    for identifier, node in sorted(index.items()):
        slug = node_slug(node)
        filename = with_extension(slug, settings.output_extension) if slug else "-"
        typer.echo(f"{identifier}\t{filename}\t{node.location}")
    typer.echo(f"Indexed {len(index)} id(s)", err=True)
