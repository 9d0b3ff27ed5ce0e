"""CLI entrypoint: Typer app definition and command registration"""

import typer

from roampub.cli.commands import export_cmd, index_cmd


app = typer.Typer(name="roampub", no_args_is_help=True, help="Export tagged org-roam notes to Markdown files")

app.command(name="export")(export_cmd)
app.command(name="index")(index_cmd)
