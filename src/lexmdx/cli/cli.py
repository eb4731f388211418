"""CLI entrypoint: Typer app definition and command registration"""

import logging
from typing import Annotated

import typer

from lexmdx.cli.commands import convert_cmd, rewrite_cmd


app = typer.Typer(name="lexmdx", no_args_is_help=True, help="Lexical JSON export to MDX blog converter")


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug output")] = False,
    ):
    """Configure logging for all commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
    )


app.command(name="convert")(convert_cmd)
app.command(name="rewrite-urls")(rewrite_cmd)
