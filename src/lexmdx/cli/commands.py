"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from lexmdx.config import Settings, load_config
from lexmdx.core.pipeline import InputError, run_convert, run_rewrite


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
    except ValueError as e:
        _fail(str(e))


def convert_cmd(
    input_file: Annotated[Optional[str], typer.Option("--input", "-i", help="Lexical JSON export")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory for MDX files")] = None,
    assets: Annotated[Optional[str], typer.Option("--assets-dir", help="Output directory for images")] = None,
    api_base: Annotated[Optional[str], typer.Option("--api-base", help="Base URL for relative media URLs")] = None,
    status: Annotated[Optional[str], typer.Option("--status", help="Only convert docs with this status")] = None,
    ):
    """Convert published posts to MDX and download their images."""
    settings = _settings(overrides={
        "input_file": input_file, "output_dir": out, "assets_dir": assets,
        "api_base_url": api_base, "publish_status": status,
    })

    try:
        summary = run_convert(settings)
    except InputError as e:
        _fail(str(e))

    for slug, mdx_path in summary.written:
        typer.echo(f"  {slug} -> {mdx_path}")
    typer.echo(
        f"Conversion complete - "
        f"{summary.success} succeeded, "
        f"{summary.errors} failed, "
        f"{summary.assets} image(s) downloaded"
    )


def rewrite_cmd(
    old: Annotated[str, typer.Argument(help="URL prefix to replace")],
    new: Annotated[str, typer.Argument(help="Replacement URL prefix")],
    target: Annotated[Optional[str], typer.Option("--dir", help="Directory of MDX files (default: output_dir)")] = None,
    ):
    """Replace an image URL prefix in every generated MDX file."""
    settings = _settings(overrides={"output_dir": target})
    if not old:
        _fail("OLD prefix must not be empty")

    try:
        results = run_rewrite(Path(settings.output_dir), old, new)
    except InputError as e:
        _fail(str(e))

    for path, changed in results:
        typer.echo(f"{'Updated' if changed else 'No changes'}: {path.name}")
    typer.echo(f"Done - {sum(c for _, c in results)} of {len(results)} file(s) updated")
