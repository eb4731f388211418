"""Pipeline step functions: load, convert, and rewrite orchestration"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from lexmdx.config import Settings
from lexmdx.core.assets import AssetCache, AssetFetcher, make_client
from lexmdx.core.convert import MarkdownConverter
from lexmdx.core.export import write_doc
from lexmdx.core.models import BlogDoc, DataFile, RunSummary
from lexmdx.core.rewrite import rewrite_file


logger = logging.getLogger(__name__)


class InputError(ValueError):
    """The input file is missing or is not a valid export; the run cannot start."""


def load_documents(path: Path) -> list[dict[str, Any]]:
    """Read the export and return its raw docs. Each doc is validated later, on its own."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise InputError(f"Cannot read {path}: {e}") from e
    try:
        return DataFile.model_validate_json(raw).docs
    except ValidationError as e:
        raise InputError(f"Invalid input file {path}: {e}") from e


def select_published(docs: list[dict[str, Any]], status: str = "published") -> list[dict[str, Any]]:
    """Keep only docs whose status matches."""
    return [d for d in docs if d.get("status") == status]


def convert_doc(data: dict[str, Any], fetcher: AssetFetcher, settings: Settings) -> Path:
    """Validate, render, and write one doc. Raises on any failure; the caller decides what to do."""
    doc = BlogDoc.model_validate(data)
    logger.info("Converting: %s", doc.title)
    prefix = settings.asset_link_prefix.rstrip("/")

    hero_image = None
    if doc.coverImage and doc.coverImage.url:
        filename = fetcher.resolve(doc.coverImage.url)
        if filename:
            hero_image = f"{prefix}/{filename}"

    body = MarkdownConverter(fetcher, prefix).convert(doc.content.root)
    mdx_path = write_doc(doc, body, Path(settings.output_dir), hero_image)
    logger.info("  Written: %s", mdx_path)
    return mdx_path


def run_convert(settings: Settings, client: Optional[httpx.Client] = None) -> RunSummary:
    """Convert every published doc in settings.input_file.

    Docs are processed one at a time. A failing doc is logged and counted and
    never stops the batch; an unreadable input file raises InputError.
    """
    output_dir = Path(settings.output_dir)
    assets_dir = Path(settings.assets_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    assets_dir.mkdir(parents=True, exist_ok=True)

    input_file = Path(settings.input_file)
    logger.info("Reading %s...", input_file)
    docs = load_documents(input_file)
    published = select_published(docs, settings.publish_status)
    logger.info("Found %d published posts out of %d total", len(published), len(docs))

    cache = AssetCache()
    summary = RunSummary()
    owns_client = client is None
    client = client or make_client(settings.download_timeout)
    try:
        fetcher = AssetFetcher(
            client, assets_dir, settings.api_base_url, cache, settings.download_chunk_size,
        )
        for data in published:
            try:
                mdx_path = convert_doc(data, fetcher, settings)
            except Exception:
                logger.exception("Error converting %s", data.get("title") or data.get("slug"))
                summary.errors += 1
                continue
            summary.success += 1
            summary.written.append((data["slug"], mdx_path))
    finally:
        if owns_client:
            client.close()

    summary.assets = len(cache)
    return summary


def run_rewrite(target_dir: Path, old: str, new: str) -> list[tuple[Path, bool]]:
    """Replace old with new in every .mdx file directly under target_dir. Returns (path, changed) pairs."""
    if not target_dir.is_dir():
        raise InputError(f"Not a directory: {target_dir}")
    files = sorted(target_dir.glob("*.mdx"))
    logger.info("Found %d MDX files to process", len(files))
    return [(f, rewrite_file(f, old, new)) for f in files]
