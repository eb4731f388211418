"""Export: build YAML frontmatter + MDX content and write output files"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from lexmdx.core.models import BlogDoc


def escape_yaml_string(value: str) -> str:
    """Double-quote a scalar for frontmatter.

    Values containing '"', newline or ':' get quotes escaped and newlines
    flattened to spaces; every other value is quoted verbatim.
    """
    if '"' in value or "\n" in value or ":" in value:
        return '"' + value.replace('"', '\\"').replace("\n", " ") + '"'
    return f'"{value}"'


def format_date(value: str) -> str:
    """Return the UTC calendar date (YYYY-MM-DD) of an ISO-8601 timestamp."""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid date: {value!r}") from e
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date().isoformat()


def build_frontmatter(doc: BlogDoc, hero_image: Optional[str] = None) -> str:
    """Return the '---' delimited frontmatter block (no trailing newline)."""
    lines = [
        "---",
        f"title: {escape_yaml_string(doc.title)}",
        f"description: {escape_yaml_string(doc.excerpt or '')}",
        f'pubDate: "{format_date(doc.date)}"',
    ]
    if hero_image:
        lines.append(f'heroImage: "{hero_image}"')
    lines.append("---")
    return "\n".join(lines)


def build_mdx(doc: BlogDoc, body: str, hero_image: Optional[str] = None) -> str:
    """Return frontmatter, a blank line, then the body with a trailing newline."""
    return f"{build_frontmatter(doc, hero_image)}\n\n{body}\n"


def write_doc(
    doc: BlogDoc,
    body: str,
    output_dir: Path,
    hero_image: Optional[str] = None,
    ) -> Path:
    """Write output_dir/{slug}.mdx, replacing any existing file. Returns the path."""
    output_dir.mkdir(parents=True, exist_ok=True)
    mdx_path = output_dir / f"{doc.slug}.mdx"
    mdx_path.write_text(build_mdx(doc, body, hero_image), encoding="utf-8")
    return mdx_path
