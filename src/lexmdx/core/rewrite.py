"""Image URL prefix replacement in generated MDX files"""

import logging
from pathlib import Path


logger = logging.getLogger(__name__)


def rewrite_prefix(text: str, old: str, new: str) -> tuple[str, bool]:
    """Return (text with every old replaced by new, whether anything changed)."""
    if not old or old not in text:
        return text, False
    return text.replace(old, new), True


def rewrite_file(path: Path, old: str, new: str) -> bool:
    """Rewrite path in place if it references old. Unchanged files are not touched."""
    text, changed = rewrite_prefix(path.read_text(encoding="utf-8"), old, new)
    if changed:
        path.write_text(text, encoding="utf-8")
        logger.info("Updated: %s", path.name)
    else:
        logger.debug("No changes: %s", path.name)
    return changed
