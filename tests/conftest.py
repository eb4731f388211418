"""Root test configuration: shared export builders and settings"""

import json

import pytest

from lexmdx.config import Settings


API_BASE = "https://api.example.com/api"


def _make_doc(slug="hello", title="Hello", status="published", children=None, **kwargs) -> dict:
    """Return a raw export doc with a Lexical root holding the given block nodes."""
    doc = {
        "id": 1,
        "title": title,
        "excerpt": "",
        "date": "2024-01-05T00:00:00Z",
        "slug": slug,
        "status": status,
        "content": {"root": {"type": "root", "children": children or []}},
    }
    doc.update(kwargs)
    return doc


def _paragraph(*texts: str) -> dict:
    return {
        "type": "paragraph",
        "children": [{"type": "text", "text": t, "format": 0} for t in texts],
    }


def _upload(url: str, alt: str = "") -> dict:
    return {"type": "upload", "value": {"url": url, "alt": alt}}


@pytest.fixture(name="write_export")
def write_export_fixture(tmp_path):
    """Write {docs: [...]} to tmp_path/data.json and return the path."""
    def _write(docs: list) -> str:
        path = tmp_path / "data.json"
        path.write_text(json.dumps({"docs": docs}), encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture(name="settings")
def settings_fixture(tmp_path):
    return Settings(
        input_file=str(tmp_path / "data.json"),
        output_dir=str(tmp_path / "content" / "blog"),
        assets_dir=str(tmp_path / "assets" / "blog"),
        api_base_url=API_BASE,
    )


@pytest.fixture(name="make_doc")
def make_doc_fixture():
    return _make_doc


@pytest.fixture(name="paragraph")
def paragraph_fixture():
    return _paragraph


@pytest.fixture(name="upload")
def upload_fixture():
    return _upload


@pytest.fixture(name="api_base")
def api_base_fixture():
    return API_BASE
