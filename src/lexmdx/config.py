"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:          str = "lexmdx"
    input_file:        str = Field(default="./data.json",        description="JSON export with a top-level 'docs' array")
    output_dir:        str = Field(default="./src/content/blog", description="Directory for generated MDX files")
    assets_dir:        str = Field(default="./src/assets/blog",  description="Directory for downloaded images")
    asset_link_prefix: str = Field(default="../../assets/blog",  description="Image path prefix used inside MDX output")
    api_base_url:      str = Field(default="https://4real.ltd/api", description="Base URL for relative media URLs")
    publish_status:    str = Field(default="published",          description="Only docs with this status are converted")
    download_timeout:  Optional[float] = Field(default=None, gt=0, description="Per-request timeout in seconds; unset = none")
    download_chunk_size: int = Field(default=8192, ge=1, description="Bytes per streamed write")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then LEXMDX_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"LEXMDX_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
