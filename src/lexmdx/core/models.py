"""Data models for the Lexical export and the conversion run"""

from dataclasses import dataclass, field
from enum import Enum, IntFlag
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator


class NodeType(str, Enum):
    root      = "root"
    heading   = "heading"
    paragraph = "paragraph"
    text      = "text"
    linebreak = "linebreak"
    link      = "link"
    list      = "list"
    listitem  = "listitem"
    quote     = "quote"
    upload    = "upload"
    block     = "block"


class TextFormat(IntFlag):
    """Lexical text format bits."""
    BOLD          = 1
    ITALIC        = 2
    STRIKETHROUGH = 4
    UNDERLINE     = 8
    CODE          = 16


class NodeFields(BaseModel):
    """Payload of link and block nodes."""
    model_config = ConfigDict(extra="ignore")

    url:       Optional[str] = None
    newTab:    Optional[bool] = None
    code:      Optional[str] = None
    language:  Optional[str] = None
    filename:  Optional[str] = None
    blockType: Optional[str] = None


class UploadValue(BaseModel):
    """Media reference carried by upload nodes and cover images."""
    model_config = ConfigDict(extra="ignore")

    url:      Optional[str] = None
    filename: Optional[str] = None
    alt:      Optional[str] = None


class LexicalNode(BaseModel):
    """One node of a Lexical rich-text tree. Unknown node types are kept as-is."""
    model_config = ConfigDict(extra="ignore")

    type:     str
    tag:      Optional[str] = None
    text:     Optional[str] = None
    format:   Union[int, str, None] = None   # int bitmask on text nodes, alignment string elsewhere
    children: Optional[list["LexicalNode"]] = None
    fields:   Optional[NodeFields] = None
    value:    Optional[UploadValue] = None
    listType: Optional[str] = None
    indent:   Optional[int] = None


class DocContent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    root: LexicalNode

    @field_validator("root", mode="before")
    @classmethod
    def _default_root_type(cls, value: Any) -> Any:
        # some exports omit the type on the top-level node
        if isinstance(value, dict) and "type" not in value:
            return {**value, "type": NodeType.root.value}
        return value


class BlogDoc(BaseModel):
    """A single exported blog post."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    id:         Union[int, str]
    title:      str
    excerpt:    Optional[str] = None
    date:       str
    slug:       str
    status:     str
    coverImage: Optional[UploadValue] = None
    content:    DocContent


class DataFile(BaseModel):
    """Top level of the input file. Docs stay raw until each is converted."""
    model_config = ConfigDict(extra="ignore")

    docs: list[dict[str, Any]]


@dataclass
class RunSummary:
    """Aggregate result of one conversion run."""
    success: int = 0
    errors:  int = 0
    assets:  int = 0
    written: list[tuple[str, Path]] = field(default_factory=list)
