"""Lexical rich-text tree to Markdown/MDX conversion"""

from typing import Callable, Optional, Protocol

from lexmdx.core.models import LexicalNode, NodeType, TextFormat


class AssetResolver(Protocol):
    def resolve(self, url: Optional[str]) -> Optional[str]: ...


def format_text(text: str, fmt: int) -> str:
    """Wrap text in Markdown emphasis for the given format bitmask.

    Code suppresses bold/italic; strikethrough wraps whatever came before,
    including a code span. Underline has no Markdown form and is dropped.
    """
    if not text:
        return ""
    flags = TextFormat(fmt & 0x1F)
    result = text

    if TextFormat.CODE in flags:
        result = f"`{result}`"
    elif TextFormat.BOLD in flags and TextFormat.ITALIC in flags:
        result = f"***{result}***"
    elif TextFormat.BOLD in flags:
        result = f"**{result}**"
    elif TextFormat.ITALIC in flags:
        result = f"*{result}*"

    if TextFormat.STRIKETHROUGH in flags:
        result = f"~~{result}~~"
    return result


def _heading_level(tag: Optional[str]) -> int:
    """Heading level from a tag like 'h3'; 2 when missing or unparseable."""
    if tag and tag[1:].isdecimal():
        return int(tag[1:])
    return 2


def _normalize_newlines(code: str) -> str:
    return code.replace("\r\n", "\n").replace("\r", "\n")


class MarkdownConverter:
    """Walks a Lexical tree depth-first and renders Markdown.

    Upload nodes are resolved through `assets`; without one, images are omitted.
    """

    def __init__(self, assets: Optional[AssetResolver] = None, asset_link_prefix: str = "../../assets/blog"):
        self.assets = assets
        self.asset_link_prefix = asset_link_prefix.rstrip("/")
        self._handlers: dict[str, Callable[[LexicalNode, int], str]] = {
            NodeType.root.value:      self._root,
            NodeType.heading.value:   self._heading,
            NodeType.paragraph.value: self._paragraph,
            NodeType.text.value:      self._text,
            NodeType.linebreak.value: self._linebreak,
            NodeType.link.value:      self._link,
            NodeType.list.value:      self._list,
            NodeType.listitem.value:  self._listitem,
            NodeType.quote.value:     self._quote,
            NodeType.upload.value:    self._upload,
            NodeType.block.value:     self._block,
        }

    def convert(self, node: LexicalNode, indent: int = 0) -> str:
        handler = self._handlers.get(node.type, self._unknown)
        return handler(node, indent)

    def _children(self, node: LexicalNode, sep: str = "") -> str:
        return sep.join(self.convert(child) for child in node.children or [])

    def _root(self, node, indent):
        return self._children(node, "\n\n")

    def _heading(self, node, indent):
        return f"{'#' * _heading_level(node.tag)} {self._children(node)}"

    def _paragraph(self, node, indent):
        return self._children(node)

    def _text(self, node, indent):
        fmt = node.format if isinstance(node.format, int) else 0
        return format_text(node.text or "", fmt)

    def _linebreak(self, node, indent):
        return "  \n"

    def _link(self, node, indent):
        url = (node.fields.url if node.fields else None) or ""
        return f"[{self._children(node)}]({url})"

    def _list(self, node, indent):
        ordered = node.tag == "ol" or node.listType == "number"
        pad = "  " * indent
        items = []
        for i, item in enumerate(node.children or []):
            prefix = f"{i + 1}. " if ordered else "- "
            items.append(f"{pad}{prefix}{self.convert(item, indent)}")
        return "\n".join(items)

    def _listitem(self, node, indent):
        children = node.children or []
        if not any(c.type == NodeType.list.value for c in children):
            return self._children(node)
        parts = []
        for child in children:
            if child.type == NodeType.list.value:
                parts.append("\n" + self.convert(child, indent + 1))
            else:
                parts.append(self.convert(child))
        return "".join(parts)

    def _quote(self, node, indent):
        return "\n".join(f"> {line}" for line in self._children(node).split("\n"))

    def _upload(self, node, indent):
        url = node.value.url if node.value else None
        if not url or self.assets is None:
            return ""
        filename = self.assets.resolve(url)
        if not filename:
            return ""
        alt = node.value.alt or ""
        return f"![{alt}]({self.asset_link_prefix}/{filename})"

    def _block(self, node, indent):
        fields = node.fields
        if not fields or fields.blockType != "code":
            return ""
        code = _normalize_newlines(fields.code or "")
        return f"```{fields.language or ''}\n{code}\n```"

    def _unknown(self, node, indent):
        return self._children(node)


def convert_node(node: LexicalNode, indent: int = 0, assets: Optional[AssetResolver] = None) -> str:
    """Render node (and its subtree) as Markdown."""
    return MarkdownConverter(assets).convert(node, indent)
