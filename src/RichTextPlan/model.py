from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, List, Union

TEXT = "text"
DOCUMENT = "document"
PARAGRAPH = "paragraph"
BLOCKQUOTE = "blockquote"
UNORDERED_LIST = "unordered-list"
ORDERED_LIST = "ordered-list"
LIST_ITEM = "list-item"
TABLE = "table"
TABLE_ROW = "table-row"
TABLE_CELL = "table-cell"
HEADER_CELL = "table-header-cell"
HR = "hr"
EMBEDDED_ASSET_BLOCK = "embedded-asset-block"
EMBEDDED_ENTRY_BLOCK = "embedded-entry-block"
EMBEDDED_ENTRY_INLINE = "embedded-entry-inline"

HEADING_TYPES = tuple(f"heading-{level}" for level in range(1, 7))

BLOCK_NODE_TYPES = frozenset(
    (
        PARAGRAPH,
        *HEADING_TYPES,
        BLOCKQUOTE,
        UNORDERED_LIST,
        ORDERED_LIST,
        LIST_ITEM,
        TABLE,
        TABLE_ROW,
        TABLE_CELL,
        HEADER_CELL,
        HR,
        EMBEDDED_ASSET_BLOCK,
        EMBEDDED_ENTRY_BLOCK,
    )
)

HYPERLINK_NODE_TYPES = frozenset(("hyperlink", "entry-hyperlink", "asset-hyperlink"))
INLINE_NODE_TYPES = HYPERLINK_NODE_TYPES | {EMBEDDED_ENTRY_INLINE}

_HEADING_RE = re.compile(r"^heading-(?P<level>[1-6])$")


@dataclass
class Mark:
    type: str


@dataclass
class Text:
    value: str
    marks: List[Mark] = field(default_factory=list)
    data: dict[str, Any] = field(default_factory=dict)

    node_type = TEXT


@dataclass
class Inline:
    """Hyperlinks and inline embeds; content holds text leaves only."""

    node_type: str
    content: List[Text] = field(default_factory=list)
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class Block:
    node_type: str
    content: List["Node"] = field(default_factory=list)
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class Document:
    content: List[Block] = field(default_factory=list)
    data: dict[str, Any] = field(default_factory=dict)

    node_type = DOCUMENT


Node = Union[Block, Inline, Text]


def heading_level(node_type: str) -> int:
    """Return 1-6 for ``heading-N`` node types, 0 for anything else."""
    match = _HEADING_RE.match(node_type)
    if match:
        return int(match.group("level"))
    return 0


def is_block_type(node_type: str) -> bool:
    return node_type in BLOCK_NODE_TYPES
