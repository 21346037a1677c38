from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, List

import yaml

from .model import INLINE_NODE_TYPES, TEXT, Block, Document, Inline, Mark, Node, Text

logger = logging.getLogger(__name__)


def load_document(text: str) -> Document:
    """Parse a serialized rich text tree (JSON or YAML) into a Document."""
    data = yaml.safe_load(text)
    return document_from_dict(data)


def document_from_dict(data: Any) -> Document:
    if not isinstance(data, Mapping):
        raise ValueError("Rich text root must be a mapping with a 'content' list.")
    content = data.get("content")
    if content is None:
        content = []
    if not isinstance(content, list):
        raise ValueError("Rich text 'content' must be a list of nodes.")

    blocks: List[Block] = []
    for entry in content:
        node = _node_from_dict(entry)
        if isinstance(node, Block):
            blocks.append(node)
        elif node is not None:
            logger.debug("Skipping top-level %s node", node.node_type)
    return Document(content=blocks, data=_data(data))


def _node_from_dict(entry: Any) -> Node | None:
    if not isinstance(entry, Mapping):
        logger.debug("Skipping malformed node %r", entry)
        return None
    node_type = str(entry.get("nodeType") or "")
    if node_type == TEXT:
        return Text(value=str(entry.get("value") or ""), marks=_marks(entry.get("marks")), data=_data(entry))

    children = [node for node in map(_node_from_dict, _list(entry.get("content"))) if node is not None]
    if node_type in INLINE_NODE_TYPES:
        texts = [child for child in children if isinstance(child, Text)]
        return Inline(node_type=node_type, content=texts, data=_data(entry))
    return Block(node_type=node_type, content=children, data=_data(entry))


def _marks(value: Any) -> List[Mark]:
    marks: List[Mark] = []
    for mark in _list(value):
        if isinstance(mark, Mapping) and mark.get("type"):
            marks.append(Mark(type=str(mark["type"])))
        elif isinstance(mark, str):
            marks.append(Mark(type=mark))
    return marks


def _list(value: Any) -> list:
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _data(entry: Mapping) -> dict[str, Any]:
    data = entry.get("data")
    return dict(data) if isinstance(data, Mapping) else {}
