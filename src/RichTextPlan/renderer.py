from __future__ import annotations

import logging
from typing import List

from . import fallbacks
from .model import EMBEDDED_ASSET_BLOCK, EMBEDDED_ENTRY_BLOCK, HR, TABLE, Block, Document
from .plan import (
    HorizontalRuleBlock,
    ImageBlock,
    RenderBlock,
    RenderPlan,
    Segment,
    TableBlock,
    TextBlock,
    merge_segments,
)
from .walker import FormattingContext, process_block, table_rows

logger = logging.getLogger(__name__)


def document_to_render_plan(doc: Document, locale: str = fallbacks.DEFAULT_LOCALE) -> RenderPlan:
    """Convert a rich text document into a flat plan of text, image, hr and table blocks."""
    blocks: List[RenderBlock] = []
    for block in doc.content:
        render_block = _dispatch_block(block, locale)
        if render_block is not None:
            blocks.append(render_block)
    return RenderPlan(blocks=tuple(blocks))


def _dispatch_block(block: Block, locale: str) -> RenderBlock | None:
    if block.node_type == TABLE:
        rows = table_rows(block, locale)
        return TableBlock(rows=rows) if rows else None
    if block.node_type == EMBEDDED_ASSET_BLOCK:
        return _image_block(block, locale)
    if block.node_type == EMBEDDED_ENTRY_BLOCK:
        title = fallbacks.resolve_entry_title(block.data.get("target"), locale)
        return TextBlock(segments=(Segment(text=f"[Embedded: {title}]", italic=True),))
    if block.node_type == HR:
        return HorizontalRuleBlock()

    segments = process_block(block, FormattingContext.root(locale))
    if not segments:
        return None
    return TextBlock(segments=merge_segments(segments))


def _image_block(block: Block, locale: str) -> ImageBlock | None:
    target = block.data.get("target")
    url = fallbacks.resolve_file_url(target, locale)
    if url is None:
        logger.debug("Dropping embedded asset without a file URL")
        return None
    return ImageBlock(url=url, title=fallbacks.resolve_asset_title(target, locale))


def rich_text_to_plain_string(doc: Document | None, locale: str = fallbacks.DEFAULT_LOCALE) -> str:
    """Flatten a document to newline separated text, one line per top-level block."""
    if doc is None or not doc.content:
        return ""

    lines: List[str] = []
    for block in doc.content:
        line = _plain_line(block, locale)
        if line:
            lines.append(line)
    return "\n".join(lines)


def _plain_line(block: Block, locale: str) -> str:
    target = block.data.get("target")
    if block.node_type == HR:
        return fallbacks.HR_PLAIN_TEXT
    if block.node_type == EMBEDDED_ASSET_BLOCK:
        return f"[{fallbacks.resolve_asset_title(target, locale)}]"
    if block.node_type == EMBEDDED_ENTRY_BLOCK:
        return f"[Embedded: {fallbacks.resolve_entry_title(target, locale)}]"

    segments = process_block(block, FormattingContext.root(locale))
    return "".join(segment.text for segment in segments)
