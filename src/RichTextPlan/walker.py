from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable, List, Tuple

from . import fallbacks
from .model import (
    BLOCKQUOTE,
    EMBEDDED_ENTRY_INLINE,
    HEADER_CELL,
    HYPERLINK_NODE_TYPES,
    LIST_ITEM,
    ORDERED_LIST,
    PARAGRAPH,
    TABLE,
    TABLE_CELL,
    TABLE_ROW,
    UNORDERED_LIST,
    Block,
    Inline,
    Node,
    Text,
    heading_level,
    is_block_type,
)
from .plan import ORDERED, UNORDERED, Segment, TableRow, merge_segments

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormattingContext:
    """State inherited while descending the tree. Never mutated; derive with ``replace``."""

    heading_level: int = 0
    list_type: str | None = None
    list_indent: int = 0
    # Propagated into quoted subtrees, not reflected on segments.
    is_blockquote: bool = False
    locale: str = fallbacks.DEFAULT_LOCALE

    @classmethod
    def root(cls, locale: str = fallbacks.DEFAULT_LOCALE) -> "FormattingContext":
        return cls(locale=locale)

    def segment(self, text: str, **flags) -> Segment:
        return Segment(
            text=text,
            heading_level=self.heading_level,
            list_type=self.list_type,
            list_indent=self.list_indent,
            **flags,
        )


@dataclass(frozen=True)
class MarkFlags:
    bold: bool = False
    italic: bool = False
    underline: bool = False
    code: bool = False


def resolve_marks(text: Text) -> MarkFlags:
    kinds = {mark.type for mark in text.marks}
    return MarkFlags(
        bold="bold" in kinds,
        italic="italic" in kinds,
        underline="underline" in kinds,
        code="code" in kinds,
    )


def text_segment(text: Text, ctx: FormattingContext) -> Segment:
    flags = resolve_marks(text)
    return ctx.segment(
        text.value,
        bold=flags.bold,
        italic=flags.italic,
        underline=flags.underline,
        code=flags.code,
    )


def resolve_hyperlink(inline: Inline, locale: str = fallbacks.DEFAULT_LOCALE) -> str | None:
    """Direct ``uri`` first, then the file URL of a linked asset."""
    uri = inline.data.get("uri")
    if isinstance(uri, str) and uri:
        return uri
    return fallbacks.resolve_file_url(inline.data.get("target"), locale)


def inline_segments(inline: Inline, ctx: FormattingContext) -> List[Segment]:
    href = None
    if inline.node_type in HYPERLINK_NODE_TYPES:
        href = resolve_hyperlink(inline, ctx.locale)
        if href is None:
            logger.debug("Unresolved %s rendered as plain text", inline.node_type)

    segments: List[Segment] = []
    for child in inline.content:
        if not isinstance(child, Text):
            continue
        segment = text_segment(child, ctx)
        if href:
            segment = replace(segment, underline=True, hyperlink=href)
        segments.append(segment)

    if inline.node_type == EMBEDDED_ENTRY_INLINE:
        title = fallbacks.resolve_entry_title(inline.data.get("target"), ctx.locale)
        segments.append(ctx.segment(f"[{title}]", italic=True))
    return segments


def process_block(block: Block, ctx: FormattingContext) -> List[Segment]:
    """Flatten one block subtree into unmerged segments."""
    node_type = block.node_type
    level = heading_level(node_type)
    if level:
        return _collect(block.content, replace(ctx, heading_level=level))

    if node_type == PARAGRAPH:
        return _collect(block.content, ctx)

    if node_type == BLOCKQUOTE:
        quoted = replace(ctx, is_blockquote=True)
        return _collect(block.content, quoted)

    if node_type in (UNORDERED_LIST, ORDERED_LIST):
        list_type = UNORDERED if node_type == UNORDERED_LIST else ORDERED
        item_ctx = replace(ctx, list_type=list_type, list_indent=ctx.list_indent + 1)
        segments: List[Segment] = []
        for item in _blocks(block.content):
            if item.node_type != LIST_ITEM:
                continue
            segments.extend(_collect(item.content, item_ctx))
        return segments

    if node_type == TABLE:
        return [Segment(text=text) for text in table_row_texts(block, ctx)]

    if node_type in (TABLE_CELL, HEADER_CELL):
        return _collect(block.content, ctx)

    if not is_block_type(node_type):
        logger.debug("Collecting text from unknown node type %r", node_type)
    return _collect(block.content, ctx)


def table_row_texts(table: Block, ctx: FormattingContext) -> List[str]:
    """Tab-joined cell text for each table row."""
    lines: List[str] = []
    for row in _blocks(table.content):
        if row.node_type != TABLE_ROW:
            continue
        cells = ["".join(seg.text for seg in process_block(cell, ctx)) for cell in _blocks(row.content)]
        lines.append("\t".join(cells))
    return lines


def table_rows(table: Block, locale: str = fallbacks.DEFAULT_LOCALE) -> Tuple[TableRow, ...]:
    """Structured rows; cells start from the root context whatever surrounds the table."""
    cell_ctx = FormattingContext.root(locale)
    rows: List[TableRow] = []
    for row in _blocks(table.content):
        if row.node_type != TABLE_ROW:
            continue
        cells = []
        is_header = False
        for cell in _blocks(row.content):
            if cell.node_type == HEADER_CELL:
                is_header = True
            cells.append(merge_segments(_collect(cell.content, cell_ctx)))
        rows.append(TableRow(cells=tuple(cells), is_header=is_header))
    return tuple(rows)


def _collect(children: Iterable[Node], ctx: FormattingContext) -> List[Segment]:
    segments: List[Segment] = []
    for child in children:
        if isinstance(child, Text):
            segments.append(text_segment(child, ctx))
        elif isinstance(child, Inline):
            segments.extend(inline_segments(child, ctx))
        elif isinstance(child, Block):
            segments.extend(process_block(child, ctx))
    return segments


def _blocks(children: Iterable[Node]) -> List[Block]:
    return [child for child in children if isinstance(child, Block)]
