from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Iterable, List, Tuple, Union

UNORDERED = "unordered"
ORDERED = "ordered"


@dataclass(frozen=True)
class Segment:
    text: str
    bold: bool = False
    italic: bool = False
    underline: bool = False
    code: bool = False
    heading_level: int = 0
    list_type: str | None = None
    list_indent: int = 0
    hyperlink: str | None = None

    def format_key(self) -> tuple:
        """Every field except ``text``."""
        return (
            self.bold,
            self.italic,
            self.underline,
            self.code,
            self.heading_level,
            self.list_type,
            self.list_indent,
            self.hyperlink,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "bold": self.bold,
            "italic": self.italic,
            "underline": self.underline,
            "code": self.code,
            "headingLevel": self.heading_level,
            "listType": self.list_type,
            "listIndent": self.list_indent,
            "hyperlink": self.hyperlink,
        }


@dataclass(frozen=True)
class TableRow:
    cells: Tuple[Tuple[Segment, ...], ...]
    is_header: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "cells": [[seg.to_dict() for seg in cell] for cell in self.cells],
            "isHeader": self.is_header,
        }


@dataclass(frozen=True)
class TextBlock:
    segments: Tuple[Segment, ...]
    type: str = field(default="text", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "segments": [seg.to_dict() for seg in self.segments]}


@dataclass(frozen=True)
class ImageBlock:
    url: str
    title: str
    type: str = field(default="image", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "url": self.url, "title": self.title}


@dataclass(frozen=True)
class HorizontalRuleBlock:
    type: str = field(default="hr", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type}


@dataclass(frozen=True)
class TableBlock:
    rows: Tuple[TableRow, ...]
    type: str = field(default="table", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "rows": [row.to_dict() for row in self.rows]}


RenderBlock = Union[TextBlock, ImageBlock, HorizontalRuleBlock, TableBlock]


@dataclass(frozen=True)
class RenderPlan:
    blocks: Tuple[RenderBlock, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"blocks": [block.to_dict() for block in self.blocks]}


def merge_segments(segments: Iterable[Segment]) -> Tuple[Segment, ...]:
    """Join neighbouring segments whose formatting is identical."""
    merged: List[Segment] = []
    for segment in segments:
        if merged and merged[-1].format_key() == segment.format_key():
            merged[-1] = replace(merged[-1], text=merged[-1].text + segment.text)
        else:
            merged.append(replace(segment))
    return tuple(merged)
