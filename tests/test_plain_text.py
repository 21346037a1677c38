import pytest

from RichTextPlan.model import Block, Document, Inline, Mark, Text
from RichTextPlan.renderer import rich_text_to_plain_string


def paragraph(*values):
    return Block("paragraph", [Text(v) for v in values])


@pytest.mark.parametrize("doc", [None, Document([])])
def test_absent_or_empty_document(doc):
    assert rich_text_to_plain_string(doc) == ""


def test_paragraphs_join_with_newlines():
    doc = Document([paragraph("Hello"), paragraph(), paragraph("World")])
    assert rich_text_to_plain_string(doc) == "Hello\nWorld"


def test_formatting_is_stripped():
    para = Block(
        "paragraph",
        [
            Text("normal "),
            Text("bold", marks=[Mark("bold")]),
            Inline("hyperlink", [Text(" link")], data={"uri": "https://example.com"}),
        ],
    )
    assert rich_text_to_plain_string(Document([para])) == "normal bold link"


def test_special_blocks():
    doc = Document(
        [
            paragraph("Before"),
            Block("hr"),
            Block("embedded-asset-block", data={"target": {"fields": {"title": "Photo"}}}),
            Block("embedded-asset-block"),
            Block("embedded-entry-block", data={"target": {"fields": {"title": "Article"}, "sys": {"id": "abc"}}}),
            paragraph("After"),
        ]
    )
    assert rich_text_to_plain_string(doc) == "Before\n---\n[Photo]\n[image]\n[Embedded: Article]\nAfter"


def test_table_rows_share_the_block_line():
    def cell(value):
        return Block("table-cell", [paragraph(value)])

    table = Block(
        "table",
        [
            Block("table-row", [cell("Name"), cell("Age")]),
            Block("table-row", [cell("Alice"), cell("30")]),
        ],
    )
    assert rich_text_to_plain_string(Document([table, paragraph("end")])) == "Name\tAgeAlice\t30\nend"


def test_list_items_concatenate_on_one_line():
    lst = Block(
        "unordered-list",
        [Block("list-item", [paragraph("one")]), Block("list-item", [paragraph("two")])],
    )
    assert rich_text_to_plain_string(Document([lst])) == "onetwo"


def test_untitled_asset_line_is_not_double_bracketed():
    doc = Document([Block("embedded-asset-block", data={"target": {"fields": {"file": {"url": "//x/y.png"}}}})])
    assert rich_text_to_plain_string(doc) == "[image]"
