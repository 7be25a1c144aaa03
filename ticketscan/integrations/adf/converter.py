"""Convert Atlassian Document Format to Markdown.

The conversion runs in two steps: ``from_adf`` maps the typed ADF tree to
an mdast tree, and ``markdown.to_markdown`` serializes that tree with the
GFM extensions (tables, strikethrough, task lists, autolinks).

Conversion is total. Nodes that have no Markdown counterpart degrade to
their text, inline content found where blocks are expected is wrapped in
a paragraph, and block content found inside inline content is flattened
to text.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from ticketscan.integrations.adf import mdast
from ticketscan.integrations.adf.markdown import to_markdown
from ticketscan.integrations.adf.nodes import (
    AdfNode,
    BlockCard,
    Blockquote,
    BulletList,
    CodeBlock,
    ContainerNode,
    DateNode,
    DecisionItem,
    DecisionList,
    Doc,
    Emoji,
    Expand,
    HardBreak,
    Heading,
    InlineCard,
    ListItem,
    Media,
    Mention,
    OrderedList,
    Panel,
    Paragraph,
    Rule,
    Status,
    Table,
    TableCell,
    TableRow,
    TaskItem,
    TaskList,
    Text,
    UnknownNode,
    parse_document,
    plain_text,
)

logger = logging.getLogger(__name__)

# Inline marks wrapped innermost first
_WRAPPING_MARKS: tuple[tuple[str, type[mdast.Parent]], ...] = (
    ("em", mdast.Emphasis),
    ("strong", mdast.Strong),
    ("strike", mdast.Delete),
)

_LIST_TYPES = (BulletList, OrderedList, TaskList, DecisionList)


def adf_to_markdown(document: Any) -> str | None:
    """Convert a raw ADF document to GitHub-flavored Markdown.

    Args:
        document: The raw ADF JSON value (usually ``fields.description``)

    Returns:
        Markdown text, or None when there is no document. An empty document
        yields an empty string.
    """
    root = parse_document(document)
    if root is None:
        return None
    return to_markdown(from_adf(root))


def from_adf(node: AdfNode) -> mdast.Root:
    """Build an mdast tree from a parsed ADF node."""
    return mdast.Root(children=_blocks([node]))


def _is_inline(node: AdfNode) -> bool:
    if isinstance(node, UnknownNode):
        return not node.content
    return node.INLINE


def _blocks(nodes: Iterable[AdfNode]) -> list[mdast.Node]:
    """Convert nodes in a block context."""
    result: list[mdast.Node] = []
    pending: list[AdfNode] = []

    def flush() -> None:
        children = _phrasing(pending)
        if children:
            result.append(mdast.Paragraph(children=children))
        pending.clear()

    for node in nodes:
        if _is_inline(node):
            pending.append(node)
            continue
        flush()
        result.extend(_block(node))
    flush()
    return result


def _block(node: AdfNode) -> list[mdast.Node]:
    if isinstance(node, Doc):
        return _blocks(node.content)

    if isinstance(node, Paragraph):
        children = _phrasing(node.content)
        return [mdast.Paragraph(children=children)] if children else []

    if isinstance(node, Heading):
        return [mdast.Heading(depth=node.level, children=_phrasing(node.content))]

    if isinstance(node, (BulletList, DecisionList, TaskList)):
        return [mdast.List(ordered=False, children=_list_items(node.content))]

    if isinstance(node, OrderedList):
        return [mdast.List(ordered=True, start=node.order, children=_list_items(node.content))]

    if isinstance(node, (Blockquote, Panel)):
        return [mdast.Blockquote(children=_blocks(node.content))]

    if isinstance(node, Expand):
        title = [mdast.Paragraph([mdast.Strong([mdast.Text(node.title)])])] if node.title else []
        return title + _blocks(node.content)

    if isinstance(node, CodeBlock):
        return [mdast.Code(value=node.text, lang=node.language)]

    if isinstance(node, Rule):
        return [mdast.ThematicBreak()]

    if isinstance(node, Table):
        table = _table(node)
        return [table] if table.children else []

    if isinstance(node, BlockCard):
        return [mdast.Paragraph(children=[_autolink(node.url)])] if node.url else []

    if isinstance(node, Media):
        return []

    if isinstance(node, UnknownNode):
        logger.debug("Rendering unsupported ADF node %r as text", node.type)
        prefix = [mdast.Paragraph([mdast.Text(node.text)])] if node.text else []
        return prefix + _blocks(node.content)

    if isinstance(node, ContainerNode):
        # List items, rows and cells outside of their parents
        return _blocks(node.content)

    return []


def _list_items(nodes: Iterable[AdfNode]) -> list[mdast.Node]:
    items: list[mdast.ListItem] = []
    for node in nodes:
        if isinstance(node, TaskItem):
            items.append(mdast.ListItem(checked=node.done, children=_blocks(node.content)))
        elif isinstance(node, (ListItem, DecisionItem)):
            items.append(mdast.ListItem(children=_blocks(node.content)))
        elif isinstance(node, _LIST_TYPES) and items:
            # Nested task lists are siblings of the item they belong to
            items[-1].children.extend(_block(node))
        else:
            items.append(mdast.ListItem(children=_blocks([node])))
    return list(items)


def _table(node: Table) -> mdast.Table:
    rows: list[mdast.Node] = []
    for row in node.content:
        if isinstance(row, TableRow):
            cells = [mdast.TableCell(children=_cell(cell)) for cell in row.content]
        else:
            cells = [mdast.TableCell(children=_cell(row))]
        rows.append(mdast.TableRow(children=list(cells)))
    return mdast.Table(children=rows)


def _cell(node: AdfNode) -> list[mdast.Node]:
    """Flatten a cell's block content to phrasing, one line per block."""
    contents = node.content if isinstance(node, TableCell) else [node]
    lines: list[list[mdast.Node]] = []
    for block in _blocks(contents):
        if isinstance(block, (mdast.Paragraph, mdast.Heading)):
            line = block.children
        else:
            text = mdast.to_string(block)
            line = [mdast.Text(text)] if text else []
        if line:
            lines.append(line)

    result: list[mdast.Node] = []
    for index, line in enumerate(lines):
        if index:
            result.append(mdast.Break())
        result.extend(line)
    return result


def _phrasing(nodes: Iterable[AdfNode]) -> list[mdast.Node]:
    """Convert nodes in an inline context."""
    result: list[mdast.Node] = []
    for node in nodes:
        if isinstance(node, Text):
            result.extend(_marked_text(node))
        elif isinstance(node, HardBreak):
            result.append(mdast.Break())
        elif isinstance(node, (Mention, Emoji, Status)):
            if node.text:
                result.append(mdast.Text(node.text))
        elif isinstance(node, DateNode):
            result.append(mdast.Text(_format_date(node.timestamp)))
        elif isinstance(node, InlineCard):
            if node.url:
                result.append(_autolink(node.url))
        elif isinstance(node, Media):
            continue
        else:
            text = plain_text(node)
            if text:
                result.append(mdast.Text(text))
    return _merge_adjacent(result)


def _marked_text(node: Text) -> list[mdast.Node]:
    if not node.text:
        return []
    mark_types = {mark.type for mark in node.marks}

    wrapped: mdast.Node
    if "code" in mark_types:
        wrapped = mdast.InlineCode(node.text)
    else:
        wrapped = mdast.Text(node.text)

    for mark_type, wrapper in _WRAPPING_MARKS:
        if mark_type in mark_types:
            wrapped = wrapper(children=[wrapped])

    for mark in node.marks:
        if mark.type == "link":
            href = mark.attrs.get("href")
            if isinstance(href, str) and href:
                title = mark.attrs.get("title")
                wrapped = mdast.Link(
                    url=href,
                    title=title if isinstance(title, str) and title else None,
                    children=[wrapped],
                )
            break
    return [wrapped]


def _autolink(url: str) -> mdast.Link:
    return mdast.Link(url=url, children=[mdast.Text(url)])


def _format_date(timestamp: str) -> str:
    """Render an ADF date (epoch milliseconds) as an ISO date."""
    try:
        moment = datetime.fromtimestamp(int(timestamp) / 1000, tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return timestamp
    return moment.date().isoformat()


def _same_wrapper(left: mdast.Node, right: mdast.Node) -> bool:
    if type(left) is not type(right):
        return False
    if isinstance(left, mdast.Link) and isinstance(right, mdast.Link):
        return left.url == right.url and left.title == right.title
    return isinstance(left, (mdast.Emphasis, mdast.Strong, mdast.Delete))


def _merge_adjacent(nodes: list[mdast.Node]) -> list[mdast.Node]:
    """Join neighbouring text nodes and identical formatting wrappers.

    ADF splits text wherever its marks change, so "**a****b**" would be
    emitted for two adjacent bold runs without this step.
    """
    merged: list[mdast.Node] = []
    for node in nodes:
        previous = merged[-1] if merged else None
        if isinstance(previous, mdast.Text) and isinstance(node, mdast.Text):
            merged[-1] = mdast.Text(previous.value + node.value)
        elif (
            isinstance(previous, mdast.Parent)
            and isinstance(node, mdast.Parent)
            and _same_wrapper(previous, node)
        ):
            previous.children = _merge_adjacent(previous.children + node.children)
        else:
            merged.append(node)
    return merged


__all__ = ["adf_to_markdown", "from_adf"]
