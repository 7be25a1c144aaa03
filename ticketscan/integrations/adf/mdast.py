"""Abstract Markdown syntax tree.

Node names follow mdast (https://github.com/syntax-tree/mdast) including
the GFM additions: Table, TableRow, TableCell, Delete and ListItem.checked.
The converter builds this tree from ADF and ``markdown.to_markdown``
serializes it.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Node:
    """Base class for all mdast nodes."""


@dataclass
class Parent(Node):
    children: list[Node] = field(default_factory=list)


# Flow content


@dataclass
class Root(Parent):
    pass


@dataclass
class Paragraph(Parent):
    pass


@dataclass
class Heading(Parent):
    depth: int = 1


@dataclass
class ThematicBreak(Node):
    pass


@dataclass
class Blockquote(Parent):
    pass


@dataclass
class List(Parent):
    ordered: bool = False
    start: int = 1


@dataclass
class ListItem(Parent):
    # None: plain item; True/False: GFM task list item
    checked: bool | None = None


@dataclass
class Code(Node):
    value: str = ""
    lang: str | None = None


@dataclass
class Table(Parent):
    pass


@dataclass
class TableRow(Parent):
    pass


@dataclass
class TableCell(Parent):
    pass


# Phrasing content


@dataclass
class Text(Node):
    value: str = ""


@dataclass
class Emphasis(Parent):
    pass


@dataclass
class Strong(Parent):
    pass


@dataclass
class Delete(Parent):
    pass


@dataclass
class InlineCode(Node):
    value: str = ""


@dataclass
class Break(Node):
    pass


@dataclass
class Link(Parent):
    url: str = ""
    title: str | None = None


PHRASING_TYPES: tuple[type[Node], ...] = (
    Text,
    Emphasis,
    Strong,
    Delete,
    InlineCode,
    Break,
    Link,
)


def to_string(node: Node) -> str:
    """Return the plain text content of a node."""
    if isinstance(node, (Text, InlineCode, Code)):
        return node.value
    if isinstance(node, Break):
        return "\n"
    if isinstance(node, Parent):
        return "".join(to_string(child) for child in node.children)
    return ""


__all__ = [
    "Blockquote",
    "Break",
    "Code",
    "Delete",
    "Emphasis",
    "Heading",
    "InlineCode",
    "Link",
    "List",
    "ListItem",
    "Node",
    "PHRASING_TYPES",
    "Paragraph",
    "Parent",
    "Root",
    "Strong",
    "Table",
    "TableCell",
    "TableRow",
    "Text",
    "ThematicBreak",
    "to_string",
]
