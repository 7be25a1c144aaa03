"""Typed model of Atlassian Document Format (ADF) trees.

ADF is the JSON tree Jira returns for rich-text fields. ``parse_document``
turns the raw JSON into the node classes below. Parsing never fails on a
tree of mappings: node types this module does not know become UnknownNode,
which keeps its children and its plain text so the converter can degrade
to text instead of dropping content.

Reference: https://developer.atlassian.com/cloud/jira/platform/apis/document/structure/
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar


@dataclass(frozen=True)
class Mark:
    """Formatting applied to a text node (strong, em, link, ...)."""

    type: str
    attrs: Mapping[str, Any] = field(default_factory=dict)


@dataclass
class AdfNode:
    """Base class for all ADF nodes."""

    INLINE: ClassVar[bool] = False


@dataclass
class ContainerNode(AdfNode):
    """A node whose meaning is its list of children."""

    content: list[AdfNode] = field(default_factory=list)


# Block nodes


@dataclass
class Doc(ContainerNode):
    pass


@dataclass
class Paragraph(ContainerNode):
    pass


@dataclass
class Heading(ContainerNode):
    level: int = 1


@dataclass
class BulletList(ContainerNode):
    pass


@dataclass
class OrderedList(ContainerNode):
    order: int = 1


@dataclass
class ListItem(ContainerNode):
    pass


@dataclass
class TaskList(ContainerNode):
    pass


@dataclass
class TaskItem(ContainerNode):
    done: bool = False


@dataclass
class DecisionList(ContainerNode):
    pass


@dataclass
class DecisionItem(ContainerNode):
    pass


@dataclass
class Blockquote(ContainerNode):
    pass


@dataclass
class Panel(ContainerNode):
    pass


@dataclass
class Expand(ContainerNode):
    title: str = ""


@dataclass
class CodeBlock(AdfNode):
    text: str = ""
    language: str | None = None


@dataclass
class Rule(AdfNode):
    pass


@dataclass
class Table(ContainerNode):
    pass


@dataclass
class TableRow(ContainerNode):
    pass


@dataclass
class TableCell(ContainerNode):
    header: bool = False


@dataclass
class BlockCard(AdfNode):
    url: str = ""


@dataclass
class Media(AdfNode):
    """Attachments and media groups; they carry no text."""


# Inline nodes


@dataclass
class Text(AdfNode):
    INLINE: ClassVar[bool] = True

    text: str = ""
    marks: list[Mark] = field(default_factory=list)


@dataclass
class HardBreak(AdfNode):
    INLINE: ClassVar[bool] = True


@dataclass
class Mention(AdfNode):
    INLINE: ClassVar[bool] = True

    text: str = ""


@dataclass
class Emoji(AdfNode):
    INLINE: ClassVar[bool] = True

    text: str = ""


@dataclass
class DateNode(AdfNode):
    """Inline date; timestamp is milliseconds since the epoch, as a string."""

    INLINE: ClassVar[bool] = True

    timestamp: str = ""


@dataclass
class Status(AdfNode):
    INLINE: ClassVar[bool] = True

    text: str = ""


@dataclass
class InlineCard(AdfNode):
    INLINE: ClassVar[bool] = True

    url: str = ""


@dataclass
class UnknownNode(ContainerNode):
    """A node type this module does not model.

    Attributes:
        type: The raw ADF type name
        text: The node's own text, if it carried one
    """

    type: str = ""
    text: str = ""

    def plain_text(self) -> str:
        return self.text + "".join(plain_text(child) for child in self.content)


def plain_text(node: AdfNode) -> str:
    """Concatenate the text carried by a node and its descendants."""
    if isinstance(node, UnknownNode):
        return node.plain_text()
    if isinstance(node, Text):
        return node.text
    if isinstance(node, CodeBlock):
        return node.text
    if isinstance(node, (Mention, Emoji, Status)):
        return node.text
    if isinstance(node, (InlineCard, BlockCard)):
        return node.url
    if isinstance(node, HardBreak):
        return "\n"
    if isinstance(node, ContainerNode):
        return "".join(plain_text(child) for child in node.content)
    return ""


# Parsing


def _attrs(raw: Mapping[str, Any]) -> Mapping[str, Any]:
    attrs = raw.get("attrs")
    return attrs if isinstance(attrs, Mapping) else {}


def _str_attr(raw: Mapping[str, Any], name: str, default: str = "") -> str:
    value = _attrs(raw).get(name)
    if value is None:
        return default
    return str(value)


def _int_attr(raw: Mapping[str, Any], name: str, default: int) -> int:
    value = _attrs(raw).get(name)
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


def _children(raw: Mapping[str, Any]) -> list[AdfNode]:
    content = raw.get("content")
    if not isinstance(content, list):
        return []
    return [node for node in (parse_node(child) for child in content) if node is not None]


def _marks(raw: Mapping[str, Any]) -> list[Mark]:
    marks = raw.get("marks")
    if not isinstance(marks, list):
        return []
    result = []
    for mark in marks:
        if isinstance(mark, Mapping) and isinstance(mark.get("type"), str):
            result.append(Mark(type=mark["type"], attrs=_attrs(mark)))
    return result


def _text(raw: Mapping[str, Any]) -> str:
    text = raw.get("text")
    return text if isinstance(text, str) else ""


def _code_block(raw: Mapping[str, Any]) -> CodeBlock:
    language = _str_attr(raw, "language") or None
    return CodeBlock(text="".join(plain_text(child) for child in _children(raw)), language=language)


def _emoji(raw: Mapping[str, Any]) -> Emoji:
    return Emoji(text=_str_attr(raw, "text") or _str_attr(raw, "shortName"))


def _mention(raw: Mapping[str, Any]) -> Mention:
    text = _str_attr(raw, "text") or _str_attr(raw, "id")
    if text and not text.startswith("@"):
        text = f"@{text}"
    return Mention(text=text)


def _container(cls: type[ContainerNode]) -> Callable[[Mapping[str, Any]], AdfNode]:
    return lambda raw: cls(content=_children(raw))


_PARSERS: dict[str, Callable[[Mapping[str, Any]], AdfNode]] = {
    "doc": _container(Doc),
    "paragraph": _container(Paragraph),
    "heading": lambda raw: Heading(
        content=_children(raw), level=min(max(_int_attr(raw, "level", 1), 1), 6)
    ),
    "bulletList": _container(BulletList),
    "orderedList": lambda raw: OrderedList(
        content=_children(raw), order=max(_int_attr(raw, "order", 1), 0)
    ),
    "listItem": _container(ListItem),
    "taskList": _container(TaskList),
    "taskItem": lambda raw: TaskItem(
        content=_children(raw), done=_str_attr(raw, "state").upper() == "DONE"
    ),
    "decisionList": _container(DecisionList),
    "decisionItem": _container(DecisionItem),
    "blockquote": _container(Blockquote),
    "panel": _container(Panel),
    "expand": lambda raw: Expand(content=_children(raw), title=_str_attr(raw, "title")),
    "nestedExpand": lambda raw: Expand(content=_children(raw), title=_str_attr(raw, "title")),
    "codeBlock": _code_block,
    "rule": lambda raw: Rule(),
    "table": _container(Table),
    "tableRow": _container(TableRow),
    "tableHeader": lambda raw: TableCell(content=_children(raw), header=True),
    "tableCell": _container(TableCell),
    "blockCard": lambda raw: BlockCard(url=_str_attr(raw, "url")),
    "embedCard": lambda raw: BlockCard(url=_str_attr(raw, "url")),
    "mediaSingle": lambda raw: Media(),
    "mediaGroup": lambda raw: Media(),
    "mediaInline": lambda raw: Media(),
    "media": lambda raw: Media(),
    "text": lambda raw: Text(text=_text(raw), marks=_marks(raw)),
    "hardBreak": lambda raw: HardBreak(),
    "mention": _mention,
    "emoji": _emoji,
    "date": lambda raw: DateNode(timestamp=_str_attr(raw, "timestamp")),
    "status": lambda raw: Status(text=_str_attr(raw, "text")),
    "inlineCard": lambda raw: InlineCard(url=_str_attr(raw, "url")),
}


def parse_node(raw: Any) -> AdfNode | None:
    """Parse one raw ADF node.

    Returns:
        The typed node, an UnknownNode for unrecognized types, or None if
        ``raw`` is not a mapping
    """
    if not isinstance(raw, Mapping):
        return None
    node_type = raw.get("type")
    parser = _PARSERS.get(node_type) if isinstance(node_type, str) else None
    if parser is None:
        return UnknownNode(
            content=_children(raw),
            type=node_type if isinstance(node_type, str) else "",
            text=_text(raw),
        )
    return parser(raw)


def parse_document(raw: Any) -> AdfNode | None:
    """Parse a raw ADF document.

    Returns:
        The root node, or None if ``raw`` is not an ADF mapping
    """
    return parse_node(raw)


__all__ = [
    "AdfNode",
    "BlockCard",
    "Blockquote",
    "BulletList",
    "CodeBlock",
    "ContainerNode",
    "DateNode",
    "DecisionItem",
    "DecisionList",
    "Doc",
    "Emoji",
    "Expand",
    "HardBreak",
    "Heading",
    "InlineCard",
    "ListItem",
    "Mark",
    "Media",
    "Mention",
    "OrderedList",
    "Panel",
    "Paragraph",
    "Rule",
    "Status",
    "Table",
    "TableCell",
    "TableRow",
    "TaskItem",
    "TaskList",
    "Text",
    "UnknownNode",
    "parse_document",
    "parse_node",
    "plain_text",
]
