"""Serialize an mdast tree to GitHub-flavored Markdown.

Output conventions:
- ``*`` bullets (``-`` for a list directly following another bullet list),
  ``1.`` ordered markers counting up from the list's start (``1)`` for a
  list directly following another ordered list)
- ``*emphasis*``, ``**strong**``, ``~~strikethrough~~``; ``<em>``, ``<strong>``
  and ``<del>`` where the markers could not open or close at that position
- ATX headings, ``***`` thematic breaks, fenced code blocks
- Pipe tables padded to column width; the first row is the header row
- ``* [ ]`` / ``* [x]`` task list items
- ``<url>`` autolinks for links whose text is their URL

Characters that would otherwise be read as Markdown syntax are escaped
with a backslash.
"""

from __future__ import annotations

import re
import unicodedata

from ticketscan.integrations.adf import mdast

# Rendering modes for phrasing content
_FLOW = "flow"
_LINE = "line"
_CELL = "cell"

_MIN_DELIMITER_WIDTH = 3
_MIN_FENCE_LENGTH = 3

_TEXT_SPECIALS = re.compile(r"[\\`*\[\]<~_]|&(?=#?[A-Za-z0-9]+;)")
_BACKTICK_RUN = re.compile(r"`+")
_AUTOLINK_URL = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]{1,31}:[^\s<>]*$")
_CLOSING_HASHES = re.compile(r"(^|[ \t])(#+)$")

# Markdown marker and HTML tag per emphasis node type
_EMPHASIS_SYNTAX: dict[type, tuple[str, str]] = {
    mdast.Emphasis: ("*", "em"),
    mdast.Strong: ("**", "strong"),
    mdast.Delete: ("~~", "del"),
}

_LINE_START_ESCAPES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"^(#{1,6})(?=[ \t]|$)"), r"\\\1"),
    (re.compile(r"^>"), r"\\>"),
    (re.compile(r"^([-+])(?=[ \t]|$)"), r"\\\1"),
    (re.compile(r"^(\d{1,9})([.)])(?=[ \t]|$)"), r"\1\\\2"),
    (re.compile(r"^([=-])(?=[=-]*[ \t]*$)"), r"\\\1"),
)


def to_markdown(root: mdast.Root) -> str:
    """Serialize a tree; non-empty output ends with one newline."""
    text = _join_blocks(root.children)
    return f"{text}\n" if text else ""


def _join_blocks(nodes: list[mdast.Node], tight: bool = False) -> str:
    parts: list[str] = []
    previous: mdast.Node | None = None
    bullet = "*"
    delimiter = "."
    for node in nodes:
        if isinstance(node, mdast.List):
            # Two adjacent lists of the same kind and marker would merge
            same_kind = isinstance(previous, mdast.List) and previous.ordered == node.ordered
            if node.ordered:
                delimiter = (")" if delimiter == "." else ".") if same_kind else "."
            else:
                bullet = ("-" if bullet == "*" else "*") if same_kind else "*"
        rendered = _flow(node, bullet, delimiter)
        if rendered:
            if parts:
                parts.append("\n" if tight and _interrupts_paragraph(node) else "\n\n")
            parts.append(rendered)
        previous = node
    return "".join(parts)


def _interrupts_paragraph(node: mdast.Node) -> bool:
    # Only ordered lists starting at 1 may follow a paragraph line directly
    if not isinstance(node, mdast.List):
        return False
    return not node.ordered or node.start == 1


def _flow(node: mdast.Node, bullet: str = "*", delimiter: str = ".") -> str:
    if isinstance(node, mdast.Paragraph):
        return _escape_line_starts(_phrasing(node.children, _FLOW))

    if isinstance(node, mdast.Heading):
        content = _phrasing(node.children, _LINE).strip()
        # A trailing run of "#" would be read as the closing sequence
        content = _CLOSING_HASHES.sub(r"\1\\\2", content)
        marker = "#" * min(max(node.depth, 1), 6)
        return f"{marker} {content}" if content else marker

    if isinstance(node, mdast.ThematicBreak):
        return "***"

    if isinstance(node, mdast.Blockquote):
        inner = _join_blocks(node.children)
        return "\n".join(f"> {line}" if line else ">" for line in inner.split("\n"))

    if isinstance(node, mdast.List):
        return _list(node, bullet, delimiter)

    if isinstance(node, mdast.Code):
        return _code(node)

    if isinstance(node, mdast.Table):
        return _table(node)

    if isinstance(node, mdast.Root):
        return _join_blocks(node.children)

    if isinstance(node, mdast.PHRASING_TYPES):
        return _escape_line_starts(_phrasing([node], _FLOW))

    return _escape_text(mdast.to_string(node))


def _list(node: mdast.List, bullet: str, delimiter: str = ".") -> str:
    lines: list[str] = []
    for index, item in enumerate(node.children):
        marker = f"{node.start + index}{delimiter}" if node.ordered else bullet
        if isinstance(item, mdast.ListItem):
            content = _join_blocks(item.children, tight=True)
            if item.checked is not None:
                box = "[x]" if item.checked else "[ ]"
                content = f"{box} {content}" if content else box
        else:
            content = _flow(item)

        indent = " " * (len(marker) + 1)
        item_lines = content.split("\n")
        lines.append(f"{marker} {item_lines[0]}" if item_lines[0] else marker)
        lines.extend(f"{indent}{line}" if line else "" for line in item_lines[1:])
    return "\n".join(lines)


def _code(node: mdast.Code) -> str:
    longest = max((len(run) for run in _BACKTICK_RUN.findall(node.value)), default=0)
    fence = "`" * max(_MIN_FENCE_LENGTH, longest + 1)
    info = node.lang or ""
    body = node.value.rstrip("\n")
    if body:
        return f"{fence}{info}\n{body}\n{fence}"
    return f"{fence}{info}\n{fence}"


def _table(node: mdast.Table) -> str:
    rows: list[list[str]] = []
    for row in node.children:
        if isinstance(row, mdast.TableRow):
            rows.append([_cell(cell) for cell in row.children])
        else:
            rows.append([_cell(row)])

    columns = max((len(row) for row in rows), default=0)
    if columns == 0:
        return ""
    for row in rows:
        row.extend([""] * (columns - len(row)))

    widths = [
        max(_MIN_DELIMITER_WIDTH, *(len(row[column]) for row in rows))
        for column in range(columns)
    ]

    def render(cells: list[str]) -> str:
        return "| " + " | ".join(cell.ljust(width) for cell, width in zip(cells, widths)) + " |"

    lines = [render(rows[0]), render(["-" * width for width in widths])]
    lines.extend(render(row) for row in rows[1:])
    return "\n".join(lines)


def _cell(node: mdast.Node) -> str:
    if isinstance(node, mdast.Parent):
        return _phrasing(node.children, _CELL).strip()
    return _escape_text(mdast.to_string(node), in_table=True).strip()


def _phrasing(nodes: list[mdast.Node], mode: str) -> str:
    pieces = [_inline(node, mode) for node in nodes]
    for index, node in enumerate(nodes):
        syntax = _EMPHASIS_SYNTAX.get(type(node))
        if syntax is None:
            continue
        marker, tag = syntax
        before = "".join(pieces[:index])[-1:]
        after = "".join(pieces[index + 1 :])[:1]
        if not _markers_flank(pieces[index], marker, before, after):
            content = _phrasing(node.children, mode)
            pieces[index] = _wrap(f"<{tag}>", content, f"</{tag}>")
    return "".join(pieces)


def _markers_flank(rendered: str, marker: str, before: str, after: str) -> bool:
    """Whether the markers in rendered can open and close emphasis.

    Follows the CommonMark flanking rules: an opening marker followed by
    punctuation needs whitespace or punctuation before it, and a closing
    marker preceded by punctuation needs whitespace or punctuation after it.
    """
    stripped = rendered.strip()
    if not stripped.startswith(marker) or len(stripped) <= 2 * len(marker):
        return True
    if rendered[:1].isspace():
        before = " "
    if rendered[-1:].isspace():
        after = " "
    first = stripped[len(marker)]
    last = stripped[-len(marker) - 1]
    if _is_punctuation(first) and not _is_space_or_punctuation(before):
        return False
    if _is_punctuation(last) and not _is_space_or_punctuation(after):
        return False
    return True


def _is_punctuation(char: str) -> bool:
    return unicodedata.category(char)[0] in "PS"


def _is_space_or_punctuation(char: str) -> bool:
    return not char or char.isspace() or _is_punctuation(char)


def _inline(node: mdast.Node, mode: str) -> str:
    in_table = mode == _CELL

    if isinstance(node, mdast.Text):
        value = node.value
        if mode != _FLOW:
            value = value.replace("\n", " ")
        return _escape_text(value, in_table=in_table)

    if isinstance(node, mdast.Break):
        if mode == _CELL:
            return "<br>"
        if mode == _LINE:
            return " "
        return "\\\n"

    if isinstance(node, mdast.InlineCode):
        return _inline_code(node.value, in_table)

    if isinstance(node, mdast.Emphasis):
        return _wrap("*", _phrasing(node.children, mode))

    if isinstance(node, mdast.Strong):
        return _wrap("**", _phrasing(node.children, mode))

    if isinstance(node, mdast.Delete):
        return _wrap("~~", _phrasing(node.children, mode))

    if isinstance(node, mdast.Link):
        return _link(node, mode)

    if isinstance(node, mdast.Parent):
        return _phrasing(node.children, mode)

    return _escape_text(mdast.to_string(node), in_table=in_table)


def _wrap(opening: str, content: str, closing: str | None = None) -> str:
    """Wrap content in emphasis markers, keeping outer whitespace outside."""
    stripped = content.strip()
    if not stripped:
        return content
    leading = content[: len(content) - len(content.lstrip())]
    trailing = content[len(content.rstrip()) :]
    return f"{leading}{opening}{stripped}{closing or opening}{trailing}"


def _inline_code(value: str, in_table: bool) -> str:
    value = value.replace("\n", " ")
    if in_table:
        value = value.replace("|", "\\|")
    longest = max((len(run) for run in _BACKTICK_RUN.findall(value)), default=0)
    fence = "`" * (longest + 1)
    needs_padding = value.startswith("`") or value.endswith("`") or (
        value.startswith(" ") and value.endswith(" ") and value.strip() != ""
    )
    pad = " " if needs_padding else ""
    return f"{fence}{pad}{value}{pad}{fence}"


def _link(node: mdast.Link, mode: str) -> str:
    text = _phrasing(node.children, mode)
    if node.title is None and mdast.to_string(node) == node.url and _AUTOLINK_URL.match(node.url):
        url = node.url.replace("|", "%7C") if mode == _CELL else node.url
        return f"<{url}>"

    destination = node.url
    if not destination or re.search(r"[\s<>]", destination) or not _balanced(destination):
        destination = "<" + destination.replace("<", "%3C").replace(">", "%3E") + ">"
    if mode == _CELL:
        destination = destination.replace("|", "%7C")

    if node.title:
        title = node.title.replace("\\", "\\\\").replace('"', '\\"')
        if mode == _CELL:
            title = title.replace("|", "\\|")
        return f'[{text}]({destination} "{title}")'
    return f"[{text}]({destination})"


def _balanced(url: str) -> bool:
    depth = 0
    for char in url:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


def _escape_text(value: str, in_table: bool = False) -> str:
    def replace(match: re.Match[str]) -> str:
        char = match.group(0)
        if char == "_":
            start, end = match.start(), match.end()
            before = value[start - 1] if start > 0 else ""
            after = value[end] if end < len(value) else ""
            if before.isalnum() and after.isalnum():
                return char
        return "\\" + char

    escaped = _TEXT_SPECIALS.sub(replace, value)
    if in_table:
        escaped = escaped.replace("|", "\\|")
    return escaped


def _escape_line_starts(text: str) -> str:
    lines = []
    for line in text.split("\n"):
        # Leading whitespace would indent the line into a code block
        if line[:1] in (" ", "\t"):
            line = f"&#x{ord(line[0]):x};" + line[1:]
        for pattern, replacement in _LINE_START_ESCAPES:
            line = pattern.sub(replacement, line, count=1)
        lines.append(line)
    return "\n".join(lines)


__all__ = ["to_markdown"]
