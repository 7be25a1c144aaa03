"""Atlassian Document Format (ADF) support.

This package provides:
- nodes: Typed ADF node model and parser
- mdast: Abstract Markdown syntax tree
- converter: ADF to mdast conversion and the ``adf_to_markdown`` entry point
- markdown: mdast to GitHub-flavored Markdown serializer
"""

from ticketscan.integrations.adf.converter import adf_to_markdown, from_adf
from ticketscan.integrations.adf.markdown import to_markdown
from ticketscan.integrations.adf.nodes import parse_document

__all__ = [
    "adf_to_markdown",
    "from_adf",
    "parse_document",
    "to_markdown",
]
