"""ticketscan - Detect issue-tracker tickets on web pages.

This package inspects a page URL and document, recognizes the ticket the
page is showing, fetches it from the tracker's REST API and converts its
rich-text description to GitHub-flavored Markdown.
"""

__version__ = "0.1.0"
JIRA_API_VERSION = "3"

__all__ = [
    "__version__",
    "JIRA_API_VERSION",
]
