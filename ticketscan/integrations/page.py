"""Page context handed to adapters on every scan.

A scan receives the page URL and its document. Adapters only read them:
the URL's host, path and query parameters, and the id attribute of the
document body.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable
from urllib.parse import parse_qs, urlsplit

from bs4 import BeautifulSoup

_DEFAULT_PORTS = {"http": 80, "https": 443}


@runtime_checkable
class PageDocument(Protocol):
    """Read-only view of the page's document."""

    @property
    def body_id(self) -> str | None:
        """The id attribute of the <body> element, if any."""
        ...


@dataclass(frozen=True)
class StaticPageDocument:
    """Document whose body id is already known."""

    body_id: str | None = None


class HtmlPageDocument:
    """Document backed by the page's HTML source."""

    def __init__(self, html: str) -> None:
        self._soup = BeautifulSoup(html, "html.parser")

    @property
    def body_id(self) -> str | None:
        body = self._soup.body
        if body is None:
            return None
        value = body.get("id")
        # bs4 returns a list for multi-valued attributes; id is single-valued
        if isinstance(value, list):
            return " ".join(value)
        return value


@dataclass(frozen=True)
class PageUrl:
    """A parsed page URL.

    Attributes:
        href: The URL as given
        scheme: Lowercased scheme ("https")
        host: Lowercased host name, with the port when it is not the default;
            IPv6 literals keep their brackets
        path: URL path, "/" when empty
        query: Query parameters; blank values are kept
    """

    href: str
    scheme: str
    host: str
    path: str
    query: dict[str, list[str]] = field(default_factory=dict, compare=False)

    @classmethod
    def parse(cls, href: str) -> PageUrl:
        """Parse an absolute URL.

        Raises:
            ValueError: If the URL has no scheme or host
        """
        parts = urlsplit(href.strip())
        if not parts.scheme or not parts.hostname:
            raise ValueError(f"Not an absolute URL: {href!r}")

        scheme = parts.scheme.lower()
        host = parts.hostname
        if ":" in host:
            host = f"[{host}]"
        if parts.port is not None and parts.port != _DEFAULT_PORTS.get(scheme):
            host = f"{host}:{parts.port}"

        return cls(
            href=href,
            scheme=scheme,
            host=host,
            path=parts.path or "/",
            query=parse_qs(parts.query, keep_blank_values=True),
        )

    @property
    def origin(self) -> str:
        """Scheme and host, e.g. "https://acme.atlassian.net"."""
        return f"{self.scheme}://{self.host}"

    def has_param(self, name: str) -> bool:
        return name in self.query

    def get_param(self, name: str) -> str | None:
        """Return the first value of a query parameter, or None if absent."""
        values = self.query.get(name)
        return values[0] if values else None


@dataclass(frozen=True)
class PageContext:
    """The URL and document of the page being scanned."""

    url: PageUrl
    document: PageDocument

    @classmethod
    def from_html(cls, href: str, html: str) -> PageContext:
        return cls(url=PageUrl.parse(href), document=HtmlPageDocument(html))

    @classmethod
    def from_url(cls, href: str, body_id: str | None = None) -> PageContext:
        return cls(url=PageUrl.parse(href), document=StaticPageDocument(body_id=body_id))


__all__ = [
    "HtmlPageDocument",
    "PageContext",
    "PageDocument",
    "PageUrl",
    "StaticPageDocument",
]
