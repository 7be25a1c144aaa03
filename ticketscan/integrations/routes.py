"""Path templates for matching URL paths against known routes.

A template such as ``/projects/:project/issues/:id`` compiles to a regex
where each ``:name`` segment captures exactly one non-empty path segment.
The whole path must match; a single trailing slash is tolerated.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from urllib.parse import unquote

_PARAM_PATTERN = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")


class PathTemplate:
    """A compiled route template.

    Example:
        >>> PathTemplate("/browse/:id").match("/browse/PROJ-1")
        {'id': 'PROJ-1'}
    """

    def __init__(self, template: str) -> None:
        self.template = template
        self.param_names: tuple[str, ...] = tuple(_PARAM_PATTERN.findall(template))
        self._regex = re.compile(self._compile(template))

    @staticmethod
    def _compile(template: str) -> str:
        pattern = []
        position = 0
        for m in _PARAM_PATTERN.finditer(template):
            pattern.append(re.escape(template[position : m.start()]))
            pattern.append(f"(?P<{m.group(1)}>[^/]+)")
            position = m.end()
        pattern.append(re.escape(template[position:]))
        return "^" + "".join(pattern) + "/?$"

    def match(self, path: str) -> dict[str, str] | None:
        """Match a path and return the captured parameters.

        Returns:
            Mapping of parameter name to URL-decoded value, or None if the
            path does not match
        """
        m = self._regex.match(path)
        if m is None:
            return None
        return {name: unquote(value) for name, value in m.groupdict().items()}

    def __repr__(self) -> str:
        return f"PathTemplate({self.template!r})"


def match_first(
    templates: Iterable[PathTemplate], path: str
) -> tuple[PathTemplate, dict[str, str]] | None:
    """Try templates in order and return the first one that matches.

    Returns:
        The matching template and its captured parameters, or None
    """
    for template in templates:
        params = template.match(path)
        if params is not None:
            return template, params
    return None


__all__ = ["PathTemplate", "match_first"]
