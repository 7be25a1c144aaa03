"""Builders for Jira issue records, ADF trees and mocked HTTP responses."""

from typing import Any
from unittest.mock import MagicMock

import httpx


def make_issue_record(
    key: str = "ACME-42",
    issue_type: str = "Bug",
    summary: str = "Login fails",
    description: Any = None,
) -> dict[str, Any]:
    """Build a Jira REST v3 issue record with the fields the adapter reads."""
    return {
        "id": "10042",
        "key": key,
        "self": f"https://acme.atlassian.net/rest/api/3/issue/{key}",
        "fields": {
            "issuetype": {"id": "10001", "name": issue_type},
            "summary": summary,
            "description": description,
        },
    }


def make_response(json_data: Any = None, status_code: int = 200) -> MagicMock:
    """Build a mock httpx.Response whose json() returns json_data."""
    response = MagicMock(spec=httpx.Response)
    response.status_code = status_code
    response.json.return_value = json_data
    response.text = ""
    return response


def text(value: str, *marks: str | dict[str, Any]) -> dict[str, Any]:
    """ADF text node; marks given by type name or as full mark dicts."""
    node: dict[str, Any] = {"type": "text", "text": value}
    if marks:
        node["marks"] = [{"type": m} if isinstance(m, str) else m for m in marks]
    return node


def paragraph(*content: dict[str, Any]) -> dict[str, Any]:
    return {"type": "paragraph", "content": list(content)}


def adf_doc(*content: dict[str, Any]) -> dict[str, Any]:
    """ADF root document node."""
    return {"type": "doc", "version": 1, "content": list(content)}
