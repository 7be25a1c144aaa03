"""Test helper utilities for ticketscan."""

from tests.helpers.records import adf_doc, make_issue_record, make_response, paragraph, text

__all__ = ["adf_doc", "make_issue_record", "make_response", "paragraph", "text"]
