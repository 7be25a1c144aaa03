"""Tests for ticketscan.integrations.routes module."""

import pytest

from ticketscan.integrations.routes import PathTemplate, match_first


class TestPathTemplate:
    """Tests for PathTemplate.match."""

    def test_single_param(self):
        """A :name segment captures one path segment."""
        assert PathTemplate("/browse/:id").match("/browse/PROJ-1") == {"id": "PROJ-1"}

    def test_multiple_params(self):
        """Every :name segment is captured."""
        template = PathTemplate("/projects/:project/issues/:id")

        assert template.match("/projects/ACME/issues/ACME-5") == {
            "project": "ACME",
            "id": "ACME-5",
        }

    def test_param_names(self):
        """param_names lists the captured names in order."""
        template = PathTemplate("/projects/:project/issues/:id")

        assert template.param_names == ("project", "id")

    def test_trailing_slash_tolerated(self):
        """A single trailing slash still matches."""
        assert PathTemplate("/browse/:id").match("/browse/PROJ-1/") == {"id": "PROJ-1"}

    @pytest.mark.parametrize(
        "path",
        [
            "/browse/",
            "/browse",
            "/browse/PROJ-1/comments",
            "/jira/browse/PROJ-1",
            "/BROWSE/PROJ-1",
            "",
        ],
    )
    def test_non_matching_paths(self, path):
        """The whole path must match; params never span segments."""
        assert PathTemplate("/browse/:id").match(path) is None

    def test_values_are_url_decoded(self):
        """Captured values are percent-decoded."""
        assert PathTemplate("/browse/:id").match("/browse/A%20B") == {"id": "A B"}

    def test_literal_parts_are_escaped(self):
        """Regex metacharacters in the template are matched literally."""
        template = PathTemplate("/secure/RapidBoard.jspa")

        assert template.match("/secure/RapidBoard.jspa") == {}
        assert template.match("/secure/RapidBoardXjspa") is None

    def test_repr(self):
        assert repr(PathTemplate("/browse/:id")) == "PathTemplate('/browse/:id')"


class TestMatchFirst:
    """Tests for match_first."""

    def test_returns_first_matching_template(self):
        """Templates are tried in order."""
        specific = PathTemplate("/browse/:id")
        generic = PathTemplate("/:section/:id")

        template, params = match_first([specific, generic], "/browse/X-1")

        assert template is specific
        assert params == {"id": "X-1"}

    def test_falls_through_to_later_template(self):
        first = PathTemplate("/browse/:id")
        second = PathTemplate("/projects/:project/issues/:id")

        template, params = match_first([first, second], "/projects/P/issues/P-2")

        assert template is second
        assert params["id"] == "P-2"

    def test_no_match_returns_none(self):
        assert match_first([PathTemplate("/browse/:id")], "/dashboard") is None

    def test_empty_templates(self):
        assert match_first([], "/browse/X-1") is None
