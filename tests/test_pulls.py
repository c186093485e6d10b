from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from public_prs.github_api import GitHubAPIError
from public_prs.models import MalformedTimestamp, parse_timestamp
from public_prs.pulls import fetch_open_pull_requests, fetch_open_pull_requests_rest


def _page(nodes, cursor=None, has_next=False):
    return {
        "repository": {
            "pullRequests": {
                "nodes": nodes,
                "pageInfo": {"endCursor": cursor, "hasNextPage": has_next},
            }
        }
    }


class TestParseTimestamp:
    def test_utc_suffix(self):
        assert parse_timestamp("2024-03-05T10:20:30Z") == datetime(2024, 3, 5, 10, 20, 30, tzinfo=timezone.utc)

    def test_offset(self):
        parsed = parse_timestamp("2024-03-05T12:20:30+02:00")
        assert parsed == datetime(2024, 3, 5, 10, 20, 30, tzinfo=timezone.utc)

    @pytest.mark.parametrize("raw", ["", None, "yesterday", "2024-03-05", "2024-03-05T10:20:30"])
    def test_malformed(self, raw):
        with pytest.raises(MalformedTimestamp):
            parse_timestamp(raw)


class TestGraphQLFetcher:
    def test_follows_cursor(self, node):
        gh = MagicMock()
        gh.graphql.side_effect = [
            _page([node(1, "alice"), node(2, "carol")], cursor="c1", has_next=True),
            _page([node(3, "dave")]),
        ]
        pulls = fetch_open_pull_requests(gh, "acme", "widgets")

        assert [pr.number for pr in pulls] == [1, 2, 3]
        cursors = [c.args[1]["cursor"] for c in gh.graphql.call_args_list]
        assert cursors == [None, "c1"]
        assert pulls[0].url == "https://github.com/acme/widgets/pull/1"

    def test_next_page_without_cursor(self, node):
        gh = MagicMock()
        gh.graphql.return_value = _page([node(1, "alice")], cursor=None, has_next=True)
        with pytest.raises(GitHubAPIError, match="endCursor"):
            fetch_open_pull_requests(gh, "acme", "widgets")
        assert gh.graphql.call_count == 1

    def test_deleted_author(self, node):
        gh = MagicMock()
        gh.graphql.return_value = _page([node(7, None)])
        assert fetch_open_pull_requests(gh, "acme", "widgets")[0].author == ""

    def test_missing_repository(self):
        gh = MagicMock()
        gh.graphql.return_value = {"repository": None}
        with pytest.raises(GitHubAPIError, match="acme/widgets not found"):
            fetch_open_pull_requests(gh, "acme", "widgets")

    def test_malformed_timestamp_is_fatal(self, node):
        gh = MagicMock()
        gh.graphql.return_value = _page([node(1, "alice", created_at="not-a-date")])
        with pytest.raises(MalformedTimestamp):
            fetch_open_pull_requests(gh, "acme", "widgets")


class TestRestFetcher:
    def test_maps_fields(self):
        gh = MagicMock()
        gh.get_paginated.return_value = [
            {
                "number": 4,
                "title": "Fix typo",
                "html_url": "https://github.com/acme/widgets/pull/4",
                "user": {"login": "erin"},
                "created_at": "2024-02-01T00:00:00Z",
            },
            {"number": 5, "title": "Ghost", "html_url": "", "user": None, "created_at": "2024-02-02T00:00:00Z"},
        ]
        pulls = fetch_open_pull_requests_rest(gh, "acme", "widgets")

        assert [(pr.number, pr.author) for pr in pulls] == [(4, "erin"), (5, "")]
        endpoint = gh.get_paginated.call_args.args[0]
        assert endpoint == "/repos/acme/widgets/pulls"
        assert gh.get_paginated.call_args.kwargs["params"]["state"] == "open"
