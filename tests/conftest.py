from __future__ import annotations

import io
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from public_prs.github_api import GitHubAPIError


class FakeGitHub:
    """In-memory stand-in for GitHubClient covering the calls the tool makes."""

    def __init__(self, members=None, pulls=None, project_items=None, fail_on=()):
        self.members = members or {}
        self.pulls = pulls or []
        self.project_items = list(project_items or [])
        self.fail_on = set(fail_on)
        self.calls: list[str] = []

    def get_paginated(self, endpoint, params=None, page_delay=0.0):
        self.calls.append(endpoint)
        if "members" in self.fail_on:
            raise GitHubAPIError("Received non-OK response 404")
        org = endpoint.split("/")[2]
        return [{"login": login} for login in self.members.get(org, [])]

    def graphql(self, query, variables=None):
        operation = query.split("(")[0].split()[-1]
        self.calls.append(operation)
        if operation in self.fail_on:
            raise GitHubAPIError(f"{operation} failed")
        variables = variables or {}

        if operation == "OpenPullRequests":
            return {
                "repository": {
                    "pullRequests": {
                        "nodes": self.pulls,
                        "pageInfo": {"endCursor": None, "hasNextPage": False},
                    }
                }
            }
        if operation == "ProjectId":
            return {"organization": {"projectV2": {"id": "PVT_1"}}}
        if operation == "PullRequestId":
            return {"repository": {"pullRequest": {"id": f"PR_{variables['prNumber']}"}}}
        if operation == "ProjectItems":
            nodes = [
                {"id": f"ITEM_{i}", "content": {"id": content_id}}
                for i, content_id in enumerate(self.project_items)
            ]
            return {"node": {"items": {"nodes": nodes}}}
        if operation == "AddProjectItem":
            self.project_items.append(variables["prID"])
            return {"addProjectV2ItemById": {"item": {"id": f"ITEM_{len(self.project_items)}"}}}
        raise AssertionError(f"unexpected operation {operation}")


def pr_node(number, login, created_at="2024-01-01T00:00:00Z", title=None):
    return {
        "number": number,
        "title": title or f"PR {number}",
        "url": f"https://github.com/acme/widgets/pull/{number}",
        "createdAt": created_at,
        "author": {"login": login} if login is not None else None,
    }


def json_response(payload, status=200):
    response = MagicMock()
    response.status_code = status
    response.json.return_value = payload
    response.text = str(payload)
    response.url = "https://api.github.com/test"
    return response


@pytest.fixture
def fake_github():
    return FakeGitHub


@pytest.fixture
def node():
    return pr_node


@pytest.fixture
def response():
    return json_response


@pytest.fixture
def capture_console():
    buffer = io.StringIO()
    return Console(file=buffer, width=200, highlight=False), buffer
