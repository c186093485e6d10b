"""Open pull request listing, via GraphQL (default) or REST."""

from __future__ import annotations

import logging
from typing import Any, Callable

from .config import PULLS_PER_PAGE
from .github_api import GitHubAPIError, GitHubClient
from .models import PullRequest, parse_timestamp

logger = logging.getLogger(__name__)


_OPEN_PULL_REQUESTS_QUERY = """
query OpenPullRequests($owner: String!, $repo: String!, $cursor: String) {
  repository(owner: $owner, name: $repo) {
    pullRequests(first: %d, after: $cursor, states: OPEN) {
      nodes {
        number
        title
        url
        createdAt
        author {
          login
        }
      }
      pageInfo {
        endCursor
        hasNextPage
      }
    }
  }
}
""" % PULLS_PER_PAGE


def _from_graphql_node(node: dict[str, Any]) -> PullRequest:
    author = node.get("author") or {}
    return PullRequest(
        number=int(node["number"]),
        title=node.get("title") or "",
        url=node.get("url") or "",
        author=author.get("login") or "",
        created_at=parse_timestamp(node.get("createdAt")),
    )


def _from_rest_item(item: dict[str, Any]) -> PullRequest:
    user = item.get("user") or {}
    return PullRequest(
        number=int(item["number"]),
        title=item.get("title") or "",
        url=item.get("html_url") or "",
        author=user.get("login") or "",
        created_at=parse_timestamp(item.get("created_at")),
    )


def fetch_open_pull_requests(client: GitHubClient, owner: str, repo: str) -> list[PullRequest]:
    """Collect every open PR of ``owner/repo`` by following GraphQL cursors."""
    pulls: list[PullRequest] = []
    cursor: str | None = None

    while True:
        data = client.graphql(
            _OPEN_PULL_REQUESTS_QUERY,
            {"owner": owner, "repo": repo, "cursor": cursor},
        )
        repository = data.get("repository")
        if not repository:
            raise GitHubAPIError(f"Repository {owner}/{repo} not found")
        try:
            connection = repository["pullRequests"]
            nodes = connection["nodes"] or []
            page_info = connection["pageInfo"]
        except (KeyError, TypeError) as e:
            raise GitHubAPIError(f"Unexpected GraphQL shape for pull requests: {e}") from e

        for node in nodes:
            if node:
                pulls.append(_from_graphql_node(node))

        if not page_info.get("hasNextPage"):
            break
        cursor = page_info.get("endCursor")
        if not cursor:
            raise GitHubAPIError(
                f"GraphQL reported more pull requests for {owner}/{repo} but returned no endCursor"
            )

    logger.info("Fetched %d open PRs from %s/%s", len(pulls), owner, repo)
    return pulls


def fetch_open_pull_requests_rest(client: GitHubClient, owner: str, repo: str) -> list[PullRequest]:
    """Same as ``fetch_open_pull_requests`` using page-numbered REST listing."""
    items = client.get_paginated(
        f"/repos/{owner}/{repo}/pulls",
        params={"state": "open", "per_page": PULLS_PER_PAGE},
    )
    pulls = [_from_rest_item(item) for item in items]
    logger.info("Fetched %d open PRs from %s/%s", len(pulls), owner, repo)
    return pulls


PULL_REQUEST_SOURCES: dict[str, Callable[[GitHubClient, str, str], list[PullRequest]]] = {
    "graphql": fetch_open_pull_requests,
    "rest": fetch_open_pull_requests_rest,
}
