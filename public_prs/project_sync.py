"""Linking pull requests to a GitHub Projects (v2) board."""

from __future__ import annotations

import logging

from .config import PROJECT_ITEMS_LIMIT
from .github_api import GitHubAPIError, GitHubClient
from .models import SyncOutcome, SyncResult

logger = logging.getLogger(__name__)


_PROJECT_ID_QUERY = """
query ProjectId($org: String!, $projectNumber: Int!) {
  organization(login: $org) {
    projectV2(number: $projectNumber) {
      id
    }
  }
}
"""

_PULL_REQUEST_ID_QUERY = """
query PullRequestId($owner: String!, $repo: String!, $prNumber: Int!) {
  repository(owner: $owner, name: $repo) {
    pullRequest(number: $prNumber) {
      id
    }
  }
}
"""

_PROJECT_ITEMS_QUERY = """
query ProjectItems($projectID: ID!) {
  node(id: $projectID) {
    ... on ProjectV2 {
      items(first: %d) {
        nodes {
          id
          content {
            ... on PullRequest {
              id
            }
          }
        }
      }
    }
  }
}
""" % PROJECT_ITEMS_LIMIT

_ADD_ITEM_MUTATION = """
mutation AddProjectItem($projectID: ID!, $prID: ID!) {
  addProjectV2ItemById(input: {projectId: $projectID, contentId: $prID}) {
    item {
      id
    }
  }
}
"""


def resolve_project_id(client: GitHubClient, org: str, project_number: int) -> str:
    """Return the global node id of project ``project_number`` owned by ``org``."""
    data = client.graphql(_PROJECT_ID_QUERY, {"org": org, "projectNumber": project_number})
    project = ((data.get("organization") or {}).get("projectV2")) or {}
    project_id = project.get("id")
    if not project_id:
        raise GitHubAPIError(f"Project {project_number} not found for organization {org}")
    return project_id


class ProjectSyncer:
    """Adds pull requests of one repository to one project board.

    Each step is its own round-trip: resolve the PR node id, look for an
    existing item with that content, then add it when absent.
    """

    def __init__(
        self,
        client: GitHubClient,
        owner: str,
        repo: str,
        project_id: str,
        project_number: int,
    ) -> None:
        self.client = client
        self.owner = owner
        self.repo = repo
        self.project_id = project_id
        self.project_number = project_number

    @classmethod
    def for_project(
        cls, client: GitHubClient, owner: str, repo: str, *, project_owner: str, project_number: int
    ) -> "ProjectSyncer":
        project_id = resolve_project_id(client, project_owner, project_number)
        logger.info("Resolved project %s/%d to %s", project_owner, project_number, project_id)
        return cls(client, owner, repo, project_id, project_number)

    def pull_request_id(self, number: int) -> str:
        data = self.client.graphql(
            _PULL_REQUEST_ID_QUERY,
            {"owner": self.owner, "repo": self.repo, "prNumber": number},
        )
        pull = ((data.get("repository") or {}).get("pullRequest")) or {}
        pr_id = pull.get("id")
        if not pr_id:
            raise GitHubAPIError(f"PR #{number} not found in {self.owner}/{self.repo}")
        return pr_id

    def is_linked(self, content_id: str) -> bool:
        # Only the first PROJECT_ITEMS_LIMIT items are inspected.
        data = self.client.graphql(_PROJECT_ITEMS_QUERY, {"projectID": self.project_id})
        node = data.get("node") or {}
        items = (node.get("items") or {}).get("nodes") or []
        for item in items:
            content = (item or {}).get("content") or {}
            if content.get("id") == content_id:
                return True
        return False

    def link(self, content_id: str) -> str:
        data = self.client.graphql(
            _ADD_ITEM_MUTATION, {"projectID": self.project_id, "prID": content_id}
        )
        item = ((data.get("addProjectV2ItemById") or {}).get("item")) or {}
        item_id = item.get("id")
        if not item_id:
            raise GitHubAPIError(f"Project did not return an item for content {content_id}")
        return item_id

    def sync(self, number: int) -> SyncResult:
        """Ensure PR ``number`` is on the board. Never raises."""
        try:
            pr_id = self.pull_request_id(number)
        except GitHubAPIError as e:
            return self._failed(number, f"error fetching global ID for PR #{number}: {e}")

        try:
            present = self.is_linked(pr_id)
        except GitHubAPIError as e:
            return self._failed(number, f"error checking PR in project: {e}")
        if present:
            return SyncResult(number, SyncOutcome.PRESENT)

        try:
            self.link(pr_id)
        except GitHubAPIError as e:
            return self._failed(number, f"error adding PR to project: {e}")
        return SyncResult(number, SyncOutcome.ADDED)

    def _failed(self, number: int, reason: str) -> SyncResult:
        logger.warning("Error adding PR #%d to project: %s", number, reason)
        return SyncResult(number, SyncOutcome.ERROR, reason=reason)
