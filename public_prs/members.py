"""Organization membership lookup.

Uses the REST API instead of GraphQL because ``membersWithRole`` does not
return the complete member list.
"""

from __future__ import annotations

import logging
from typing import Iterable

from .config import MEMBERS_PER_PAGE
from .github_api import GitHubAPIError, GitHubClient

logger = logging.getLogger(__name__)


def fetch_org_members(client: GitHubClient, org: str, *, page_delay: float = 0.0) -> set[str]:
    """Return the logins of every member of ``org``."""
    payload = client.get_paginated(
        f"/orgs/{org}/members",
        params={"per_page": MEMBERS_PER_PAGE},
        page_delay=page_delay,
    )
    members: set[str] = set()
    for member in payload:
        login = member.get("login") if isinstance(member, dict) else None
        if not login:
            raise GitHubAPIError(f"Unexpected member entry for org {org}: {member!r}")
        members.add(login)
    return members


def resolve_members(
    client: GitHubClient, orgs: Iterable[str], *, page_delay: float = 0.0
) -> set[str]:
    """Union of the members of all ``orgs``. Any failure aborts the lookup."""
    members: set[str] = set()
    for org in orgs:
        try:
            members |= fetch_org_members(client, org, page_delay=page_delay)
        except GitHubAPIError as e:
            raise GitHubAPIError(f"Error fetching members from {org} organization: {e}") from e
        logger.info("Fetched members from org %s. Total members list is now: %d", org, len(members))
    return members
