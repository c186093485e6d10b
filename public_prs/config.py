"""Configuration constants and run settings for the public PR finder."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

# GitHub endpoints
API_BASE_URL = "https://api.github.com"
GRAPHQL_URL = f"{API_BASE_URL}/graphql"

TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GH_TOKEN")

# Paging and limits
MEMBERS_PER_PAGE = 100
PULLS_PER_PAGE = 100
PROJECT_ITEMS_LIMIT = 100  # single page, project items are never paginated

REQUEST_TIMEOUT_SECONDS = 15.0

# Logins of GitHub App accounts carry this suffix, e.g. "dependabot[bot]"
BOT_MARKER = "[bot]"

# ── CLI defaults ─────────────────────────────────────────────
DEFAULT_OWNER = "rancher"
DEFAULT_REPO = "rancher"
DEFAULT_ORGS = "rancher,SUSE"
DEFAULT_PROJECT_NUMBER = 79


def parse_csv(raw: str | None) -> tuple[str, ...]:
    """Split a comma-separated flag value, dropping blanks."""
    if not raw:
        return ()
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def token_from_env() -> str | None:
    for name in TOKEN_ENV_VARS:
        value = os.environ.get(name)
        if value:
            return value
    return None


@dataclass(frozen=True)
class RunConfig:
    owner: str = DEFAULT_OWNER
    repo: str = DEFAULT_REPO
    orgs: tuple[str, ...] = field(default_factory=lambda: parse_csv(DEFAULT_ORGS))
    include_bots: bool = False
    bots_to_exclude: tuple[str, ...] = ()
    bot_match: str = "any"
    add_to_project: bool = False
    project_number: int = DEFAULT_PROJECT_NUMBER
    project_owner: str | None = None
    source: str = "graphql"
    descending: bool = False
    page_delay: float = 0.0
    timeout: float = REQUEST_TIMEOUT_SECONDS
    json_out: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def board_owner(self) -> str:
        return self.project_owner or self.owner
