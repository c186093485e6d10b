"""Ordering and author-based filtering of pull requests."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, Iterable

from .config import BOT_MARKER
from .models import PullRequest


class BotMatch(str, Enum):
    """How a login is recognized as a bot."""

    MARKER = "marker"  # GitHub App accounts, e.g. "renovate[bot]"
    LIST = "list"      # explicitly named automation accounts
    ANY = "any"


@dataclass(frozen=True)
class BotPolicy:
    include_bots: bool = False
    match: BotMatch = BotMatch.ANY
    excluded_logins: frozenset[str] = frozenset()

    def is_bot(self, login: str) -> bool:
        by_marker = BOT_MARKER in login
        by_list = login in self.excluded_logins
        if self.match is BotMatch.MARKER:
            return by_marker
        if self.match is BotMatch.LIST:
            return by_list
        return by_marker or by_list

    def excludes(self, login: str) -> bool:
        return not self.include_bots and self.is_bot(login)


def sort_pull_requests(pulls: Iterable[PullRequest], *, descending: bool = False) -> list[PullRequest]:
    """Sort by creation time; the PR number breaks ties so the order is total."""
    return sorted(pulls, key=lambda pr: (pr.created_at, pr.number), reverse=descending)


def is_external(pr: PullRequest, members: AbstractSet[str], policy: BotPolicy) -> bool:
    return pr.author not in members and not policy.excludes(pr.author)


def filter_external(
    pulls: Iterable[PullRequest], members: AbstractSet[str], policy: BotPolicy
) -> list[PullRequest]:
    return [pr for pr in pulls if is_external(pr, members, policy)]
