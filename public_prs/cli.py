#!/usr/bin/env python3
"""Public PR finder CLI - list open PRs from authors outside the given orgs."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from rich.console import Console
from rich.logging import RichHandler

from . import display
from .config import (
    DEFAULT_ORGS,
    DEFAULT_OWNER,
    DEFAULT_PROJECT_NUMBER,
    DEFAULT_REPO,
    REQUEST_TIMEOUT_SECONDS,
    RunConfig,
    parse_csv,
)
from .filters import BotMatch, BotPolicy, is_external, sort_pull_requests
from .github_api import GitHubAPIError, GitHubClient
from .members import resolve_members
from .models import SyncResult
from .project_sync import ProjectSyncer
from .pulls import PULL_REQUEST_SOURCES

logger = logging.getLogger(__name__)

err_console = Console(stderr=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "List open pull requests on a repository whose authors are not members"
            " of the given organizations, optionally adding them to a project board."
        )
    )
    parser.add_argument("--owner", default=DEFAULT_OWNER, help="Repository owner")
    parser.add_argument("--repo", default=DEFAULT_REPO, help="Repository name")
    parser.add_argument(
        "--orgs", default=DEFAULT_ORGS,
        help=f"Comma-separated list of organizations (default: {DEFAULT_ORGS})",
    )
    parser.add_argument(
        "--includebots", action="store_true", default=False,
        help="Include PRs authored by bots",
    )
    parser.add_argument(
        "--botstoexclude", default="",
        help="Comma-separated list of bot logins to exclude",
    )
    parser.add_argument(
        "--botmatch", choices=[m.value for m in BotMatch], default=BotMatch.ANY.value,
        help="Bot detection: '[bot]' marker, --botstoexclude list, or any (default: any)",
    )
    parser.add_argument(
        "--addtoproject", action="store_true", default=False,
        help="Add matching PRs to the given project",
    )
    parser.add_argument(
        "--project", type=int, default=DEFAULT_PROJECT_NUMBER,
        help=f"GitHub project number (default: {DEFAULT_PROJECT_NUMBER})",
    )
    parser.add_argument(
        "--project-owner", default=None,
        help="Organization owning the project (default: --owner)",
    )
    parser.add_argument(
        "--source", choices=sorted(PULL_REQUEST_SOURCES), default="graphql",
        help="API used to list pull requests (default: graphql)",
    )
    parser.add_argument(
        "--order", choices=["asc", "desc"], default="asc",
        help="Sort by creation time, oldest first (asc) or newest first (desc)",
    )
    parser.add_argument(
        "--page-delay", type=float, default=0.0,
        help="Seconds to wait between organization member pages",
    )
    parser.add_argument(
        "--timeout", type=float, default=REQUEST_TIMEOUT_SECONDS,
        help=f"Per-request timeout in seconds (default: {REQUEST_TIMEOUT_SECONDS:g})",
    )
    parser.add_argument("--json", default=None, help="Also write reported PRs to a JSON file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    return parser


def config_from_args(args: argparse.Namespace) -> RunConfig:
    return RunConfig(
        owner=args.owner,
        repo=args.repo,
        orgs=parse_csv(args.orgs),
        include_bots=args.includebots,
        bots_to_exclude=parse_csv(args.botstoexclude),
        bot_match=args.botmatch,
        add_to_project=args.addtoproject,
        project_number=args.project,
        project_owner=args.project_owner,
        source=args.source,
        descending=args.order == "desc",
        page_delay=args.page_delay,
        timeout=args.timeout,
        json_out=args.json,
    )


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def run(config: RunConfig, client: GitHubClient, out: Console = display.console) -> int:
    """Resolve members, fetch PRs, and report the external ones."""
    syncer: Optional[ProjectSyncer] = None
    if config.add_to_project:
        syncer = ProjectSyncer.for_project(
            client, config.owner, config.repo,
            project_owner=config.board_owner,
            project_number=config.project_number,
        )

    members = resolve_members(client, config.orgs, page_delay=config.page_delay)
    pulls = PULL_REQUEST_SOURCES[config.source](client, config.owner, config.repo)
    pulls = sort_pull_requests(pulls, descending=config.descending)

    policy = BotPolicy(
        include_bots=config.include_bots,
        match=BotMatch(config.bot_match),
        excluded_logins=frozenset(config.bots_to_exclude),
    )

    display.print_header(config.orgs, out)
    reported = []
    sync_results: dict[int, SyncResult] = {}
    for pr in pulls:
        if not is_external(pr, members, policy):
            continue
        reported.append(pr)
        display.print_pull_request(pr, out)
        if syncer is not None:
            result = syncer.sync(pr.number)
            sync_results[pr.number] = result
            display.print_sync_result(result, config.project_number, out)

    display.print_summary(len(reported), len(pulls), out)
    if config.json_out:
        display.export_results_json(reported, config.json_out, sync_results, out)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point."""
    try:
        return _main_inner(argv)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Cancelled.[/yellow]")
        return 130


def _main_inner(argv: Optional[Sequence[str]]) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    config = config_from_args(args)

    try:
        client = GitHubClient.from_env(timeout=config.timeout)
        return run(config, client)
    except (GitHubAPIError, ValueError, OSError) as error:
        err_console.print(f"Error: {error}", style="red", markup=False)
        return 1


if __name__ == "__main__":
    sys.exit(main())
