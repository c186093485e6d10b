"""Terminal report and JSON export."""

from __future__ import annotations

import json
from typing import Iterable, Optional

from rich.console import Console
from rich.markup import escape

from .models import PullRequest, SyncOutcome, SyncResult

console = Console(highlight=False, soft_wrap=True)


def format_header(orgs: Iterable[str]) -> str:
    return (
        f"PRs created by users outside of [{' '.join(orgs)}]:\n"
        "-------------------------------------------"
    )


def format_pull_request(pr: PullRequest) -> str:
    return f"\nPR #{pr.number} by {pr.author}\nTitle: {pr.title}\nLink: {pr.url}"


def format_sync_result(result: SyncResult, project_number: int) -> Optional[str]:
    if result.outcome is SyncOutcome.ADDED:
        return f"PR #{result.number} added to project {project_number}"
    if result.outcome is SyncOutcome.PRESENT:
        return f"PR #{result.number} already in project {project_number}"
    return None


def print_header(orgs: Iterable[str], out: Console = console) -> None:
    out.print(format_header(orgs), markup=False, soft_wrap=True)


def print_pull_request(pr: PullRequest, out: Console = console) -> None:
    out.print(format_pull_request(pr), markup=False, soft_wrap=True)


def print_sync_result(result: SyncResult, project_number: int, out: Console = console) -> None:
    line = format_sync_result(result, project_number)
    if line is None:
        out.print(f"PR #{result.number} could not be synced to project {project_number}",
                  style="red", markup=False, soft_wrap=True)
        return
    style = "green" if result.outcome is SyncOutcome.ADDED else "dim"
    out.print(line, style=style, markup=False, soft_wrap=True)


def print_summary(reported: int, total: int, out: Console = console) -> None:
    out.print(f"\n{reported} of {total} open PRs are from external contributors.", markup=False, soft_wrap=True)


def export_results_json(
    pulls: list[PullRequest],
    filepath: str,
    sync_results: Optional[dict[int, SyncResult]] = None,
    out: Console = console,
) -> None:
    """Write the reported PRs (and sync outcomes, when any) to a JSON file."""
    sync_results = sync_results or {}
    rows = []
    for pr in pulls:
        row = pr.to_dict()
        result = sync_results.get(pr.number)
        if result is not None:
            row["project_sync"] = result.outcome.value
            if result.reason:
                row["project_sync_error"] = result.reason
        rows.append(row)
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(rows, f, indent=2)
    out.print(f"\nResults exported to [cyan]{escape(filepath)}[/cyan]", soft_wrap=True)
