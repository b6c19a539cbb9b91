"""requests command: pull requests where your review is requested, across repositories."""

from __future__ import annotations

import click
from github import GithubException
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ghr_cli.repo import require_token
from ghr_core.gh.pull_request import get_github, search_review_requests

console = Console()


@click.command("requests")
@click.option(
    "--state",
    type=click.Choice(["open", "closed", "merged", "any"]),
    default="open",
    show_default=True,
    help="PR state; 'any' removes the state restriction.",
)
@click.option("--repo", "repo_filter", default=None, help="Restrict to owner/repo, or owner/* for an organisation.")
@click.option("--reviewer", default="@me", show_default=True, help="Requested reviewer (user or org/team).")
@click.option("--limit", default=100, show_default=True, help="Maximum number of results.")
@click.pass_context
def requests_cmd(ctx, state: str, repo_filter: str | None, reviewer: str, limit: int):
    """List pull requests awaiting a review.

    Searches every repository the token can see, unlike `prs` which lists
    one repository.
    """
    token = require_token(ctx.obj["config"])

    try:
        results = search_review_requests(get_github(token), reviewer=reviewer, state=state, repo=repo_filter, limit=limit)
    except GithubException as e:
        raise click.ClickException(f"Search failed: {e}")

    if not results:
        console.print("[yellow]No review requests found.[/yellow]")
        return

    table = Table(title=f"Review requests for {reviewer}", show_header=True, header_style="bold cyan")
    table.add_column("Repository", style="bold")
    table.add_column("PR", width=7)
    table.add_column("Title", max_width=60)
    table.add_column("URL")

    for r in results:
        table.add_row(escape(r.repository), f"#{r.number}", escape(r.title), r.url)

    console.print(table)
