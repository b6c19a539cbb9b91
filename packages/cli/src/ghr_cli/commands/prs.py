"""prs command: list open pull requests without entering the shell."""

from __future__ import annotations

import click
from github import GithubException
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ghr_cli.repo import require_token, resolve_repo_name
from ghr_core.gh.pull_request import get_repo, list_pull_requests

console = Console()


@click.command("prs")
@click.option(
    "--state",
    type=click.Choice(["open", "closed", "all"]),
    default="open",
    show_default=True,
    help="Pull request state.",
)
@click.option("--limit", type=int, default=None, help="Maximum number of PRs to show. Defaults to pr_list_limit.")
@click.pass_context
def prs_cmd(ctx, state: str, limit: int | None):
    """List pull requests of the repository."""
    config = ctx.obj["config"]
    token = require_token(config)
    repo_name = resolve_repo_name(config)

    try:
        prs = list_pull_requests(get_repo(repo_name, token=token), limit=limit or config["pr_list_limit"], state=state)
    except GithubException as e:
        raise click.ClickException(f"Could not list pull requests for {repo_name}: {e}")

    if not prs:
        console.print(f"[yellow]No {state} pull requests found.[/yellow]")
        return

    table = Table(title=f"Pull Requests — {repo_name}", show_header=True, header_style="bold cyan")
    table.add_column("PR", style="bold", width=7)
    table.add_column("Title", max_width=60)
    table.add_column("Author", width=20)
    table.add_column("State", width=8)
    table.add_column("URL")

    for pr in prs:
        pr_state = "draft" if pr.draft and pr.state == "open" else pr.state
        table.add_row(f"#{pr.number}", escape(pr.title), escape(pr.author), pr_state, pr.url)

    console.print(table)
