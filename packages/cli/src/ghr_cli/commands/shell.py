"""shell command: the interactive review session."""

from __future__ import annotations

import click
from github import GithubException
from rich.console import Console

from ghr_cli.repo import require_token, resolve_repo_name
from ghr_cli.shell.app import ReviewShell
from ghr_core.assistant import build_assistant
from ghr_core.gh.pull_request import get_github

console = Console()


def _build_assistant(config: dict):
    try:
        return build_assistant(config)
    except ImportError as e:
        console.print(f"[yellow]AI assistant disabled: {e}[/yellow]")
        return None
    except ValueError as e:
        raise click.UsageError(str(e))


@click.command("shell")
@click.pass_context
def shell_cmd(ctx):
    """Start an interactive review session (default command).

    \b
    Environment variables:
      GITHUB_TOKEN         GitHub token (or use gh CLI)
      GEMINI_API_KEY       Enables the AI assistant (default provider)
      ANTHROPIC_API_KEY    Used when assistant: anthropic
      OPENAI_API_KEY       Used when assistant: openai
    """
    config = ctx.obj["config"]
    token = require_token(config)
    repo_name = resolve_repo_name(config)

    github = get_github(token)
    try:
        repo = github.get_repo(repo_name)
    except GithubException as e:
        raise click.ClickException(f"Could not open repository {repo_name}: {e}")

    shell = ReviewShell(
        store=ctx.obj["store"],
        repo=repo,
        repo_name=repo_name,
        github=github,
        assistant=_build_assistant(config),
        history_max_size=config.get("history_max_size", 100),
        pr_list_limit=config.get("pr_list_limit", 50),
    )
    shell.run()
