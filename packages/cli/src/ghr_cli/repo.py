"""Resolution of the GitHub objects every subcommand needs."""

from __future__ import annotations

import click


def require_token(config: dict) -> str:
    token = config.get("github_token")
    if not token:
        raise click.UsageError(
            "No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.\n"
            "Create a token at https://github.com/settings/tokens"
        )
    return token


def resolve_repo_name(config: dict) -> str:
    """--repo / config ``repo``, else the repository of the working directory."""
    from ghr_core.gh.cli import detect_repo

    repo_name = config.get("repo") or detect_repo()
    if not repo_name:
        raise click.UsageError(
            "Could not determine the repository. Pass --repo owner/name, set 'repo' in .ghr.yml, "
            "or run ghr inside a GitHub checkout."
        )
    return repo_name
