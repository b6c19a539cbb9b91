"""CLI entry point for ghr.

Commands:
  shell     : interactive review session (the default when no command is given)
  prs       : list open pull requests
  requests  : list pull requests where your review is requested
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler

from ghr_cli.commands.prs import prs_cmd
from ghr_cli.commands.requests import requests_cmd
from ghr_cli.commands.shell import shell_cmd

console = Console()


def _build_store(config: dict, ephemeral: bool = False):
    """Instantiate the session store.

    --ephemeral → NoOpSessionStore (nothing read or written)
    (default)   → FileSessionStore at session_file / history_file
    """
    from ghr_store.noop import NoOpSessionStore

    if ephemeral:
        return NoOpSessionStore()

    from ghr_store.file import FileSessionStore

    return FileSessionStore(
        session_path=config.get("session_file") or ".ghr_session",
        history_path=config.get("history_file") or ".ghr_command_history",
    )


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


@click.group(invoke_without_command=True)
@click.version_option(
    version=importlib.metadata.version("ghr"),
    prog_name="ghr",
)
@click.option(
    "--config",
    "config_path",
    default=".ghr.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="GHR_CONFIG",
)
@click.option("--repo", default=None, help="GitHub repository (owner/name). Detected from the checkout if omitted.")
@click.option("--verbose", "-v", is_flag=True, help="Log debug output.")
@click.option("--ephemeral", is_flag=True, help="Do not load or save the session and command history.")
@click.pass_context
def main(ctx: click.Context, config_path: str, repo: str | None, verbose: bool, ephemeral: bool):
    """Interactive GitHub pull request reviewer."""
    from ghr_core.config import load_config
    from ghr_cli.auth import resolve_github_token

    _configure_logging(verbose)
    ctx.ensure_object(dict)

    try:
        config = load_config(config_path, cli_overrides={"repo": repo})
    except (ValueError, yaml.YAMLError) as e:
        raise click.UsageError(f"Invalid configuration: {e}")

    token = resolve_github_token()
    if token:
        config["github_token"] = token

    ctx.obj["config"] = config
    ctx.obj["store"] = _build_store(config, ephemeral=ephemeral)

    if ctx.invoked_subcommand is None:
        ctx.invoke(shell_cmd)


main.add_command(shell_cmd)
main.add_command(prs_cmd)
main.add_command(requests_cmd)
