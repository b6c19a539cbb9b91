"""Thin wrappers around the GitHub CLI (gh) and git.

Only used where the REST API has no equivalent or needs local context:
figuring out which repository the working directory belongs to, and the
whole-PR diff when the API omits a file's patch (large or binary files).
"""

from __future__ import annotations

import json
import logging
import subprocess

logger = logging.getLogger(__name__)


class GhCliError(RuntimeError):
    """Raised when a gh invocation fails or gh is not installed."""


def run_gh(args: list[str], timeout: int = 30) -> str:
    try:
        result = subprocess.run(
            ["gh", *args],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        raise GhCliError("GitHub CLI (gh) is not installed.")
    except subprocess.TimeoutExpired:
        raise GhCliError(f"gh {' '.join(args)} timed out after {timeout}s.")

    if result.returncode != 0:
        raise GhCliError(result.stderr.strip() or f"gh {' '.join(args)} failed with exit code {result.returncode}.")
    return result.stdout


def _repo_from_gh() -> str | None:
    try:
        data = json.loads(run_gh(["repo", "view", "--json", "owner,name"], timeout=10))
    except (GhCliError, json.JSONDecodeError) as e:
        logger.debug("gh repo view failed: %s", e)
        return None
    owner = (data.get("owner") or {}).get("login")
    name = data.get("name")
    return f"{owner}/{name}" if owner and name else None


def _repo_from_git() -> str | None:
    """Try to detect the GitHub repo slug from the git remote URL."""
    try:
        result = subprocess.run(
            ["git", "remote", "get-url", "origin"],
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None
    if result.returncode != 0:
        return None
    url = result.stdout.strip()
    # https://github.com/owner/repo.git  →  owner/repo
    # git@github.com:owner/repo.git      →  owner/repo
    if "github.com" not in url:
        return None
    slug = url.split("github.com")[-1].lstrip("/:").removesuffix(".git")
    return slug if "/" in slug else None


def detect_repo() -> str | None:
    """Return owner/name for the working directory, or None."""
    return _repo_from_gh() or _repo_from_git()


def get_pr_diff(pr_number: int, repo: str) -> str:
    """Return the whole PR diff as rendered by ``gh pr diff``."""
    return run_gh(["pr", "diff", str(pr_number), "--repo", repo, "--color", "never"], timeout=60)
