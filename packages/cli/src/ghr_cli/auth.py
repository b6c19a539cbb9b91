"""GitHub token lookup.

Sources, first hit wins:
  1. GITHUB_TOKEN
  2. GH_TOKEN, the variable gh itself reads
  3. the gh CLI session (`gh auth token`, available after `gh auth login`)
"""

from __future__ import annotations

import logging
import os

from ghr_core.gh.cli import GhCliError, run_gh

logger = logging.getLogger(__name__)

TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GH_TOKEN")


def _token_from_gh() -> str | None:
    try:
        token = run_gh(["auth", "token"], timeout=5).strip()
    except GhCliError as e:
        logger.debug("No token from gh: %s", e)
        return None
    return token or None


def resolve_github_token() -> str | None:
    """Return a GitHub token, or None when no source has one.

    Does not raise; the caller turns None into a usage error.
    """
    for var in TOKEN_ENV_VARS:
        if os.environ.get(var):
            logger.debug("Using GitHub token from %s.", var)
            return os.environ[var]

    token = _token_from_gh()
    if token:
        logger.debug("Using GitHub token from the gh CLI session.")
    return token
