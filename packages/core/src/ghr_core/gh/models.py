"""Plain data views of the GitHub objects the reviewer works with.

PyGithub objects are lazy and hit the network on attribute access; the shell
keeps these snapshots instead so listing and navigation stay offline once a
PR has been loaded.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class PullRequestInfo:
    number: int
    title: str
    state: str
    author: str
    url: str
    draft: bool = False


@dataclass
class PRFile:
    filename: str
    status: str  # "added" | "removed" | "modified" | "renamed" | ...
    additions: int = 0
    deletions: int = 0
    changes: int = 0
    patch: str | None = None
    previous_filename: str | None = None


@dataclass
class RemoteComment:
    """A review comment that already exists on GitHub."""

    id: int
    body: str
    path: str
    line: int | None
    author: str
    created_at: str


@dataclass
class IssueComment:
    """A general (conversation tab) comment on the PR."""

    id: int
    body: str
    user: str
    created_at: str


@dataclass
class ReviewRequest:
    repository: str
    number: int
    title: str
    url: str


@dataclass
class ReviewPayload:
    """Everything needed for one create_review call.

    ``event`` is None for a pending (draft) review.
    """

    event: str | None
    body: str = ""
    comments: list[dict] = field(default_factory=list)
    # Line comments that fell outside the diff and were folded into the body.
    folded: list[dict] = field(default_factory=list)
