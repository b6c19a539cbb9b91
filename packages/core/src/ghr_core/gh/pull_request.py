from __future__ import annotations

import logging
from itertools import islice

from github import Github

from ghr_core.gh.diff import commentable_lines
from ghr_core.gh.models import IssueComment, PRFile, PullRequestInfo, RemoteComment, ReviewPayload, ReviewRequest

logger = logging.getLogger(__name__)

REVIEW_EVENTS = ("APPROVE", "REQUEST_CHANGES", "COMMENT")


def get_github(token: str) -> Github:
    return Github(token)


def get_repo(repo_name: str, token: str):
    return get_github(token).get_repo(repo_name)


def get_pull(repo, pr_number: int):
    return repo.get_pull(pr_number)


def _login(user) -> str:
    return getattr(user, "login", None) or "unknown"


def _timestamp(value) -> str:
    return value.isoformat() if value is not None else ""


def list_pull_requests(repo, limit: int = 50, state: str = "open") -> list[PullRequestInfo]:
    return [
        PullRequestInfo(
            number=pr.number,
            title=pr.title or "",
            state=pr.state,
            author=_login(pr.user),
            url=pr.html_url,
            draft=bool(getattr(pr, "draft", False)),
        )
        for pr in islice(repo.get_pulls(state=state), limit)
    ]


def get_pr_files(pr) -> list[PRFile]:
    """Return every changed file; PyGithub pages through the 100-per-page API."""
    return [
        PRFile(
            filename=f.filename,
            status=f.status,
            additions=f.additions,
            deletions=f.deletions,
            changes=f.changes,
            patch=f.patch,
            previous_filename=getattr(f, "previous_filename", None),
        )
        for f in pr.get_files()
    ]


def get_review_comments(pr) -> list[RemoteComment]:
    comments = []
    for c in pr.get_review_comments():
        # c.line is None when the commented line no longer exists in the diff
        # (e.g. after a force-push). Fall back to original_line in that case.
        line = c.line if c.line is not None else getattr(c, "original_line", None)
        comments.append(
            RemoteComment(
                id=c.id,
                body=c.body or "",
                path=c.path,
                line=line,
                author=_login(c.user),
                created_at=_timestamp(c.created_at),
            )
        )
    return comments


def get_issue_comments(pr) -> list[IssueComment]:
    return [
        IssueComment(id=c.id, body=c.body or "", user=_login(c.user), created_at=_timestamp(c.created_at))
        for c in pr.get_issue_comments()
    ]


def get_file_content(repo, path: str, ref: str) -> str:
    return repo.get_contents(path, ref=ref).decoded_content.decode("utf-8", errors="replace")


def build_review_payload(
    event: str | None,
    global_bodies: list[str],
    line_comments: list[dict],
    patches: dict[str, str | None],
    message: str = "",
) -> ReviewPayload:
    """Assemble one review from local comments.

    ``line_comments`` are dicts with ``path``, ``line``, ``body`` and an
    optional ``start_line``. Comments whose lines are not part of the file's
    diff would make GitHub reject the whole review, so they are folded into
    the review body as ``path:line: body`` instead.
    """
    if event is not None and event not in REVIEW_EVENTS:
        raise ValueError(f"Unknown review event: {event!r}. Choose one of {', '.join(REVIEW_EVENTS)}.")

    inline: list[dict] = []
    folded: list[dict] = []
    allowed_cache: dict[str, set[int]] = {}

    for comment in line_comments:
        path = comment["path"]
        if path not in allowed_cache:
            allowed_cache[path] = commentable_lines(patches.get(path) or "")
        allowed = allowed_cache[path]

        line = comment["line"]
        start_line = comment.get("start_line")
        wanted = {line} if start_line is None else {start_line, line}
        if not wanted <= allowed:
            logger.debug("Folding comment on %s:%s into review body (outside diff)", path, line)
            folded.append(comment)
            continue

        api_comment = {"path": path, "body": comment["body"], "line": line, "side": "RIGHT"}
        if start_line is not None and start_line != line:
            api_comment["start_line"] = start_line
            api_comment["start_side"] = "RIGHT"
        inline.append(api_comment)

    parts = [message.strip()] if message.strip() else []
    parts.extend(body for body in global_bodies if body)
    for comment in folded:
        span = comment["line"] if comment.get("start_line") is None else f"{comment['start_line']}-{comment['line']}"
        parts.append(f"`{comment['path']}:{span}`: {comment['body']}")

    return ReviewPayload(event=event, body="\n\n".join(parts), comments=inline, folded=folded)


def submit_review(pr, payload: ReviewPayload):
    """Create the review on GitHub. A payload without event stays pending."""
    kwargs: dict = {}
    if payload.body:
        kwargs["body"] = payload.body
    if payload.event is not None:
        kwargs["event"] = payload.event
    if payload.comments:
        kwargs["comments"] = payload.comments
    return pr.create_review(**kwargs)


def build_review_request_query(reviewer: str = "@me", state: str = "open", repo: str | None = None) -> str:
    """Build a search query for PRs awaiting a review.

    ``state`` is open, closed, merged or any (no state restriction).
    ``repo`` is ``owner/name`` or ``owner/*`` for a whole organisation.
    """
    terms = ["is:pr", f"review-requested:{reviewer}"]
    state = state.lower()
    if state == "merged":
        terms.append("is:merged")
    elif state != "any":
        terms.append(f"state:{state}")
    if repo:
        if repo.endswith("/*"):
            terms.append(f"org:{repo[:-2]}")
        else:
            terms.append(f"repo:{repo}")
    return " ".join(terms)


def search_review_requests(
    gh: Github,
    reviewer: str = "@me",
    state: str = "open",
    repo: str | None = None,
    limit: int = 100,
) -> list[ReviewRequest]:
    query = build_review_request_query(reviewer, state, repo)
    logger.debug("Searching review requests: %s", query)
    return [
        ReviewRequest(
            repository=issue.repository.full_name,
            number=issue.number,
            title=issue.title or "",
            url=issue.html_url,
        )
        for issue in islice(gh.search_issues(query), limit)
    ]
