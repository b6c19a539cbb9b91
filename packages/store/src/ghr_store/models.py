"""Session state data models.

Decoupled from ghr_core so the core GitHub/assistant layer has no knowledge
of what the shell keeps between invocations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

LOCAL = "local"
PUSHED = "pushed"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Comment:
    """A review comment held in the session.

    Global (file-level) comments have no path or line. Line comments carry
    the new-file ``line`` they are anchored to; range comments also carry
    ``start_line``.
    """

    body: str
    path: str | None = None
    line: int | None = None
    start_line: int | None = None
    status: str = LOCAL
    created_at: str = field(default_factory=_now)

    @property
    def is_local(self) -> bool:
        return self.status == LOCAL

    @property
    def span(self) -> str:
        if self.line is None:
            return ""
        if self.start_line is not None and self.start_line != self.line:
            return f"{self.start_line}-{self.line}"
        return str(self.line)

    def to_dict(self) -> dict:
        return {
            "body": self.body,
            "path": self.path,
            "line": self.line,
            "start_line": self.start_line,
            "status": self.status,
            "created_at": self.created_at,
        }

    @staticmethod
    def from_dict(d: dict) -> Comment:
        return Comment(
            body=d.get("body", ""),
            path=d.get("path"),
            line=d.get("line"),
            start_line=d.get("start_line"),
            status=d.get("status", LOCAL),
            created_at=d.get("created_at") or _now(),
        )


@dataclass
class SessionState:
    pr_number: int | None = None
    current_file_index: int | None = None  # 1-based
    current_file_name: str | None = None
    global_comments: list[Comment] = field(default_factory=list)
    file_comments: dict[str, list[Comment]] = field(default_factory=dict)
    grep_set: list[int] | None = None  # 1-based file indices
    grep_index: int | None = None

    # ------------------------------------------------------------------ #
    # Selection                                                            #
    # ------------------------------------------------------------------ #

    def select_pr(self, pr_number: int) -> None:
        """Make ``pr_number`` the active PR.

        Comments and search results belong to one PR, so switching to a
        different PR clears them. Re-selecting the same PR keeps them.
        """
        if pr_number != self.pr_number:
            self.global_comments = []
            self.file_comments = {}
            self.clear_search()
        self.pr_number = pr_number
        self.current_file_index = None
        self.current_file_name = None

    def select_file(self, index: int, filename: str) -> None:
        self.current_file_index = index
        self.current_file_name = filename

    def reset(self) -> None:
        self.pr_number = None
        self.current_file_index = None
        self.current_file_name = None
        self.global_comments = []
        self.file_comments = {}
        self.clear_search()

    # ------------------------------------------------------------------ #
    # Comments                                                             #
    # ------------------------------------------------------------------ #

    def add_global_comment(self, body: str) -> Comment:
        comment = Comment(body=body)
        self.global_comments.append(comment)
        return comment

    def add_file_comment(self, path: str, body: str, line: int, start_line: int | None = None) -> Comment:
        if start_line is not None and start_line > line:
            raise ValueError(f"start_line {start_line} is after line {line}")
        if start_line == line:
            start_line = None
        comment = Comment(body=body, path=path, line=line, start_line=start_line)
        self.file_comments.setdefault(path, []).append(comment)
        return comment

    def delete_global_comment(self) -> Comment | None:
        """Remove and return the most recent global comment."""
        if not self.global_comments:
            return None
        return self.global_comments.pop()

    def delete_file_comment(self, path: str, number: int) -> Comment:
        """Remove the ``number``-th (1-based) comment on ``path``."""
        comments = self.file_comments.get(path) or []
        if not 1 <= number <= len(comments):
            raise IndexError(f"No comment {number} on {path}")
        removed = comments.pop(number - 1)
        if not comments:
            del self.file_comments[path]
        return removed

    def prune_file_comments(self, filenames: list[str]) -> list[str]:
        """Drop line comments for files no longer in the PR. Returns dropped paths."""
        keep = set(filenames)
        dropped = [path for path in self.file_comments if path not in keep]
        for path in dropped:
            del self.file_comments[path]
        return dropped

    def local_global_comments(self) -> list[Comment]:
        return [c for c in self.global_comments if c.is_local]

    def local_file_comments(self) -> list[Comment]:
        return [c for comments in self.file_comments.values() for c in comments if c.is_local]

    def unpushed_count(self) -> int:
        return len(self.local_global_comments()) + len(self.local_file_comments())

    def mark_pushed(self, comments: list[Comment]) -> None:
        for comment in comments:
            comment.status = PUSHED

    def mark_all_pushed(self) -> None:
        self.mark_pushed(self.local_global_comments() + self.local_file_comments())

    # ------------------------------------------------------------------ #
    # Search results                                                       #
    # ------------------------------------------------------------------ #

    def set_search(self, indices: list[int]) -> None:
        self.grep_set = list(indices)
        self.grep_index = 0 if indices else None

    def clear_search(self) -> None:
        self.grep_set = None
        self.grep_index = None

    def next_search(self) -> int | None:
        """Advance the search cursor (wrapping) and return the file index."""
        if not self.grep_set:
            return None
        self.grep_index = ((self.grep_index or 0) + 1) % len(self.grep_set)
        return self.grep_set[self.grep_index]

    def prev_search(self) -> int | None:
        if not self.grep_set:
            return None
        current = self.grep_index or 0
        self.grep_index = len(self.grep_set) - 1 if current == 0 else current - 1
        return self.grep_set[self.grep_index]

    # ------------------------------------------------------------------ #
    # Serialisation                                                        #
    # ------------------------------------------------------------------ #

    def to_dict(self) -> dict:
        return {
            "pr_number": self.pr_number,
            "current_file_index": self.current_file_index,
            "current_file_name": self.current_file_name,
            "comments": {
                "global": [c.to_dict() for c in self.global_comments],
                "files": {path: [c.to_dict() for c in comments] for path, comments in self.file_comments.items()},
            },
            "grep_set": self.grep_set,
            "grep_index": self.grep_index,
        }

    @staticmethod
    def from_dict(d: dict) -> SessionState:
        comments = d.get("comments") or {}
        return SessionState(
            pr_number=d.get("pr_number"),
            current_file_index=d.get("current_file_index"),
            current_file_name=d.get("current_file_name"),
            global_comments=[Comment.from_dict(c) for c in comments.get("global", [])],
            file_comments={
                path: [Comment.from_dict(c) for c in items] for path, items in (comments.get("files") or {}).items()
            },
            grep_set=d.get("grep_set"),
            grep_index=d.get("grep_index"),
        )
