"""Unified diff helpers.

GitHub's file API returns each file's patch without the ``---``/``+++``
header lines; the gh CLI returns one diff for the whole PR. Both are
normalised here into per-file unified diffs.
"""

from __future__ import annotations

import difflib
import re

_HUNK_RE = re.compile(r"^@@ -\d+(?:,\d+)? \+(\d+)(?:,\d+)? @@")
_DIFF_GIT_RE = re.compile(r"^diff --git a/(.+?) b/(.+)$")
_WHITESPACE_RE = re.compile(r"\s+")


def format_file_diff(filename: str, patch: str, previous_filename: str | None = None) -> str:
    """Prefix an API patch with unified diff file headers."""
    old = previous_filename or filename
    return f"--- a/{old}\n+++ b/{filename}\n{patch.rstrip()}\n"


def split_unified_diff(diff_text: str) -> dict[str, str]:
    """Split a multi-file ``git diff`` into {new path: file section}."""
    sections: dict[str, str] = {}
    current: str | None = None
    lines: list[str] = []

    for line in diff_text.splitlines():
        match = _DIFF_GIT_RE.match(line)
        if match:
            if current is not None:
                sections[current] = "\n".join(lines) + "\n"
            current = match.group(2)
            lines = [line]
        elif current is not None:
            lines.append(line)

    if current is not None:
        sections[current] = "\n".join(lines) + "\n"
    return sections


def commentable_lines(patch_text: str) -> set[int]:
    """Return the new-file line numbers GitHub accepts inline comments on.

    Added and context lines inside a hunk carry a new-file line number;
    removed lines do not.
    """
    lines: set[int] = set()
    file_line: int | None = None

    for line in patch_text.splitlines():
        match = _HUNK_RE.match(line)
        if match:
            file_line = int(match.group(1))
            continue
        if file_line is None:
            continue
        if line.startswith("-"):
            continue
        if line.startswith("\\"):
            continue  # "\ No newline at end of file"
        lines.add(file_line)
        file_line += 1

    return lines


def _format_range(start: int, length: int) -> str:
    # Same convention as difflib: an empty range points at the line before it.
    beginning = start + 1
    if length == 1:
        return f"{beginning}"
    if not length:
        beginning -= 1
    return f"{beginning},{length}"


def whitespace_insensitive_diff(old_text: str, new_text: str, filename: str, context: int = 3) -> str:
    """Unified diff of two file versions that ignores whitespace changes.

    Lines are matched on their content with all whitespace removed, but the
    original lines are printed, like ``git diff -w``.
    """
    old_lines = old_text.splitlines()
    new_lines = new_text.splitlines()
    old_keys = [_WHITESPACE_RE.sub("", line) for line in old_lines]
    new_keys = [_WHITESPACE_RE.sub("", line) for line in new_lines]

    matcher = difflib.SequenceMatcher(None, old_keys, new_keys, autojunk=False)
    out: list[str] = []

    for group in matcher.get_grouped_opcodes(context):
        if not out:
            out.append(f"--- a/{filename}")
            out.append(f"+++ b/{filename}")
        first, last = group[0], group[-1]
        old_range = _format_range(first[1], last[2] - first[1])
        new_range = _format_range(first[3], last[4] - first[3])
        out.append(f"@@ -{old_range} +{new_range} @@")
        for tag, i1, i2, j1, j2 in group:
            if tag == "equal":
                out.extend(" " + line for line in new_lines[j1:j2])
                continue
            if tag in ("replace", "delete"):
                out.extend("-" + line for line in old_lines[i1:i2])
            if tag in ("replace", "insert"):
                out.extend("+" + line for line in new_lines[j1:j2])

    return "\n".join(out) + "\n" if out else ""
