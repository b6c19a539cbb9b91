"""Interactive shell command handlers.

Every handler has the dispatcher signature ``handler(args, ctx)``: ``args``
is the raw argument string and ``ctx`` the ShellContext. Handlers report
problems to the terminal and return; only unexpected errors propagate to
the shell loop.
"""

from __future__ import annotations

import logging
import re

from github import GithubException
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.syntax import Syntax

from ghr_cli.shell.context import ShellContext
from ghr_cli.shell.input import confirm_yes, read_line, read_multiline
from ghr_core.assistant import build_file_question
from ghr_core.gh.cli import GhCliError, get_pr_diff
from ghr_core.gh.diff import commentable_lines, format_file_diff, split_unified_diff, whitespace_insensitive_diff
from ghr_core.gh.pull_request import (
    build_review_payload,
    get_file_content,
    get_issue_comments,
    get_pr_files,
    get_pull,
    get_review_comments,
    list_pull_requests,
    search_review_requests,
    submit_review,
)
from ghr_core.providers.base import AssistantError, BaseAssistant
from ghr_core.utils.position import PositionError, parse_position_arg
from ghr_store.history import CommandHistory

console = Console()
logger = logging.getLogger(__name__)

RULE = "-" * 100
NO_PR = 'No PR selected. Use "pr <#>" first.'
NO_FILE = "No file selected."

_COMMENT_USAGE = """Usage: ca [position] [text]
  ca g     -> file-level comment
  ca       -> file-level comment
  ca 5     -> single line comment on line 5
  ca 5-10  -> multi-line comment on lines 5 to 10"""


def _compile(pattern: str):
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        console.print(f"Invalid regex: {e}", markup=False)
        return None


class ReviewCommands:
    def __init__(
        self,
        repo,
        repo_name: str,
        github,
        history: CommandHistory,
        assistant: BaseAssistant | None = None,
        pr_list_limit: int = 50,
    ):
        self.repo = repo
        self.repo_name = repo_name
        self.github = github
        self.history = history
        self.assistant = assistant
        self.pr_list_limit = pr_list_limit
        self._pull = None
        self._pr_diff_sections: dict[str, str] | None = None
        self._assistant_topic: tuple[int, str] | None = None

    # ------------------------------------------------------------------ #
    # Helpers                                                              #
    # ------------------------------------------------------------------ #

    def pull(self, ctx: ShellContext):
        """Return the PyGithub PullRequest for the selected PR, cached per number."""
        number = ctx.state.pr_number
        if self._pull is None or self._pull.number != number:
            self._pull = get_pull(self.repo, number)
        return self._pull

    def _fetch_pr(self, pr_number: int):
        """Return (pull, files) for ``pr_number``, or None when GitHub refused."""
        try:
            pull = get_pull(self.repo, pr_number)
            return pull, get_pr_files(pull)
        except GithubException as e:
            console.print(f"[red]Error loading PR #{pr_number}: {escape(str(e))}[/red]")
            return None

    def _apply_pr(self, ctx: ShellContext, pull, files) -> None:
        self._pull = pull
        self._pr_diff_sections = None
        ctx.load_files(files, pull.number)

        dropped = ctx.state.prune_file_comments(ctx.pr_files)
        for path in dropped:
            logger.warning("Dropped comments on %s: file is no longer part of PR #%d", path, pull.number)
            console.print(f"[yellow]Dropped comments on {escape(path)}: not in PR #{pull.number} anymore.[/yellow]")

    def restore(self, ctx: ShellContext) -> None:
        """Reload the files of the PR recorded in the session."""
        state = ctx.state
        fetched = self._fetch_pr(state.pr_number)
        if fetched is None:
            return
        self._apply_pr(ctx, *fetched)

        # Keep the selected file only while it is still part of the PR.
        index = ctx.index_of(state.current_file_name) if state.current_file_name else None
        if index is None:
            state.current_file_index = None
            state.current_file_name = None
        else:
            state.select_file(index, state.current_file_name)
        if state.grep_set:
            state.grep_set = [i for i in state.grep_set if 1 <= i <= len(ctx.pr_files)] or None
            if state.grep_set is None or (state.grep_index or 0) >= len(state.grep_set):
                state.grep_index = 0 if state.grep_set else None

    def file_diff(self, ctx: ShellContext, filename: str) -> str:
        """Unified diff of one file: the API patch, else the gh CLI diff."""
        pr_file = ctx.files.get(filename)
        if pr_file is not None and pr_file.patch:
            return format_file_diff(filename, pr_file.patch, pr_file.previous_filename)

        if self._pr_diff_sections is None:
            self._pr_diff_sections = split_unified_diff(get_pr_diff(ctx.state.pr_number, self.repo_name))
        return self._pr_diff_sections.get(filename, "")

    def _require_pr(self, ctx: ShellContext) -> bool:
        if not ctx.state.pr_number:
            console.print(NO_PR, markup=False)
            return False
        return True

    def _require_file(self, ctx: ShellContext) -> bool:
        if not self._require_pr(ctx):
            return False
        if not ctx.state.current_file_name:
            console.print(NO_FILE)
            return False
        return True

    # ------------------------------------------------------------------ #
    # Pull requests                                                        #
    # ------------------------------------------------------------------ #

    def list_prs(self, args: str, ctx: ShellContext) -> None:
        console.print("Fetching list of open pull requests...")
        try:
            prs = list_pull_requests(self.repo, limit=self.pr_list_limit)
        except GithubException as e:
            console.print(f"[red]Error listing PRs: {escape(str(e))}[/red]")
            return
        if not prs:
            console.print("[yellow]No open pull requests found.[/yellow]")
            return
        console.print("\nOpen Pull Requests:")
        console.print(RULE)
        for pr in prs:
            draft = " [dim](draft)[/dim]" if pr.draft else ""
            console.print(f"[bold]#{pr.number:>5}[/bold] {escape(pr.title)}{draft}")
            console.print(f"         by {escape(pr.author)} - {pr.url}", markup=False)
        console.print(RULE)

    def list_review_requests(self, args: str, ctx: ShellContext) -> None:
        console.print("Searching pull requests awaiting your review...")
        try:
            requests = search_review_requests(self.github, repo=args.strip() or None)
        except GithubException as e:
            console.print(f"[red]Error searching review requests: {escape(str(e))}[/red]")
            return
        if not requests:
            console.print("[yellow]No review requests found.[/yellow]")
            return
        for r in requests:
            console.print(f"- {r.repository}#{r.number}: {r.title} {r.url}", markup=False)

    def select_pr(self, args: str, ctx: ShellContext) -> None:
        try:
            pr_number = int(args.strip().lstrip("#"))
        except ValueError:
            console.print("Usage: pr <PR#>")
            return

        state = ctx.state
        unpushed = state.unpushed_count()
        if state.pr_number and pr_number != state.pr_number and unpushed:
            console.print(
                f"[yellow]PR #{state.pr_number} has {unpushed} unpushed comment(s); "
                f"switching to PR #{pr_number} discards them.[/yellow]"
            )
            if not confirm_yes():
                console.print("PR selection cancelled.")
                return

        console.print(f"Loading PR #{pr_number}...")
        fetched = self._fetch_pr(pr_number)
        if fetched is None:
            return
        state.select_pr(pr_number)
        self._apply_pr(ctx, *fetched)

        console.print(f"Selected PR #{pr_number} with {len(ctx.pr_files)} files.")
        if ctx.pr_files:
            self.select_file("1", ctx)

    # ------------------------------------------------------------------ #
    # Files                                                                #
    # ------------------------------------------------------------------ #

    def list_files(self, args: str, ctx: ShellContext) -> None:
        if not self._require_pr(ctx):
            return
        state = ctx.state
        console.print(f"\nFiles in PR #{state.pr_number}:")
        console.print(RULE)
        for index, filename in enumerate(ctx.pr_files, 1):
            pr_file = ctx.files.get(filename)
            marker = "→" if index == state.current_file_index else " "
            status = pr_file.status[:1].upper() if pr_file else "?"
            changes = f"+{pr_file.additions}/-{pr_file.deletions}" if pr_file else ""
            n_comments = len(state.file_comments.get(filename, []))
            note = f"  ({n_comments} comment(s))" if n_comments else ""
            console.print(f"{marker} {index:>4} [{status}] {filename:<60} {changes}{note}", markup=False)
        console.print(RULE)

    def select_file(self, args: str, ctx: ShellContext) -> None:
        if not self._require_pr(ctx):
            return
        state = ctx.state
        arg = args.strip()

        index: int | None
        if arg == "+":
            index = (state.current_file_index or 0) + 1
        elif arg == "-":
            index = (state.current_file_index or 2) - 1
        else:
            try:
                index = int(arg)
            except ValueError:
                index = None

        total = len(ctx.pr_files)
        if index is None or not 1 <= index <= total:
            console.print(f"Invalid file index. Valid range: 1-{total}")
            return

        filename = ctx.pr_files[index - 1]
        state.select_file(index, filename)

        percentage = index / total * 100
        console.print(f"\n[{index}/{total} | {percentage:.1f}%] {filename}", markup=False)
        pr_file = ctx.files.get(filename)
        if pr_file is not None:
            console.print(f"Status: {pr_file.status} | Changes: +{pr_file.additions}/-{pr_file.deletions}")

        self.show_diff("", ctx)

    def next_file(self, args: str, ctx: ShellContext) -> None:
        self.select_file("+", ctx)

    def prev_file(self, args: str, ctx: ShellContext) -> None:
        self.select_file("-", ctx)

    def select_file_by_name(self, args: str, ctx: ShellContext) -> None:
        if not self._require_pr(ctx):
            return
        if not args.strip():
            console.print("Usage: f <name_regex>")
            return
        regex = _compile(args.strip())
        if regex is None:
            return
        for index, filename in enumerate(ctx.pr_files, 1):
            if regex.search(filename):
                self.select_file(str(index), ctx)
                return
        console.print(f'No file matching "{args.strip()}" found.', markup=False)

    # ------------------------------------------------------------------ #
    # Viewing                                                              #
    # ------------------------------------------------------------------ #

    def show_diff(self, args: str, ctx: ShellContext) -> None:
        if not self._require_file(ctx):
            return
        try:
            diff = self.file_diff(ctx, ctx.state.current_file_name)
        except GhCliError as e:
            console.print(f"[red]Error showing diff: {escape(str(e))}[/red]")
            return
        if not diff:
            console.print("[yellow]No textual diff available (binary file or diff too large).[/yellow]")
            return
        console.print()
        console.print(Syntax(diff, "diff", word_wrap=False))

    def show_diff_ignore_whitespace(self, args: str, ctx: ShellContext) -> None:
        if not self._require_file(ctx):
            return
        filename = ctx.state.current_file_name
        pr_file = ctx.current_file()
        status = pr_file.status if pr_file else "modified"
        old_name = (pr_file.previous_filename if pr_file else None) or filename
        try:
            pull = self.pull(ctx)
            old = "" if status == "added" else get_file_content(self.repo, old_name, pull.base.sha)
            new = "" if status == "removed" else get_file_content(self.repo, filename, pull.head.sha)
        except GithubException as e:
            console.print(f"[red]Error showing diff: {escape(str(e))}[/red]")
            return

        diff = whitespace_insensitive_diff(old, new, filename)
        if not diff:
            console.print("No differences (ignoring whitespace).")
            return
        console.print()
        console.print(Syntax(diff, "diff", word_wrap=False))

    def _show_content(self, ctx: ShellContext, base: bool) -> None:
        if not self._require_file(ctx):
            return
        filename = ctx.state.current_file_name
        pr_file = ctx.current_file()
        path = filename
        if base and pr_file is not None and pr_file.previous_filename:
            path = pr_file.previous_filename
        try:
            pull = self.pull(ctx)
            ref = pull.base.sha if base else pull.head.sha
            content = get_file_content(self.repo, path, ref)
        except GithubException as e:
            logger.debug("Could not fetch %s: %s", path, e)
            if base:
                console.print("Error: File may not exist in base branch.")
            else:
                console.print("Error: Could not retrieve file content.")
            return
        lexer = Syntax.guess_lexer(path, code=content)
        console.print(Syntax(content, lexer, line_numbers=True, word_wrap=False))

    def show_original(self, args: str, ctx: ShellContext) -> None:
        self._show_content(ctx, base=True)

    def show_new(self, args: str, ctx: ShellContext) -> None:
        self._show_content(ctx, base=False)

    # ------------------------------------------------------------------ #
    # Comments                                                             #
    # ------------------------------------------------------------------ #

    def add_comment(self, args: str, ctx: ShellContext) -> None:
        if not self._require_pr(ctx):
            return
        state = ctx.state
        parts = args.strip().split(maxsplit=1)
        pos_arg = parts[0] if parts else ""
        inline_text = parts[1].strip() if len(parts) > 1 else ""

        try:
            position = parse_position_arg(pos_arg)
        except PositionError as e:
            console.print(f"Error: {e}", markup=False)
            console.print(_COMMENT_USAGE, markup=False)
            return

        if position.is_global:
            console.print("Adding a FILE-LEVEL comment.")
        else:
            if not state.current_file_name:
                console.print('Error: No file selected. Use "fn <#>" first.', markup=False)
                return
            filename = state.current_file_name
            if position.kind == "range":
                console.print(f"Adding multi-line comment for lines {position.start}-{position.end} in {filename}", markup=False)
            else:
                console.print(f"Adding comment at line {position.start} in {filename}", markup=False)

        if inline_text:
            text = inline_text
        else:
            console.print("Type your comment, terminate with a '.' on a single line:")
            text = read_multiline(".")
        text = text.strip()
        if not text:
            console.print("[yellow]Empty comment discarded.[/yellow]")
            return

        if position.is_global:
            state.add_global_comment(text)
            console.print("\nFile-level comment added successfully.")
            return

        pr_file = ctx.current_file()
        state.add_file_comment(filename, text, line=position.end, start_line=position.start)
        if pr_file is not None and pr_file.patch is not None:
            allowed = commentable_lines(pr_file.patch)
            if position.start not in allowed or position.end not in allowed:
                console.print(
                    "[yellow]Note: these lines are not part of the diff; the comment will be "
                    "included in the review body when submitted.[/yellow]"
                )
        console.print("\nComment added successfully (local).")

    def delete_comment(self, args: str, ctx: ShellContext) -> None:
        state = ctx.state
        arg = args.strip().lower()
        if not arg:
            console.print("Usage: cd <position|g>")
            return

        if arg == "g":
            if state.delete_global_comment() is None:
                console.print("No global comments to delete.")
                return
            console.print("Deleted last global comment.")
            return

        try:
            number = int(arg)
        except ValueError:
            console.print("Invalid position.")
            return
        if not state.current_file_name:
            console.print(NO_FILE)
            return
        comments = state.file_comments.get(state.current_file_name) or []
        if not comments:
            console.print("No comments for this file.")
            return
        if not 1 <= number <= len(comments):
            console.print(f"Invalid position. Valid range: 1-{len(comments)}")
            return
        state.delete_file_comment(state.current_file_name, number)
        console.print(f"Deleted comment at position {number}.")

    def show_review_summary(self, args: str, ctx: ShellContext) -> None:
        state = ctx.state
        console.print("\n=== Review Summary ===\n")
        if state.pr_number:
            console.print(f"PR #{state.pr_number}\n")

        if state.global_comments:
            console.print("Global Comments:")
            for i, c in enumerate(state.global_comments, 1):
                console.print(f"  {i}. [{c.status}] {c.body}", markup=False)
            console.print()

        if state.file_comments:
            console.print("File Comments:")
            for path, comments in state.file_comments.items():
                console.print(f"  {path}:", markup=False)
                for i, c in enumerate(comments, 1):
                    console.print(f"    {i}. [{c.status}] Line {c.span}: {c.body}", markup=False)
            console.print()

        console.print(f"Total unpushed comments: {state.unpushed_count()}")

    def load_comments(self, args: str, ctx: ShellContext) -> None:
        if not self._require_pr(ctx):
            return
        console.print(f"Loading review comments for PR #{ctx.state.pr_number}...")
        try:
            comments = get_review_comments(self.pull(ctx))
        except GithubException as e:
            console.print(f"[red]Error loading comments: {escape(str(e))}[/red]")
            return

        console.print(f"\nFound {len(comments)} review comment(s):\n")
        by_file: dict[str, list] = {}
        for c in comments:
            by_file.setdefault(c.path, []).append(c)
        for path, file_comments in by_file.items():
            console.print(f"[bold cyan]{escape(path)}[/bold cyan]:")
            for c in file_comments:
                line = c.line if c.line is not None else "?"
                console.print(f"  Line {line}: {c.body}", markup=False)
                console.print(f"    by {c.author} at {c.created_at or 'unknown'}", markup=False)
            console.print()

    def load_general_comments(self, args: str, ctx: ShellContext) -> None:
        if not self._require_pr(ctx):
            return
        console.print(f"Loading general comments for PR #{ctx.state.pr_number}...")
        try:
            comments = get_issue_comments(self.pull(ctx))
        except GithubException as e:
            console.print(f"[red]Error loading comments: {escape(str(e))}[/red]")
            return

        console.print(f"\nFound {len(comments)} general comment(s):\n")
        for c in comments:
            console.print(f"[{c.user}] at {c.created_at}:", markup=False)
            console.print(c.body, markup=False)
            console.print("-" * 80)

    # ------------------------------------------------------------------ #
    # Review submission                                                    #
    # ------------------------------------------------------------------ #

    def _payload(self, ctx: ShellContext, event: str | None, message: str = ""):
        """Return (payload, comments) where ``comments`` are the local comments it carries.

        Line comments on paths missing from the loaded files have no diff to
        anchor to and end up in the review body.
        """
        state = ctx.state
        global_comments = state.local_global_comments()
        file_comments = state.local_file_comments()
        line_comments = [
            {"path": c.path, "line": c.line, "start_line": c.start_line, "body": c.body} for c in file_comments
        ]
        patches = {path: f.patch for path, f in ctx.files.items()}
        payload = build_review_payload(
            event,
            [c.body for c in global_comments],
            line_comments,
            patches,
            message=message,
        )
        return payload, global_comments + file_comments

    def _require_loaded_files(self, ctx: ShellContext) -> bool:
        if ctx.files_loaded():
            return True
        number = ctx.state.pr_number
        console.print(
            f'[red]Files of PR #{number} are not loaded. Run "pr {number}" to reload them before submitting.[/red]'
        )
        return False

    def _report_folded(self, payload) -> None:
        if payload.folded:
            console.print(
                f"[yellow]{len(payload.folded)} comment(s) outside the diff were added to the review body.[/yellow]"
            )

    def push_comments(self, args: str, ctx: ShellContext) -> None:
        state = ctx.state
        if not state.pr_number:
            console.print("No PR selected.")
            return
        unpushed = state.unpushed_count()
        if unpushed == 0:
            console.print("No unpushed comments to push.")
            return
        if not self._require_loaded_files(ctx):
            return

        console.print(f"\nPreparing to push {unpushed} comment(s) to PR #{state.pr_number}...")
        console.print("This will create a draft (pending) review with your comments.")
        if not confirm_yes():
            console.print("Push cancelled.")
            return

        payload, sent = self._payload(ctx, event=None)
        try:
            submit_review(self.pull(ctx), payload)
        except GithubException as e:
            console.print(f"[red]Error pushing comments: {escape(str(e))}[/red]")
            return
        state.mark_pushed(sent)
        self._report_folded(payload)
        console.print(f"\n[green]Successfully pushed {len(sent)} comment(s) as draft review.[/green]")

    def _submit(self, ctx: ShellContext, event: str) -> None:
        state = ctx.state
        if not state.pr_number:
            console.print("No PR selected.")
            return
        if not self._require_loaded_files(ctx):
            return

        unpushed = state.unpushed_count()
        action = "approve" if event == "APPROVE" else "request changes for"
        console.print(f"\nPreparing to {action} PR #{state.pr_number}...")
        if unpushed:
            console.print(f"This will submit {unpushed} local comment(s).")
        else:
            console.print("No local comments to submit.")

        if not confirm_yes():
            console.print("Review submission cancelled.")
            return
        message = read_line("Optional review message (press Enter to skip): ")

        payload, sent = self._payload(ctx, event=event, message=message)
        if event == "REQUEST_CHANGES" and not payload.body:
            console.print("[red]Requesting changes needs a review message or a file-level comment.[/red]")
            return
        try:
            submit_review(self.pull(ctx), payload)
        except GithubException as e:
            console.print(f"[red]Error submitting review: {escape(str(e))}[/red]")
            return
        state.mark_pushed(sent)
        self._report_folded(payload)
        console.print(f"\n[green]Successfully submitted {event} review![/green]")

    def accept_review(self, args: str, ctx: ShellContext) -> None:
        self._submit(ctx, "APPROVE")

    def reject_review(self, args: str, ctx: ShellContext) -> None:
        self._submit(ctx, "REQUEST_CHANGES")

    # ------------------------------------------------------------------ #
    # Search                                                               #
    # ------------------------------------------------------------------ #

    def _apply_search(self, ctx: ShellContext, pattern: str, matched: list[int]) -> None:
        if not matched:
            console.print("No files found matching the pattern.")
            return
        ctx.state.set_search(matched)
        console.print(f"\nFound {len(matched)} file(s) matching '{pattern}':", markup=False)
        for index in matched:
            console.print(f"  {index:>4} : {ctx.pr_files[index - 1]}", markup=False)
        console.print("\nSelecting first matching file.")
        self.select_file(str(matched[0]), ctx)

    def grep_diffs(self, args: str, ctx: ShellContext) -> None:
        if not self._require_pr(ctx):
            return
        pattern = args.strip()
        if not pattern:
            console.print("Usage: g <regexp>")
            return
        regex = _compile(pattern)
        if regex is None:
            return

        console.print(f"\nSearching diffs for pattern: {pattern}", markup=False)
        matched = []
        for index, filename in enumerate(ctx.pr_files, 1):
            try:
                diff = self.file_diff(ctx, filename)
            except GhCliError as e:
                logger.warning("Skipping %s: %s", filename, e)
                continue
            if regex.search(diff):
                matched.append(index)
        self._apply_search(ctx, pattern, matched)

    def grep_local(self, args: str, ctx: ShellContext) -> None:
        if not self._require_pr(ctx):
            return
        pattern = args.strip()
        if not pattern:
            console.print("Usage: gl <regexp>")
            return
        regex = _compile(pattern)
        if regex is None:
            return

        console.print(f"\nSearching local files for pattern: {pattern}", markup=False)
        matched = [index for index, filename in enumerate(ctx.pr_files, 1) if regex.search(filename)]
        self._apply_search(ctx, pattern, matched)

    def grep_next(self, args: str, ctx: ShellContext) -> None:
        index = ctx.state.next_search()
        if index is None:
            console.print('No grep results. Use "g <regexp>" first.', markup=False)
            return
        self.select_file(str(index), ctx)

    def grep_prev(self, args: str, ctx: ShellContext) -> None:
        index = ctx.state.prev_search()
        if index is None:
            console.print('No grep results. Use "g <regexp>" first.', markup=False)
            return
        self.select_file(str(index), ctx)

    # ------------------------------------------------------------------ #
    # Assistant                                                            #
    # ------------------------------------------------------------------ #

    def _ask(self, ctx: ShellContext, question: str) -> None:
        state = ctx.state
        prompt = question
        topic = (state.pr_number, state.current_file_name) if state.current_file_name else None
        # The file's diff is sent once per file; later questions in the same
        # conversation refer back to it.
        if topic is not None and topic != self._assistant_topic:
            try:
                diff = self.file_diff(ctx, state.current_file_name)
            except GhCliError as e:
                logger.warning("Asking without diff context: %s", e)
                diff = ""
            prompt = build_file_question(state.pr_number, state.current_file_name, diff, question)

        try:
            with console.status("Thinking..."):
                answer = self.assistant.converse(prompt)
        except AssistantError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            return
        if topic is not None:
            self._assistant_topic = topic
        console.print()
        console.print(Markdown(answer))

    def ask_assistant(self, args: str, ctx: ShellContext) -> None:
        if self.assistant is None:
            console.print("AI assistant not configured. Set GEMINI_API_KEY (or the key for the configured provider).")
            return

        if args.strip():
            self._ask(ctx, args.strip())
            return

        console.print(f"\n[bold]{self.assistant.__class__.__name__}[/bold] ({self.assistant.model})")
        console.print("Ask a question about the current file or code review.")
        console.print("(Empty line or '.' returns to the review prompt.)\n")
        while True:
            question = read_line("ai> ").strip()
            if not question or question == ".":
                break
            self._ask(ctx, question)

    def clear_assistant(self, args: str, ctx: ShellContext) -> None:
        if self.assistant is None:
            console.print("AI assistant not configured.")
            return
        self.assistant.clear_history()
        self._assistant_topic = None
        console.print("Assistant conversation cleared.")

    # ------------------------------------------------------------------ #
    # History                                                              #
    # ------------------------------------------------------------------ #

    def show_history(self, args: str, ctx: ShellContext) -> None:
        console.print("\n=== Command History ===\n")
        for i, command in enumerate(self.history.entries(), 1):
            console.print(f"{i:>4}  {command}", markup=False)
        console.print()
