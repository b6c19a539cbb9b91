"""Interactive review shell.

Owns the read–expand–dispatch loop: every line goes through history
expansion, then the dispatcher, then (when it was a real command) into the
command history. Session state and history are loaded from the store at
start-up and written back on quit.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ghr_cli.shell.context import ShellContext
from ghr_cli.shell.handlers import ReviewCommands
from ghr_core.dispatcher import CommandDispatcher
from ghr_core.providers.base import BaseAssistant
from ghr_store.base import BaseSessionStore

console = Console()
logger = logging.getLogger(__name__)

_HISTORY_HELP = """\
  !!            Repeat last command
  !<n>          Repeat command number n"""


class ReviewShell:
    def __init__(
        self,
        store: BaseSessionStore,
        repo,
        repo_name: str,
        github,
        assistant: BaseAssistant | None = None,
        history_max_size: int = 100,
        pr_list_limit: int = 50,
    ):
        self.store = store
        self.history = store.load_history(max_size=history_max_size)
        self.context = ShellContext(state=store.load_state())
        self.commands = ReviewCommands(
            repo,
            repo_name,
            github,
            self.history,
            assistant=assistant,
            pr_list_limit=pr_list_limit,
        )
        self.dispatcher = CommandDispatcher()
        self._running = False
        self._setup_commands()

    def _setup_commands(self) -> None:
        d, c = self.dispatcher, self.commands

        d.register("q", self.quit, "Quit the application", section="Session")
        d.register_alias("quit", "q")
        d.register_alias("exit", "q")
        d.register("?", self.show_help, "Show this help", section="Session")
        d.register_alias("help", "?")
        d.register("h", c.show_history, "Show command history", section="Session")
        d.register_alias("history", "h")

        d.register("lpr", c.list_prs, "List open pull requests", section="Pull Requests")
        d.register("lrr", c.list_review_requests, "List PRs awaiting your review", "lrr [owner/repo]", "Pull Requests")
        d.register("pr", c.select_pr, "Select and load a pull request", "pr <#>", "Pull Requests")

        d.register("lf", c.list_files, "List all files in current PR", section="File Navigation")
        d.register("fn", c.select_file, "Select file by index number", "fn <#>", "File Navigation")
        d.register("f", c.select_file_by_name, "Select file by name regex", "f <regex>", "File Navigation")
        d.register("+", c.next_file, "Move to next file", section="File Navigation")
        d.register("-", c.prev_file, "Move to previous file", section="File Navigation")

        d.register("dd", c.show_diff, "Show diff for current file", section="Viewing Files")
        d.register("ddiw", c.show_diff_ignore_whitespace, "Show diff ignoring whitespace", section="Viewing Files")
        d.register("do", c.show_original, "Show original file content", section="Viewing Files")
        d.register("dn", c.show_new, "Show new file content", section="Viewing Files")

        section = "Comments and Review"
        d.register("ca", c.add_comment, "Add comment (g = file-level, n or a-b = lines)", "ca <pos> [text]", section)
        d.register("cd", c.delete_comment, "Delete last global comment or n-th file comment", "cd <n|g>", section)
        d.register("rs", c.show_review_summary, "Show review summary", section=section)
        d.register("lc", c.load_comments, "Load existing review comments", section=section)
        d.register("lgc", c.load_general_comments, "Load general PR comments", section=section)
        d.register("cp", c.push_comments, "Push comments as draft review", section=section)
        d.register("accept", c.accept_review, "Approve PR with all comments", section=section)
        d.register("reject", c.reject_review, "Request changes with all comments", section=section)

        d.register("g", c.grep_diffs, "Grep diffs for pattern", "g <regex>", "Search")
        d.register("gl", c.grep_local, "Grep filenames for pattern", "gl <regex>", "Search")
        d.register("g+", c.grep_next, "Select next file from grep results", section="Search")
        d.register("g-", c.grep_prev, "Select previous file from grep results", section="Search")

        d.register("ajim", c.ask_assistant, "Ask the AI assistant about current file", "ajim [question]", "AI Assistant")
        d.register("ajc", c.clear_assistant, "Clear the AI assistant conversation", section="AI Assistant")

    # ------------------------------------------------------------------ #
    # Loop                                                                 #
    # ------------------------------------------------------------------ #

    def prompt(self) -> str:
        state = self.context.state
        prompt = "ghr"
        if state.pr_number:
            prompt += f" #{state.pr_number}"
            if state.current_file_name:
                total = len(self.context.pr_files)
                index = state.current_file_index or 0
                percentage = index / total * 100 if total else 0.0
                prompt += f" [{index}/{total} | {percentage:.1f}%] {state.current_file_name}"
        return prompt + " > "

    def process_line(self, line: str) -> bool:
        """Run one input line. Returns False when the line was not a known command."""
        trimmed = line.strip()
        if not trimmed:
            return True

        expanded = self.dispatcher.expand_history(trimmed, self.history.entries())
        if expanded is None:
            return True
        if expanded != trimmed:
            console.print(f"Executing: {expanded}", markup=False)

        try:
            known = self.dispatcher.execute(expanded, self.context)
        except Exception as e:
            logger.debug("Command %r failed", expanded, exc_info=True)
            console.print(f"[red]Command error: {escape(str(e))}[/red]")
            known = True

        if known and not self.dispatcher.is_history_lookup(trimmed):
            self.history.add(expanded)
        return known

    def restore_session(self) -> None:
        state = self.context.state
        if not state.pr_number:
            return
        console.print(f"Restoring session: PR #{state.pr_number}")
        self.commands.restore(self.context)
        if state.current_file_name:
            console.print(f"Last file: {state.current_file_name}", markup=False)
        unpushed = state.unpushed_count()
        if unpushed:
            console.print(f"{unpushed} unpushed local comment(s) in this session.")

    def run(self) -> None:
        console.print("[bold]GitHub Pull Request Reviewer (ghr)[/bold]")
        console.print('Type "?" for help, "q" to quit\n')
        self.restore_session()

        self._running = True
        while self._running:
            console.print()
            console.rule(style="dim")
            try:
                line = input(self.prompt())
            except (EOFError, KeyboardInterrupt):
                console.print()
                self.quit("", self.context)
                break
            self.process_line(line)

        self.shutdown()

    def quit(self, args: str, ctx: ShellContext) -> None:
        self._running = False

    def shutdown(self) -> None:
        unpushed = self.context.state.unpushed_count()
        if unpushed > 0:
            console.print(f"\n[yellow]Warning: You have {unpushed} unpushed local comments.[/yellow]")

        console.print("\nSaving session...")
        self.store.save_state(self.context.state)
        self.store.save_history(self.history)
        console.print("Exiting. Goodbye!\n")

    # ------------------------------------------------------------------ #
    # Help                                                                 #
    # ------------------------------------------------------------------ #

    def show_help(self, args: str, ctx: ShellContext) -> None:
        console.print("\n[bold]=== GitHub Review CLI (ghr) Help ===[/bold]")
        for section, commands in self.dispatcher.sections().items():
            table = Table(title=section, title_justify="left", show_header=False, box=None, pad_edge=False)
            table.add_column("Command", style="bold", min_width=16)
            table.add_column("Description")
            for command in commands:
                usage = command.usage or command.name
                aliases = self.dispatcher.aliases_for(command.name)
                if aliases:
                    usage += f" ({', '.join(aliases)})"
                table.add_row(escape(usage), escape(command.help))
            console.print(table)
        console.print("\n[bold]History[/bold]")
        console.print(_HISTORY_HELP, markup=False)
