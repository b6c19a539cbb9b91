"""Line-oriented command dispatch.

A typed line is split into a command name (first token, case-insensitive)
and an argument string (the rest of the line, inner whitespace preserved so
regex arguments survive intact). Aliases resolve before lookup.

History back-references are expanded before dispatch:
  !!   → the most recent history entry
  !n   → the n-th history entry (1-based)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable

from rich.console import Console

console = Console()
logger = logging.getLogger(__name__)

CommandHandler = Callable[[str, Any], None]

_HISTORY_INDEX_RE = re.compile(r"^!(\d+)$")
_HISTORY_LOOKUP_RE = re.compile(r"^(h|history|!!?|!\d+)$", re.IGNORECASE)


@dataclass
class Command:
    """A registered command: its handler plus the metadata shown by help."""

    name: str
    handler: CommandHandler
    help: str = ""
    usage: str | None = None
    section: str = "General"


class CommandDispatcher:
    def __init__(self):
        self._commands: dict[str, Command] = {}
        self._aliases: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help: str = "",
        usage: str | None = None,
        section: str = "General",
    ) -> None:
        key = name.lower()
        self._commands[key] = Command(name=key, handler=handler, help=help, usage=usage, section=section)

    def register_alias(self, alias: str, command: str) -> None:
        self._aliases[alias.lower()] = command.lower()

    def resolve(self, name: str) -> str:
        key = name.lower()
        return self._aliases.get(key, key)

    def execute(self, line: str, context: Any = None) -> bool:
        """Dispatch one line. Returns False only when the command is unknown."""
        trimmed = line.strip()
        if not trimmed:
            return True

        parts = trimmed.split(maxsplit=1)
        name = self.resolve(parts[0])
        args = parts[1].strip() if len(parts) > 1 else ""

        command = self._commands.get(name)
        if command is None:
            console.print(f"Unknown command: '{name}'. Type '?' for help.", markup=False)
            return False

        logger.debug("Dispatching %r with args %r", name, args)
        command.handler(args, context)
        return True

    def expand_history(self, line: str, history: list[str]) -> str | None:
        """Expand !! and !n against history.

        Returns the line unchanged when it is not a back-reference, and None
        when the reference cannot be resolved (the reason is printed).
        """
        trimmed = line.strip()

        if trimmed == "!!":
            if not history:
                console.print("No commands in history")
                return None
            return history[-1]

        match = _HISTORY_INDEX_RE.match(trimmed)
        if match:
            index = int(match.group(1))
            if 1 <= index <= len(history):
                return history[index - 1]
            console.print(f"No command at index {match.group(1)}")
            return None

        return line

    @staticmethod
    def is_history_lookup(line: str) -> bool:
        """True for lines that only look at history and should not be recorded."""
        return bool(_HISTORY_LOOKUP_RE.match(line.strip()))

    def commands(self) -> list[str]:
        return list(self._commands)

    def has_command(self, name: str) -> bool:
        key = name.lower()
        return key in self._commands or key in self._aliases

    def aliases_for(self, name: str) -> list[str]:
        return sorted(alias for alias, target in self._aliases.items() if target == name)

    def sections(self) -> dict[str, list[Command]]:
        """Registered commands grouped by section, in registration order."""
        grouped: dict[str, list[Command]] = {}
        for command in self._commands.values():
            grouped.setdefault(command.section, []).append(command)
        return grouped
