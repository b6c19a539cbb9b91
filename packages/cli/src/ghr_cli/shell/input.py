"""Blocking input helpers for the interactive shell."""

from __future__ import annotations


def read_multiline(terminator: str = ".", initial_text: str = "") -> str:
    """Read lines until one equal to ``terminator`` (or EOF) and return them joined."""
    lines = [initial_text] if initial_text else []
    while True:
        try:
            line = input()
        except EOFError:
            break
        if line == terminator:
            break
        lines.append(line)
    return "\n".join(lines)


def read_line(prompt: str) -> str:
    """Read one line; EOF counts as an empty answer."""
    try:
        return input(prompt)
    except EOFError:
        return ""


def confirm_yes(prompt: str = 'Type "yes" to confirm: ') -> bool:
    return read_line(prompt).strip().lower() == "yes"
