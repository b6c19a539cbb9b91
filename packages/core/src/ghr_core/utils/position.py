from __future__ import annotations

import re
from dataclasses import dataclass

_RANGE_RE = re.compile(r"^(\d+)-(\d+)$")
_SINGLE_RE = re.compile(r"^(\d+)$")


class PositionError(ValueError):
    """Raised when a comment position argument cannot be parsed."""


@dataclass(frozen=True)
class Position:
    kind: str  # "global" | "single" | "range"
    start: int | None = None
    end: int | None = None

    @property
    def is_global(self) -> bool:
        return self.kind == "global"


def parse_position_arg(pos_arg: str) -> Position:
    """Parse a comment position.

    ``g`` or empty → file-level (global) comment, ``5`` → line 5,
    ``5-10`` → lines 5 to 10.
    """
    trimmed = pos_arg.strip().lower()

    if trimmed in ("", "g"):
        return Position("global")

    match = _RANGE_RE.match(trimmed)
    if match:
        start, end = int(match.group(1)), int(match.group(2))
        if start < 1 or start > end:
            raise PositionError(f"Invalid line range: {pos_arg}")
        if start == end:
            return Position("single", start=start, end=start)
        return Position("range", start=start, end=end)

    match = _SINGLE_RE.match(trimmed)
    if match:
        line = int(match.group(1))
        if line < 1:
            raise PositionError(f"Invalid line number: {pos_arg}")
        return Position("single", start=line, end=line)

    raise PositionError(f"Invalid position argument: {pos_arg}")
