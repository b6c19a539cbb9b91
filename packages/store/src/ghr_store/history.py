from __future__ import annotations


class CommandHistory:
    """Ordered command lines, oldest first, capped at ``max_size`` entries."""

    def __init__(self, entries: list[str] | None = None, max_size: int = 100):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self._entries: list[str] = [e for e in (entries or []) if e.strip()][-max_size:]

    def add(self, command: str) -> None:
        if not command.strip():
            return
        self._entries.append(command)
        if len(self._entries) > self.max_size:
            del self._entries[0]

    def get(self, index: int) -> str | None:
        """Return the 1-based ``index``-th entry, or None."""
        if 1 <= index <= len(self._entries):
            return self._entries[index - 1]
        return None

    def last(self) -> str | None:
        return self._entries[-1] if self._entries else None

    def entries(self) -> list[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
