from __future__ import annotations

from dataclasses import dataclass, field

from ghr_core.gh.models import PRFile
from ghr_store.models import SessionState


@dataclass
class ShellContext:
    """What every command handler sees: the session state plus the loaded PR files.

    ``pr_files`` keeps GitHub's ordering; file indices shown to the user are
    1-based positions in it. ``loaded_pr`` is the PR those files belong to.
    """

    state: SessionState
    files: dict[str, PRFile] = field(default_factory=dict)
    pr_files: list[str] = field(default_factory=list)
    loaded_pr: int | None = None

    def load_files(self, files: list[PRFile], pr_number: int | None = None) -> None:
        self.pr_files = [f.filename for f in files]
        self.files = {f.filename: f for f in files}
        self.loaded_pr = pr_number

    def files_loaded(self) -> bool:
        return self.loaded_pr is not None and self.loaded_pr == self.state.pr_number

    def index_of(self, filename: str) -> int | None:
        try:
            return self.pr_files.index(filename) + 1
        except ValueError:
            return None

    def current_file(self) -> PRFile | None:
        name = self.state.current_file_name
        return self.files.get(name) if name else None
