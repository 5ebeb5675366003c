"""Type definitions for the dotfile sync engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class LinkStatus(Enum):
    """Where an entry stands between the home and tracked directories."""

    LINKED = "linked"
    UNLINKED = "unlinked"
    UNTRACKED = "untracked"


class Action(Enum):
    """The four state transitions the engine performs."""

    TRACK = "track"
    UNTRACK = "untrack"
    LINK = "link"
    UNLINK = "unlink"


class FailureKind(Enum):
    """Why an operation did not (or did not need to) mutate anything."""

    NOT_FOUND = "not_found"
    NOT_MANAGED = "not_managed"
    ALREADY_IN_STATE = "already_in_state"
    IO_FAILURE = "io_failure"
    SKIPPED = "skipped"


@dataclass
class Outcome:
    """Result of one operation on one entry.

    ``status`` is the short word the CLI prints next to the entry
    ("tracked", "replaced", "nothing to link", ...). ``kind`` is None for a
    completed mutation. ALREADY_IN_STATE and SKIPPED are not failures.
    """

    name: str
    action: Action
    status: str
    kind: Optional[FailureKind] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.kind in (
            None,
            FailureKind.ALREADY_IN_STATE,
            FailureKind.SKIPPED,
        )

    @property
    def changed(self) -> bool:
        """True if the filesystem was mutated."""
        return self.kind is None

    @property
    def skipped(self) -> bool:
        return self.kind == FailureKind.SKIPPED


@dataclass
class BatchResult:
    """Per-entry outcomes of a bulk operation, in processing order."""

    action: Action
    outcomes: List[Outcome] = field(default_factory=list)

    def add(self, outcome: Outcome):
        self.outcomes.append(outcome)

    @property
    def succeeded(self) -> List[Outcome]:
        return [o for o in self.outcomes if o.changed]

    @property
    def failed(self) -> List[Outcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def skipped(self) -> List[Outcome]:
        return [o for o in self.outcomes if o.skipped]

    @property
    def ok(self) -> bool:
        return not self.failed

    def __len__(self) -> int:
        return len(self.outcomes)

    def __iter__(self):
        return iter(self.outcomes)
