"""Single-entry and bulk sync operations."""

import logging
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple, Union

from ..config import Config
from .collection import Collection
from .entry import Entry, entry_name
from .link_builder import LinkBuilder
from .types import Action, BatchResult, FailureKind, LinkStatus, Outcome

logger = logging.getLogger(__name__)

# Called before each mutation; returning False skips the entry
Confirm = Callable[[Entry, Action], bool]


class SyncEngine:
    """Drives discovery (Collection) and mutation (LinkBuilder).

    The engine holds no state besides its config, so every call sees the
    filesystem as it is now. Bulk operations run entries one after the
    other and keep going when one fails.
    """

    def __init__(self, config: Config):
        self.config = config

    def entry(self, name: Union[str, Path]) -> Optional[Entry]:
        """Entry for user input such as ``.vimrc`` or ``~/.vimrc``."""
        normalized = entry_name(name)
        if normalized is None:
            return None
        return Entry.from_config(normalized, self.config)

    def home(self) -> Collection:
        return Collection.scan_home(self.config)

    def tracked(self) -> Collection:
        return Collection.scan_tracked(self.config)

    def status(self) -> Tuple[Collection, Collection]:
        """Tracked and home collections, for display."""
        return self.tracked(), self.home()

    def candidates(self, action: Action) -> List[Entry]:
        """Entries a bulk run of the action would visit."""
        if action == Action.TRACK:
            # Dangling links have nothing to copy
            return [
                e for e in self.home()
                if e.status == LinkStatus.UNTRACKED
                and e.home_path.exists()
                and not e.holds_tracked_root
            ]
        if action == Action.LINK:
            return self.tracked().unlinked()
        # untrack and unlink both work on what is currently linked
        return self.tracked().linked()

    def run(
        self,
        action: Action,
        name: Union[str, Path],
        confirm: Optional[Confirm] = None,
    ) -> Outcome:
        entry = self.entry(name)
        if entry is None:
            return Outcome(
                str(name),
                action,
                "does not exist",
                kind=FailureKind.NOT_FOUND,
                message=f"{name!r} does not name a file",
            )
        return self._apply(entry, action, confirm)

    def run_all(
        self, action: Action, confirm: Optional[Confirm] = None
    ) -> BatchResult:
        return self._apply_all(self.candidates(action), action, confirm)

    def track(self, name, confirm: Optional[Confirm] = None) -> Outcome:
        return self.run(Action.TRACK, name, confirm)

    def untrack(self, name, confirm: Optional[Confirm] = None) -> Outcome:
        return self.run(Action.UNTRACK, name, confirm)

    def link(self, name, confirm: Optional[Confirm] = None) -> Outcome:
        return self.run(Action.LINK, name, confirm)

    def unlink(self, name, confirm: Optional[Confirm] = None) -> Outcome:
        return self.run(Action.UNLINK, name, confirm)

    def track_all(self, confirm: Optional[Confirm] = None) -> BatchResult:
        return self.run_all(Action.TRACK, confirm)

    def untrack_all(self, confirm: Optional[Confirm] = None) -> BatchResult:
        return self.run_all(Action.UNTRACK, confirm)

    def link_all(self, confirm: Optional[Confirm] = None) -> BatchResult:
        return self.run_all(Action.LINK, confirm)

    def unlink_all(self, confirm: Optional[Confirm] = None) -> BatchResult:
        return self.run_all(Action.UNLINK, confirm)

    def _apply(
        self,
        entry: Entry,
        action: Action,
        confirm: Optional[Confirm],
    ) -> Outcome:
        builder = LinkBuilder(entry)

        # Only ask about entries the action would actually change
        settled = builder.check(action)
        if settled:
            return settled

        if confirm is not None and not confirm(entry, action):
            logger.debug(f"Skipped {action.value} {entry.name}")
            return Outcome(
                entry.name, action, "skipped", kind=FailureKind.SKIPPED
            )

        return builder.run(action)

    def _apply_all(
        self,
        entries: Iterable[Entry],
        action: Action,
        confirm: Optional[Confirm],
    ) -> BatchResult:
        result = BatchResult(action)
        for entry in entries:
            outcome = self._apply(entry, action, confirm)
            if not outcome.ok:
                logger.warning(
                    f"Could not {action.value} {entry.name}: {outcome.status}"
                )
            result.add(outcome)
        return result
