"""Filesystem mutations for a single entry.

Track and untrack move content between the home and tracked directories.
Link and unlink only touch the home-side symlink and never the tracked
copy, so an entry can be re-linked without copying it again.
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from .entry import Entry
from .types import Action, FailureKind, Outcome

logger = logging.getLogger(__name__)

PROMPTS = {
    Action.TRACK: "Do you want to add {name} to dotify?",
    Action.UNTRACK: "Do you want to remove {name} from dotify?",
    Action.LINK: "Do you want to link {name} to the home directory?",
    Action.UNLINK: "Do you want to unlink {name} from the home directory?",
}


def remove_path(path: Path):
    """Remove a file, symlink or directory tree.

    Symlinks are removed themselves, never the tree they point to.
    """
    if path.is_symlink() or not path.is_dir():
        path.unlink()
    else:
        shutil.rmtree(path)


def stage_copy(source: Path, directory: Path) -> Path:
    """Copy source into a fresh temporary path inside directory.

    Returns the staged copy. Nothing is left behind if the copy fails.
    """
    directory.mkdir(parents=True, exist_ok=True)
    staging_dir = Path(tempfile.mkdtemp(prefix=".dotify-", dir=directory))
    staged = staging_dir / source.name
    try:
        if source.is_dir():
            shutil.copytree(source, staged, symlinks=True)
        else:
            shutil.copy2(source, staged)
    except OSError:
        shutil.rmtree(staging_dir, ignore_errors=True)
        raise
    return staged


def swap_in(staged: Path, dest: Path):
    """Replace dest with the staged copy and drop the staging directory."""
    if os.path.lexists(dest):
        remove_path(dest)
    os.replace(staged, dest)
    staged.parent.rmdir()


class LinkBuilder:
    """Guarded track/untrack/link/unlink for one entry.

    Every operation either completes or returns exactly one failure
    outcome; filesystem errors outside the domain rules come back as
    IO_FAILURE instead of raising.
    """

    def __init__(self, entry: Entry):
        self.entry = entry

    @property
    def name(self) -> str:
        return self.entry.name

    def describe(self, action: Action) -> str:
        """Confirmation question for the given action on this entry."""
        return PROMPTS[action].format(name=self.name)

    def run(self, action: Action) -> Outcome:
        return {
            Action.TRACK: self.track,
            Action.UNTRACK: self.untrack,
            Action.LINK: self.link,
            Action.UNLINK: self.unlink,
        }[action]()

    def check(self, action: Action) -> Optional[Outcome]:
        """Outcome that settles the action without mutating, if any.

        None means the preconditions hold and the action would change the
        filesystem.
        """
        entry = self.entry

        # The tracked directory never manages itself
        if entry.holds_tracked_root:
            return self._fail(
                action, FailureKind.NOT_MANAGED, "not managed",
                f"{entry.home_path} holds the dotify directory",
            )

        if action == Action.TRACK:
            if not entry.home_path.exists():
                return self._fail(
                    action, FailureKind.NOT_FOUND, "nothing to track",
                    f"{entry.home_path} does not exist",
                )
            if entry.is_linked:
                return self._fail(
                    action, FailureKind.ALREADY_IN_STATE, "already tracked",
                )

        elif action == Action.UNTRACK:
            if entry.home_exists and not entry.is_tracked:
                return self._fail(
                    action, FailureKind.NOT_MANAGED, "not managed",
                    f"{self.name} is not managed by dotify",
                )
            if not entry.home_exists or not entry.is_tracked:
                return self._fail(
                    action, FailureKind.NOT_FOUND, "does not exist",
                    f"{entry.home_path} does not exist",
                )

        elif action == Action.LINK:
            if not entry.is_tracked:
                return self._fail(
                    action, FailureKind.NOT_FOUND, "nothing to link",
                    f"{self.name} does not exist in dotify",
                )

        elif action == Action.UNLINK:
            if not entry.home_exists or not entry.is_tracked:
                return self._fail(
                    action, FailureKind.NOT_FOUND, "does not exist",
                    f"{self.name} does not exist in dotify",
                )
            if not entry.is_linked:
                return self._fail(
                    action, FailureKind.NOT_MANAGED, "not linked",
                    f"{entry.home_path} is not a link into dotify",
                )

        return None

    def track(self) -> Outcome:
        """Copy the home path into the tracked directory."""
        outcome = self.check(Action.TRACK)
        if outcome:
            return outcome

        entry = self.entry
        try:
            staged = stage_copy(entry.home_path, entry.tracked_root)
            swap_in(staged, entry.tracked_path)
        except OSError as e:
            return self._io_failure(Action.TRACK, e)

        logger.info(f"Tracked {entry.home_path} -> {entry.tracked_path}")
        return self._done(Action.TRACK, "tracked")

    def untrack(self) -> Outcome:
        """Put a plain copy back in home and drop the tracked copy."""
        outcome = self.check(Action.UNTRACK)
        if outcome:
            return outcome

        entry = self.entry
        try:
            # The tracked copy is only removed once home holds the content
            staged = stage_copy(entry.tracked_path, entry.home_root)
            swap_in(staged, entry.home_path)
            remove_path(entry.tracked_path)
        except OSError as e:
            return self._io_failure(Action.UNTRACK, e)

        logger.info(f"Untracked {entry.tracked_path} -> {entry.home_path}")
        return self._done(Action.UNTRACK, "removed")

    def link(self) -> Outcome:
        """Point the home path at the tracked copy, replacing what was there."""
        outcome = self.check(Action.LINK)
        if outcome:
            return outcome

        entry = self.entry
        replaced = entry.home_exists and not entry.is_linked
        try:
            if entry.home_exists:
                remove_path(entry.home_path)
            entry.home_path.symlink_to(entry.tracked_path)
        except OSError as e:
            return self._io_failure(Action.LINK, e)

        logger.info(f"Linked {entry.home_path} -> {entry.tracked_path}")
        return self._done(Action.LINK, "replaced" if replaced else "linked")

    def unlink(self) -> Outcome:
        """Remove the home-side symlink, keeping the tracked copy."""
        outcome = self.check(Action.UNLINK)
        if outcome:
            return outcome

        entry = self.entry
        try:
            entry.home_path.unlink()
        except OSError as e:
            return self._io_failure(Action.UNLINK, e)

        logger.info(f"Unlinked {entry.home_path}")
        return self._done(Action.UNLINK, "unlinked")

    def _done(self, action: Action, status: str) -> Outcome:
        return Outcome(self.name, action, status)

    def _fail(
        self,
        action: Action,
        kind: FailureKind,
        status: str,
        message: str = "",
    ) -> Outcome:
        logger.debug(f"{action.value} {self.name}: {status}")
        return Outcome(self.name, action, status, kind=kind, message=message)

    def _io_failure(self, action: Action, error: OSError) -> Outcome:
        logger.error(f"Could not {action.value} {self.name}: {error}")
        return Outcome(
            self.name,
            action,
            "failed",
            kind=FailureKind.IO_FAILURE,
            message=str(error),
        )
