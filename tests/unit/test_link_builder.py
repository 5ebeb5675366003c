"""Tests for LinkBuilder state transitions."""

import os
from unittest.mock import patch

import pytest

from dotify.dotfiles import Action, Entry, FailureKind, LinkBuilder, LinkStatus
from dotify.dotfiles.link_builder import remove_path, stage_copy


@pytest.fixture
def vimrc(config) -> Entry:
    return Entry.from_config(".vimrc", config)


def builder(entry: Entry) -> LinkBuilder:
    return LinkBuilder(entry)


class TestHelpers:
    """Tests for the filesystem helpers."""

    def test_remove_path_symlink_keeps_target(self, tmp_path):
        target = tmp_path / "target"
        target.mkdir()
        (target / "file").write_text("keep")
        link = tmp_path / "link"
        link.symlink_to(target)

        remove_path(link)

        assert not os.path.lexists(link)
        assert (target / "file").read_text() == "keep"

    def test_remove_path_directory(self, tmp_path):
        d = tmp_path / "d"
        (d / "sub").mkdir(parents=True)
        remove_path(d)
        assert not d.exists()

    def test_stage_copy_cleans_up_on_failure(self, tmp_path):
        source = tmp_path / "source"
        source.write_text("x")
        staging = tmp_path / "staging"

        with patch("dotify.dotfiles.link_builder.shutil.copy2") as mock_copy:
            mock_copy.side_effect = OSError("disk full")
            with pytest.raises(OSError):
                stage_copy(source, staging)

        assert list(staging.iterdir()) == []


class TestTrack:
    """Tests for track."""

    def test_copies_file(self, vimrc, home):
        (home / ".vimrc").write_text("set nu")

        outcome = builder(vimrc).track()

        assert outcome.changed
        assert outcome.status == "tracked"
        assert vimrc.tracked_path.read_text() == "set nu"
        assert (home / ".vimrc").read_text() == "set nu"
        assert not (home / ".vimrc").is_symlink()

    def test_creates_tracked_directory(self, vimrc, home, config):
        (home / ".vimrc").write_text("set nu")
        assert not config.is_installed()

        builder(vimrc).track()

        assert config.is_installed()

    def test_copies_directory_recursively(self, config, home):
        (home / ".config" / "nvim").mkdir(parents=True)
        (home / ".config" / "nvim" / "init.lua").write_text("-- lua")
        entry = Entry.from_config(".config", config)

        outcome = builder(entry).track()

        assert outcome.changed
        copied = entry.tracked_path / "nvim" / "init.lua"
        assert copied.read_text() == "-- lua"
        assert (home / ".config" / "nvim" / "init.lua").exists()

    def test_overwrites_existing_tracked_copy(self, vimrc, home, tracked):
        (home / ".vimrc").write_text("new")
        (tracked / ".vimrc").write_text("old")

        builder(vimrc).track()

        assert vimrc.tracked_path.read_text() == "new"

    def test_leaves_no_staging_behind(self, vimrc, home, tracked):
        (home / ".vimrc").write_text("set nu")
        builder(vimrc).track()
        assert [p.name for p in tracked.iterdir()] == [".vimrc"]

    def test_missing_home_is_not_found(self, vimrc, tracked):
        outcome = builder(vimrc).track()

        assert outcome.kind == FailureKind.NOT_FOUND
        assert outcome.status == "nothing to track"
        assert not outcome.ok
        assert list(tracked.iterdir()) == []

    def test_linked_entry_is_already_in_state(self, vimrc, home, tracked):
        (tracked / ".vimrc").write_text("set nu")
        (home / ".vimrc").symlink_to(tracked / ".vimrc")

        outcome = builder(vimrc).track()

        assert outcome.kind == FailureKind.ALREADY_IN_STATE
        assert outcome.ok
        assert not outcome.changed
        assert vimrc.tracked_path.read_text() == "set nu"

    def test_tracked_directory_itself_is_not_managed(
        self, config, home, tracked
    ):
        (tracked / ".vimrc").write_text("set nu")
        entry = Entry.from_config(".dotify", config)

        outcome = builder(entry).track()

        assert outcome.kind == FailureKind.NOT_MANAGED
        assert sorted(p.name for p in tracked.iterdir()) == [".vimrc"]

    def test_link_onto_tracked_directory_is_refused(
        self, config, home, tracked
    ):
        (tracked / ".dotify").mkdir()
        entry = Entry.from_config(".dotify", config)

        outcome = builder(entry).link()

        assert outcome.kind == FailureKind.NOT_MANAGED
        assert tracked.is_dir() and not tracked.is_symlink()

    def test_failed_copy_keeps_previous_tracked_copy(
        self, vimrc, home, tracked
    ):
        (home / ".vimrc").write_text("new")
        (tracked / ".vimrc").write_text("old")

        with patch("dotify.dotfiles.link_builder.shutil.copy2") as mock_copy:
            mock_copy.side_effect = PermissionError("denied")
            outcome = builder(vimrc).track()

        assert outcome.kind == FailureKind.IO_FAILURE
        assert "denied" in outcome.message
        assert vimrc.tracked_path.read_text() == "old"


class TestUntrack:
    """Tests for untrack."""

    def test_restores_plain_copy_from_link(self, vimrc, home, tracked):
        (tracked / ".vimrc").write_text("set nu")
        (home / ".vimrc").symlink_to(tracked / ".vimrc")

        outcome = builder(vimrc).untrack()

        assert outcome.changed
        assert outcome.status == "removed"
        assert not (home / ".vimrc").is_symlink()
        assert (home / ".vimrc").read_text() == "set nu"
        assert not vimrc.tracked_path.exists()

    def test_replaces_home_copy_with_tracked_content(
        self, vimrc, home, tracked
    ):
        (tracked / ".vimrc").write_text("tracked")
        (home / ".vimrc").write_text("stale")

        builder(vimrc).untrack()

        assert (home / ".vimrc").read_text() == "tracked"
        assert not vimrc.tracked_path.exists()

    def test_restores_directory(self, config, home, tracked):
        (tracked / ".config" / "nvim").mkdir(parents=True)
        (tracked / ".config" / "nvim" / "init.lua").write_text("-- lua")
        (home / ".config").symlink_to(tracked / ".config")
        entry = Entry.from_config(".config", config)

        builder(entry).untrack()

        assert not (home / ".config").is_symlink()
        assert (home / ".config" / "nvim" / "init.lua").read_text() == "-- lua"
        assert not (tracked / ".config").exists()

    def test_not_managed(self, vimrc, home, tracked):
        (home / ".vimrc").write_text("set nu")

        outcome = builder(vimrc).untrack()

        assert outcome.kind == FailureKind.NOT_MANAGED
        assert (home / ".vimrc").read_text() == "set nu"

    def test_neither_exists_is_not_found(self, vimrc, tracked):
        outcome = builder(vimrc).untrack()
        assert outcome.kind == FailureKind.NOT_FOUND
        assert outcome.status == "does not exist"

    def test_home_missing_is_not_found(self, vimrc, tracked):
        (tracked / ".vimrc").write_text("set nu")

        outcome = builder(vimrc).untrack()

        assert outcome.kind == FailureKind.NOT_FOUND
        assert vimrc.tracked_path.exists()

    def test_failed_copy_removes_nothing(self, vimrc, home, tracked):
        (tracked / ".vimrc").write_text("set nu")
        (home / ".vimrc").symlink_to(tracked / ".vimrc")

        with patch("dotify.dotfiles.link_builder.shutil.copy2") as mock_copy:
            mock_copy.side_effect = OSError("disk full")
            outcome = builder(vimrc).untrack()

        assert outcome.kind == FailureKind.IO_FAILURE
        assert vimrc.is_linked
        assert vimrc.tracked_path.read_text() == "set nu"
        assert sorted(p.name for p in home.iterdir()) == [".dotify", ".vimrc"]


class TestLink:
    """Tests for link."""

    def test_links_when_home_absent(self, vimrc, home, tracked):
        (tracked / ".vimrc").write_text("set nu")

        outcome = builder(vimrc).link()

        assert outcome.status == "linked"
        assert (home / ".vimrc").is_symlink()
        assert vimrc.status == LinkStatus.LINKED

    def test_replaces_existing_file(self, vimrc, home, tracked):
        (tracked / ".vimrc").write_text("tracked")
        (home / ".vimrc").write_text("local")

        outcome = builder(vimrc).link()

        assert outcome.status == "replaced"
        assert (home / ".vimrc").read_text() == "tracked"
        assert vimrc.is_linked

    def test_replaces_existing_directory(self, config, home, tracked):
        (tracked / ".config").mkdir()
        (home / ".config" / "sub").mkdir(parents=True)
        entry = Entry.from_config(".config", config)

        builder(entry).link()

        assert entry.is_linked

    def test_replaces_stale_link(self, vimrc, home, tracked):
        (tracked / ".vimrc").write_text("set nu")
        (home / ".vimrc").symlink_to(home / "gone")

        outcome = builder(vimrc).link()

        assert outcome.changed
        assert vimrc.is_linked

    def test_relink_is_idempotent(self, vimrc, home, tracked):
        (tracked / ".vimrc").write_text("set nu")

        first = builder(vimrc).link()
        second = builder(vimrc).link()

        assert first.status == "linked"
        assert second.status == "linked"
        assert vimrc.is_linked
        assert os.readlink(home / ".vimrc") == str(tracked / ".vimrc")
        assert vimrc.tracked_path.read_text() == "set nu"

    def test_missing_tracked_is_not_found(self, vimrc, home):
        (home / ".vimrc").write_text("local")

        outcome = builder(vimrc).link()

        assert outcome.kind == FailureKind.NOT_FOUND
        assert outcome.status == "nothing to link"
        assert (home / ".vimrc").read_text() == "local"

    def test_nonexistent_performs_no_mutation(self, config, home):
        entry = Entry.from_config("nonexistent", config)

        outcome = builder(entry).link()

        assert outcome.kind == FailureKind.NOT_FOUND
        assert list(home.iterdir()) == []


class TestUnlink:
    """Tests for unlink."""

    def test_removes_link_keeps_tracked(self, vimrc, home, tracked):
        (tracked / ".vimrc").write_text("set nu")
        (home / ".vimrc").symlink_to(tracked / ".vimrc")

        outcome = builder(vimrc).unlink()

        assert outcome.status == "unlinked"
        assert not os.path.lexists(home / ".vimrc")
        assert vimrc.tracked_path.read_text() == "set nu"

    def test_unlinks_directory_link_without_touching_contents(
        self, config, home, tracked
    ):
        (tracked / ".config").mkdir()
        (tracked / ".config" / "file").write_text("x")
        (home / ".config").symlink_to(tracked / ".config")
        entry = Entry.from_config(".config", config)

        builder(entry).unlink()

        assert not os.path.lexists(home / ".config")
        assert (tracked / ".config" / "file").read_text() == "x"

    def test_missing_home_is_not_found(self, vimrc, tracked):
        (tracked / ".vimrc").write_text("set nu")
        assert builder(vimrc).unlink().kind == FailureKind.NOT_FOUND

    def test_missing_tracked_is_not_found(self, vimrc, home):
        (home / ".vimrc").write_text("local")

        outcome = builder(vimrc).unlink()

        assert outcome.kind == FailureKind.NOT_FOUND
        assert (home / ".vimrc").read_text() == "local"

    def test_plain_home_file_is_left_alone(self, vimrc, home, tracked):
        (tracked / ".vimrc").write_text("tracked")
        (home / ".vimrc").write_text("local")

        outcome = builder(vimrc).unlink()

        assert outcome.kind == FailureKind.NOT_MANAGED
        assert (home / ".vimrc").read_text() == "local"


class TestDescribe:
    """Tests for confirmation prompts and dispatch."""

    def test_describe_names_entry_and_action(self, vimrc):
        b = builder(vimrc)
        assert b.describe(Action.LINK) == (
            "Do you want to link .vimrc to the home directory?"
        )
        assert ".vimrc" in b.describe(Action.UNTRACK)

    def test_run_dispatches(self, vimrc, home, tracked):
        (tracked / ".vimrc").write_text("set nu")
        outcome = builder(vimrc).run(Action.LINK)
        assert outcome.action == Action.LINK
        assert vimrc.is_linked

    def test_check_is_none_when_action_would_apply(self, vimrc, tracked):
        (tracked / ".vimrc").write_text("set nu")
        assert builder(vimrc).check(Action.LINK) is None
