"""Tests for fixture cloning and symlink creation."""

import os

import pytest
from pydantic import ValidationError

from tempfns.core.errors import (
    FixtureNotFoundError,
    SymlinkCollisionError,
    SymlinkTargetNotFoundError,
)
from tempfns.core.models import SymlinkSpec
from tempfns.core.seeding import check_symlink_targets, clone_fixture, create_symlinks


@pytest.fixture
def fixture_dir(tmp_path):
    """A small fixture tree with nested dirs, a binary file and a relative symlink."""
    root = tmp_path / "fixture"
    (root / "src" / "nested").mkdir(parents=True)
    (root / "README.md").write_text("# fixture\n")
    (root / "src" / "main.py").write_text("print('hi')\n")
    (root / "src" / "nested" / "data.bin").write_bytes(bytes(range(256)))
    (root / "empty").mkdir()
    os.symlink("src/main.py", root / "entry.py")
    return root


@pytest.fixture
def target_dir(tmp_path):
    """A destination directory that already exists, like a fresh temp dir."""
    dest = tmp_path / "dest"
    dest.mkdir()
    return dest


def _tree(root):
    return sorted(str(p.relative_to(root)) for p in root.rglob("*"))


# =============================================================================
# clone_fixture
# =============================================================================


class TestCloneFixture:
    """Test recursive fixture copies."""

    def test_copies_tree_byte_for_byte(self, fixture_dir, target_dir):
        clone_fixture(fixture_dir, target_dir)

        assert _tree(target_dir) == _tree(fixture_dir)
        assert (target_dir / "src" / "nested" / "data.bin").read_bytes() == bytes(range(256))
        assert (target_dir / "README.md").read_text() == "# fixture\n"
        assert (target_dir / "empty").is_dir()

    def test_symlinks_copied_verbatim(self, fixture_dir, target_dir):
        clone_fixture(fixture_dir, target_dir)

        assert (target_dir / "entry.py").is_symlink()
        assert os.readlink(target_dir / "entry.py") == "src/main.py"

    def test_copy_is_independent_of_source(self, fixture_dir, target_dir):
        clone_fixture(fixture_dir, target_dir)

        (target_dir / "README.md").write_text("changed")
        (target_dir / "src" / "new.txt").write_text("new")

        assert (fixture_dir / "README.md").read_text() == "# fixture\n"
        assert not (fixture_dir / "src" / "new.txt").exists()

    def test_missing_source_raises(self, tmp_path, target_dir):
        missing = tmp_path / "nope"
        with pytest.raises(FixtureNotFoundError) as exc_info:
            clone_fixture(missing, target_dir)

        assert exc_info.value.path == str(missing)
        assert str(missing) in str(exc_info.value)
        assert list(target_dir.iterdir()) == []

    def test_creates_missing_destination(self, fixture_dir, tmp_path):
        dest = tmp_path / "fresh" / "dest"
        clone_fixture(fixture_dir, dest)
        assert (dest / "README.md").is_file()


# =============================================================================
# create_symlinks
# =============================================================================


class TestCreateSymlinks:
    """Test all-or-none symlink creation."""

    @pytest.fixture
    def git_root(self, tmp_path):
        root = tmp_path / "repo"
        (root / "node_modules").mkdir(parents=True)
        (root / "config").mkdir()
        (root / "config" / "settings.json").write_text("{}")
        return root

    def test_creates_links_to_git_root(self, git_root, target_dir):
        create_symlinks(
            [
                SymlinkSpec(at="node_modules", to="node_modules"),
                SymlinkSpec(at="settings.json", to="config/settings.json"),
            ],
            temp_dir=target_dir,
            git_root=git_root,
        )

        assert (target_dir / "node_modules").is_symlink()
        assert os.readlink(target_dir / "node_modules") == str(git_root / "node_modules")
        assert (target_dir / "settings.json").read_text() == "{}"

    def test_creates_parent_dirs_for_nested_at(self, git_root, target_dir):
        create_symlinks(
            [SymlinkSpec(at="deep/er/node_modules", to="node_modules")],
            temp_dir=target_dir,
            git_root=git_root,
        )
        assert (target_dir / "deep" / "er" / "node_modules").is_symlink()

    def test_empty_list_is_noop(self, git_root, target_dir):
        create_symlinks([], temp_dir=target_dir, git_root=git_root)
        assert list(target_dir.iterdir()) == []

    def test_missing_target_names_first_and_creates_nothing(self, git_root, target_dir):
        with pytest.raises(SymlinkTargetNotFoundError) as exc_info:
            create_symlinks(
                [
                    SymlinkSpec(at="node_modules", to="node_modules"),
                    SymlinkSpec(at="a", to="missing-a"),
                    SymlinkSpec(at="b", to="missing-b"),
                ],
                temp_dir=target_dir,
                git_root=git_root,
            )

        assert exc_info.value.to == "missing-a"
        assert exc_info.value.path == str(git_root / "missing-a")
        assert list(target_dir.iterdir()) == []

    def test_collision_with_existing_content_creates_nothing(self, git_root, target_dir):
        (target_dir / "settings.json").write_text("from fixture")

        with pytest.raises(SymlinkCollisionError) as exc_info:
            create_symlinks(
                [
                    SymlinkSpec(at="node_modules", to="node_modules"),
                    SymlinkSpec(at="settings.json", to="config/settings.json"),
                ],
                temp_dir=target_dir,
                git_root=git_root,
            )

        assert exc_info.value.at == "settings.json"
        assert "settings.json" in str(exc_info.value)
        assert not os.path.lexists(target_dir / "node_modules")
        assert (target_dir / "settings.json").read_text() == "from fixture"

    def test_collision_with_dangling_symlink(self, git_root, target_dir):
        os.symlink(target_dir / "gone", target_dir / "node_modules")
        with pytest.raises(SymlinkCollisionError):
            create_symlinks(
                [SymlinkSpec(at="node_modules", to="node_modules")],
                temp_dir=target_dir,
                git_root=git_root,
            )

    def test_duplicate_at_is_a_collision(self, git_root, target_dir):
        with pytest.raises(SymlinkCollisionError):
            create_symlinks(
                [
                    SymlinkSpec(at="shared", to="node_modules"),
                    SymlinkSpec(at="shared", to="config"),
                ],
                temp_dir=target_dir,
                git_root=git_root,
            )
        assert list(target_dir.iterdir()) == []

    def test_parent_escaping_at_rejected_before_any_link(self, git_root, target_dir):
        with pytest.raises(ValidationError):
            create_symlinks(
                [
                    SymlinkSpec(at="node_modules", to="node_modules"),
                    SymlinkSpec(at="../escaped", to="node_modules"),
                ],
                temp_dir=target_dir,
                git_root=git_root,
            )
        assert list(target_dir.iterdir()) == []
        assert not os.path.lexists(target_dir.parent / "escaped")

    def test_missing_target_checked_before_collision(self, git_root, target_dir):
        (target_dir / "taken").write_text("x")
        with pytest.raises(SymlinkTargetNotFoundError):
            create_symlinks(
                [
                    SymlinkSpec(at="taken", to="node_modules"),
                    SymlinkSpec(at="other", to="missing"),
                ],
                temp_dir=target_dir,
                git_root=git_root,
            )


class TestCheckSymlinkTargets:
    """Test the standalone target pre-check."""

    def test_all_present(self, tmp_path):
        (tmp_path / "x").mkdir()
        check_symlink_targets([SymlinkSpec(at="x", to="x")], tmp_path)

    def test_absolute_target_used_as_is(self, tmp_path):
        outside = tmp_path / "outside"
        outside.mkdir()
        check_symlink_targets([SymlinkSpec(at="x", to=str(outside))], tmp_path / "repo")
