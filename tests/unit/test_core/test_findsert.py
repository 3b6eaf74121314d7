"""Tests for the findsert_file / findsert_symlink primitives."""

import os
import threading
from unittest.mock import patch

import pytest

from tempfns.core.errors import InvariantViolationError
from tempfns.core.findsert import FindsertOutcome, findsert_file, findsert_symlink


class TestFindsertFile:
    """Test create-if-absent / verify-if-present for files."""

    def test_creates_absent_file(self, tmp_path):
        path = tmp_path / "readme.md"
        assert findsert_file(path, "hello\n") is FindsertOutcome.CREATED
        assert path.read_text() == "hello\n"

    def test_identical_content_is_noop(self, tmp_path):
        path = tmp_path / ".gitignore"
        findsert_file(path, "*\n")
        mtime = path.stat().st_mtime_ns
        assert findsert_file(path, "*\n") is FindsertOutcome.FOUND
        assert path.stat().st_mtime_ns == mtime

    def test_different_content_raises(self, tmp_path):
        path = tmp_path / ".gitignore"
        path.write_text("node_modules\n")
        with pytest.raises(InvariantViolationError) as exc_info:
            findsert_file(path, "*\n")
        assert exc_info.value.path == str(path)
        assert exc_info.value.found == "node_modules\n"
        assert exc_info.value.expected == "*\n"
        # never overwritten
        assert path.read_text() == "node_modules\n"

    def test_line_ending_difference_is_a_conflict(self, tmp_path):
        path = tmp_path / ".gitignore"
        path.write_bytes(b"*\r\n")
        with pytest.raises(InvariantViolationError) as exc_info:
            findsert_file(path, "*\n")
        assert exc_info.value.found == "*\r\n"
        assert path.read_bytes() == b"*\r\n"

    def test_undecodable_content_is_a_conflict(self, tmp_path):
        path = tmp_path / "readme.md"
        path.write_bytes(b"\xff\xfe garbage")
        with pytest.raises(InvariantViolationError) as exc_info:
            findsert_file(path, "hello\n")
        assert exc_info.value.found.endswith(" garbage")
        assert "\ufffd" in exc_info.value.found

    def test_directory_at_path_is_a_conflict(self, tmp_path):
        path = tmp_path / "readme.md"
        path.mkdir()
        with pytest.raises(InvariantViolationError) as exc_info:
            findsert_file(path, "hello\n")
        assert exc_info.value.found == "<directory>"
        assert path.is_dir()

    def test_leaves_no_temp_files_behind(self, tmp_path):
        findsert_file(tmp_path / "a.txt", "a")
        findsert_file(tmp_path / "a.txt", "a")
        assert sorted(p.name for p in tmp_path.iterdir()) == ["a.txt"]

    def test_concurrent_writers_converge(self, tmp_path):
        path = tmp_path / "readme.md"
        content = "x" * 100_000
        errors = []
        outcomes = []

        def worker():
            try:
                outcomes.append(findsert_file(path, content))
            except Exception as exc:  # pragma: no cover - failure path
                errors.append(exc)

        threads = [threading.Thread(target=worker) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert outcomes.count(FindsertOutcome.CREATED) == 1
        assert path.read_text() == content


class TestFindsertSymlink:
    """Test create-if-absent / verify-if-present for symlinks."""

    def test_creates_absent_symlink(self, tmp_path):
        target = tmp_path / "target"
        target.mkdir()
        link = tmp_path / "link"
        assert findsert_symlink(target, link) is FindsertOutcome.CREATED
        assert os.readlink(link) == str(target)

    def test_correct_symlink_is_noop(self, tmp_path):
        target = tmp_path / "target"
        target.mkdir()
        link = tmp_path / "link"
        os.symlink(target, link)
        assert findsert_symlink(target, link) is FindsertOutcome.FOUND
        assert os.readlink(link) == str(target)

    def test_replaces_stale_symlink(self, tmp_path):
        old, new = tmp_path / "old", tmp_path / "new"
        old.mkdir()
        new.mkdir()
        link = tmp_path / "link"
        os.symlink(old, link)
        assert findsert_symlink(new, link) is FindsertOutcome.CREATED
        assert os.readlink(link) == str(new)
        assert old.is_dir()

    def test_replaces_dangling_symlink(self, tmp_path):
        target = tmp_path / "target"
        target.mkdir()
        link = tmp_path / "link"
        os.symlink(tmp_path / "gone", link)
        assert findsert_symlink(target, link) is FindsertOutcome.CREATED
        assert os.readlink(link) == str(target)

    def test_replaces_regular_file(self, tmp_path):
        target = tmp_path / "target"
        target.mkdir()
        link = tmp_path / "link"
        link.write_text("not a link")
        findsert_symlink(target, link)
        assert link.is_symlink()
        assert os.readlink(link) == str(target)

    def test_replaces_directory_with_contents(self, tmp_path):
        target = tmp_path / "target"
        target.mkdir()
        link = tmp_path / "link"
        (link / "nested").mkdir(parents=True)
        (link / "nested" / "file.txt").write_text("data")
        findsert_symlink(target, link)
        assert link.is_symlink()
        assert os.readlink(link) == str(target)

    def test_lost_race_with_same_target_succeeds(self, tmp_path):
        target = tmp_path / "target"
        target.mkdir()
        link = tmp_path / "link"
        real_symlink = os.symlink

        def racing_symlink(src, dst):
            # another worker creates the same link first
            real_symlink(src, dst)
            raise FileExistsError(17, "File exists", str(dst))

        with patch("tempfns.core.findsert.os.symlink", side_effect=racing_symlink):
            assert findsert_symlink(target, link) is FindsertOutcome.FOUND
        assert os.readlink(link) == str(target)

    def test_lost_race_with_other_target_raises(self, tmp_path):
        target = tmp_path / "target"
        other = tmp_path / "other"
        target.mkdir()
        other.mkdir()
        link = tmp_path / "link"
        real_symlink = os.symlink

        def racing_symlink(src, dst):
            real_symlink(other, dst)
            raise FileExistsError(17, "File exists", str(dst))

        with patch("tempfns.core.findsert.os.symlink", side_effect=racing_symlink) as mock_symlink:
            with pytest.raises(InvariantViolationError) as exc_info:
                findsert_symlink(target, link)

        # exactly one attempt, no retry loop
        assert mock_symlink.call_count == 1
        assert exc_info.value.expected == str(target)
        assert exc_info.value.found == str(other)

    def test_lost_race_with_directory_being_removed_retries(self, tmp_path):
        target = tmp_path / "target"
        target.mkdir()
        link = tmp_path / "link"
        real_symlink = os.symlink
        calls = []

        def racing_symlink(src, dst):
            calls.append(dst)
            if len(calls) == 1:
                # a directory reappears in the gap, as when a peer is still
                # cleaning up the squatter it found
                os.makedirs(os.path.join(dst, "nested"))
                raise FileExistsError(17, "File exists", str(dst))
            return real_symlink(src, dst)

        with patch("tempfns.core.findsert.os.symlink", side_effect=racing_symlink):
            assert findsert_symlink(target, link) is FindsertOutcome.CREATED

        assert len(calls) == 2
        assert os.readlink(link) == str(target)
        assert sorted(p.name for p in tmp_path.iterdir()) == ["link", "target"]

    def test_path_that_stays_occupied_raises_after_one_retry(self, tmp_path):
        link = tmp_path / "link"

        def squatting_symlink(src, dst):
            os.makedirs(dst, exist_ok=True)
            raise FileExistsError(17, "File exists", str(dst))

        with patch("tempfns.core.findsert.os.symlink", side_effect=squatting_symlink) as mock_symlink:
            with pytest.raises(InvariantViolationError):
                findsert_symlink(tmp_path / "target", link)

        assert mock_symlink.call_count == 2

    def test_replacing_squatter_leaves_no_moved_aside_copy(self, tmp_path):
        target = tmp_path / "target"
        target.mkdir()
        link = tmp_path / "link"
        for i in range(20):
            (link / f"d{i}").mkdir(parents=True)

        findsert_symlink(target, link)

        assert sorted(p.name for p in tmp_path.iterdir()) == ["link", "target"]

    def test_other_os_errors_propagate(self, tmp_path):
        with patch("tempfns.core.findsert.os.symlink", side_effect=PermissionError("denied")):
            with pytest.raises(PermissionError):
                findsert_symlink(tmp_path / "t", tmp_path / "link")
