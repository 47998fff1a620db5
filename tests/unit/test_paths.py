"""Tests for platform-aware path helpers."""

import sys
from pathlib import Path

import pytest

from vitest_bridge.paths import PathUtils

posix = PathUtils(is_windows=False)
windows = PathUtils(is_windows=True)


class TestSeparators:
    """Tests for sanitize and restore_native_separators."""

    def test_sanitize_is_identity_on_posix(self) -> None:
        """Leaves POSIX paths untouched."""
        assert posix.sanitize("/home/me/src/a.test.ts") == "/home/me/src/a.test.ts"

    def test_sanitize_converts_windows_path(self) -> None:
        """Uppercases the drive and switches to forward slashes."""
        assert windows.sanitize("c:\\Users\\me\\a.test.ts") == "C:/Users/me/a.test.ts"

    def test_restore_converts_to_backslashes(self) -> None:
        """Switches back to native separators on Windows."""
        assert (
            windows.restore_native_separators("c:/Users/me/a.test.ts")
            == "C:\\Users\\me\\a.test.ts"
        )

    def test_restore_is_identity_on_posix(self) -> None:
        """Leaves POSIX paths untouched."""
        assert posix.restore_native_separators("src/math.test.js") == "src/math.test.js"

    @pytest.mark.parametrize(
        "path",
        [
            "C:\\Users\\me\\project\\src\\a.test.ts",
            "D:\\a.test.ts",
            "\\\\server\\share\\a.test.ts",
        ],
    )
    def test_round_trip_on_windows(self, path: str) -> None:
        """Restoring a sanitized absolute path gives the original back."""
        assert windows.restore_native_separators(windows.sanitize(path)) == path

    def test_empty_path(self) -> None:
        """Handles empty strings."""
        assert windows.sanitize("") == ""
        assert windows.restore_native_separators("") == ""


class TestDirname:
    """Tests for dirname."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("/a/b/c", "/a/b"),
            ("/a/b/c/", "/a/b"),
            ("/a", "/"),
            ("/", "/"),
            (None, None),
            ("", None),
        ],
    )
    def test_posix(self, path: str | None, expected: str | None) -> None:
        """Strips the last segment and keeps the root."""
        assert posix.dirname(path) == expected

    def test_windows_drive(self) -> None:
        """Returns the drive when only the drive is left."""
        assert windows.dirname("C:/Users") == "C:"
        assert windows.dirname("C:/Users/me") == "C:/Users"

    def test_relative_single_segment(self) -> None:
        """Cannot ascend from a bare relative name."""
        assert posix.dirname("src") == "src"


class TestPredicates:
    """Tests for is_absolute, is_fs_root and path_separator."""

    @pytest.mark.parametrize(
        ("utils", "path", "expected"),
        [
            (posix, "/usr/lib", True),
            (posix, "usr/lib", False),
            (windows, "C:/Users", True),
            (windows, "c:\\Users", True),
            (windows, "\\\\server\\share", True),
            (windows, "Users\\me", False),
        ],
    )
    def test_is_absolute(self, utils: PathUtils, path: str, expected: bool) -> None:
        """Detects absolute paths per platform."""
        assert utils.is_absolute(path) is expected

    @pytest.mark.parametrize(
        ("utils", "path", "expected"),
        [
            (posix, "/", True),
            (posix, "/a", False),
            (posix, "", False),
            (windows, "C:", True),
            (windows, "C:/", False),
            (windows, "C:/Users", False),
        ],
    )
    def test_is_fs_root(self, utils: PathUtils, path: str, expected: bool) -> None:
        """Detects the filesystem root per platform."""
        assert utils.is_fs_root(path) is expected

    def test_path_separator(self) -> None:
        """Uses the platform's PATH list separator."""
        assert posix.path_separator == ":"
        assert windows.path_separator == ";"

    def test_detect_matches_platform(self) -> None:
        """Detects the running platform once."""
        assert PathUtils.detect().is_windows is (sys.platform == "win32")


def test_join_flattens_nested_segments() -> None:
    """Joins nested lists and tuples with forward slashes."""
    assert posix.join("a", ["b", ("c",)], "d.ts") == "a/b/c/d.ts"


class TestFilesystem:
    """Tests for helpers that touch the filesystem."""

    def test_exists(self, tmp_path: Path) -> None:
        """Reports files, directories and missing entries."""
        (tmp_path / "file.txt").write_text("x")

        assert posix.exists(str(tmp_path / "file.txt")) == "file"
        assert posix.exists(str(tmp_path)) == "directory"
        assert posix.exists(str(tmp_path / "missing")) is False

    def test_is_dir_and_is_file(self, tmp_path: Path) -> None:
        """Distinguishes files from directories."""
        (tmp_path / "file.txt").write_text("x")

        assert posix.is_dir(str(tmp_path))
        assert not posix.is_file(str(tmp_path))
        assert posix.is_file(str(tmp_path / "file.txt"))
        assert not posix.is_dir(str(tmp_path / "file.txt"))

    def test_traverse_parents_finds_match(self, tmp_path: Path) -> None:
        """Returns the first ancestor accepted by the callback."""
        root = tmp_path.resolve()
        test_file = root / "a" / "b" / "c.test.ts"
        test_file.parent.mkdir(parents=True)
        test_file.write_text("")
        visited: list[str] = []

        def callback(directory: str, resolved: str) -> bool:
            visited.append(directory)
            return directory == str(root / "a")

        found = posix.traverse_parents(str(test_file), callback)

        assert found == (str(root / "a"), str(test_file))
        assert visited == [str(root / "a" / "b"), str(root / "a")]

    def test_traverse_parents_stops_at_root(self, tmp_path: Path) -> None:
        """Tests the root and returns None when nothing matched."""
        visited: list[str] = []

        found = posix.traverse_parents(
            str(tmp_path), lambda directory, _: visited.append(directory)
        )

        assert found is None
        assert visited[-1] == "/"

    def test_traverse_parents_missing_path(self, tmp_path: Path) -> None:
        """Returns None when the path does not resolve."""
        found = posix.traverse_parents(str(tmp_path / "missing"), lambda *_: True)

        assert found is None

    def test_iterate_parents(self, tmp_path: Path) -> None:
        """Yields every ancestor up to and including the root."""
        root = tmp_path.resolve()
        nested = root / "a" / "b"
        nested.mkdir(parents=True)

        parents = list(posix.iterate_parents(str(nested)))

        assert parents[:2] == [str(root / "a"), str(root)]
        assert parents[-1] == "/"
        assert len(parents) == len(nested.parts) - 1

    def test_iterate_parents_is_restartable(self, tmp_path: Path) -> None:
        """Each call recomputes the ancestors from scratch."""
        first = list(posix.iterate_parents(str(tmp_path)))
        second = list(posix.iterate_parents(str(tmp_path)))

        assert first == second

    def test_iterate_parents_stops_without_progress(self) -> None:
        """Ends immediately for a bare relative name."""
        assert list(posix.iterate_parents("src")) == []

    def test_iterate_parents_stops_at_missing_ancestor(self, tmp_path: Path) -> None:
        """Ends at the first ancestor that does not resolve."""
        missing = tmp_path / "gone" / "deeper" / "file.ts"

        assert list(posix.iterate_parents(str(missing))) == []

    def test_is_descendant(self, tmp_path: Path) -> None:
        """Detects whether a root is an ancestor of a path."""
        root = tmp_path.resolve()
        test_file = root / "src" / "a.test.ts"
        test_file.parent.mkdir()
        test_file.write_text("")
        other = root / "other"
        other.mkdir()

        assert posix.is_descendant(str(root), str(test_file))
        assert not posix.is_descendant(str(other), str(test_file))
        assert not posix.is_descendant(str(root), None)
        assert not posix.is_descendant(str(root), "")
