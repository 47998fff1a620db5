"""Platform-aware path helpers used for project root resolution."""

import os
import re
import stat
import sys
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Literal

MAX_TRAVERSAL_DEPTH = 100

_TRAILING_SEPARATOR = re.compile(r"/\Z")
_LAST_SEGMENT = re.compile(r"/([^/]+)\Z")
_DRIVE_ROOT = re.compile(r"^[A-Za-z]:\Z")
_DRIVE_PREFIX = re.compile(r"^[A-Za-z]:")

type EntryKind = Literal["file", "directory", False]
type ParentCallback = Callable[[str, str], object]


def flatten(segments: Iterable[object]) -> Iterator[str]:
    """Yield the leaves of arbitrarily nested lists and tuples as strings."""
    for segment in segments:
        if isinstance(segment, list | tuple):
            yield from flatten(segment)
        else:
            yield str(segment)


@dataclass(frozen=True, kw_only=True)
class PathUtils:
    """Path operations bound to one platform flavour.

    All paths are handled in their forward-slash form; ``sanitize`` and
    ``restore_native_separators`` convert at the boundaries on Windows.
    """

    is_windows: bool

    @classmethod
    def detect(cls) -> "PathUtils":
        """Create path utilities for the running platform."""
        return cls(is_windows=sys.platform == "win32")

    @property
    def path_separator(self) -> str:
        """Separator used in PATH-like environment variables."""
        return ";" if self.is_windows else ":"

    def sanitize(self, path: str) -> str:
        """Normalize a native path to its forward-slash form."""
        if self.is_windows and path:
            path = path[0].upper() + path[1:]
            path = path.replace("\\", "/")
        return path

    def restore_native_separators(self, path: str) -> str:
        """Convert a forward-slash path back to native separators."""
        if self.is_windows and path:
            path = path[0].upper() + path[1:]
            path = path.replace("/", "\\")
        return path

    def exists(self, path: str) -> EntryKind:
        """Return the kind of entry at ``path``, or False when there is none."""
        try:
            mode = os.stat(path).st_mode
        except (OSError, ValueError):
            return False
        if stat.S_ISDIR(mode):
            return "directory"
        if stat.S_ISREG(mode):
            return "file"
        return False

    def is_dir(self, path: str) -> bool:
        return self.exists(path) == "directory"

    def is_file(self, path: str) -> bool:
        return self.exists(path) == "file"

    def is_absolute(self, path: str) -> bool:
        if self.is_windows:
            return bool(_DRIVE_PREFIX.match(path)) or path.startswith("\\\\")
        return path.startswith("/")

    def is_fs_root(self, path: str) -> bool:
        if self.is_windows:
            return bool(_DRIVE_ROOT.match(path))
        return path == "/"

    def dirname(self, path: str | None) -> str | None:
        """Strip the last segment of ``path``.

        Returns None for an empty path, and the filesystem root when nothing
        would be left.
        """
        if not path:
            return None
        result = _LAST_SEGMENT.sub("", _TRAILING_SEPARATOR.sub("", path))
        if not result:
            if self.is_windows:
                return path[:2].upper()
            return "/"
        return result

    def join(self, *segments: object) -> str:
        """Join (possibly nested) segments with forward slashes."""
        return "/".join(flatten(segments))

    def realpath(self, path: str) -> str | None:
        """Resolve ``path`` to a canonical absolute path, None if it does not exist."""
        try:
            resolved = os.path.realpath(path, strict=True)
        except (OSError, ValueError):
            return None
        return self.sanitize(resolved)

    def traverse_parents(
        self, path: str, callback: ParentCallback
    ) -> tuple[str, str] | None:
        """Ascend from ``path`` calling ``callback(dir, resolved_path)`` on each parent.

        Args:
            path: Starting path, resolved to its canonical form first
            callback: Called for each ancestor; a truthy return stops the walk

        Returns:
            The matching directory and the resolved path, or None when no
            ancestor matched before the filesystem root

        """
        resolved = self.realpath(path)
        directory = resolved
        for _ in range(MAX_TRAVERSAL_DEPTH):
            directory = self.dirname(directory)
            if directory is None:
                return None
            if callback(directory, resolved):
                return directory, resolved
            if self.is_fs_root(directory):
                break
        return None

    def iterate_parents(self, path: str) -> Iterator[str]:
        """Yield the ancestors of ``path`` that still resolve on disk."""
        current: str | None = path
        while current and not self.is_fs_root(current):
            parent = self.dirname(current)
            if parent is None or parent == current or self.realpath(parent) is None:
                return
            yield parent
            current = parent

    def is_descendant(self, root: str, path: str | None) -> bool:
        """Check whether ``root`` is one of the ancestors of ``path``."""
        if not path:
            return False
        found = self.traverse_parents(path, lambda directory, _: directory == root)
        return found is not None and found[0] == root


paths = PathUtils.detect()
