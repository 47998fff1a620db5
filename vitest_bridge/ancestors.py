"""Find the nearest ancestor directory holding a marker file or directory."""

import glob
from collections.abc import Callable

from vitest_bridge.paths import MAX_TRAVERSAL_DEPTH, PathUtils, flatten, paths

type Predicate = Callable[[str], bool]
type Resolver = Callable[[str], str | None]


def search_ancestors(
    start_path: str, predicate: Predicate, *, path_utils: PathUtils = paths
) -> str | None:
    """Return ``start_path`` or its nearest ancestor accepted by ``predicate``.

    The walk gives up after a fixed number of steps so a broken tree or a
    symlink cycle cannot keep it running.
    """
    if predicate(start_path):
        return start_path

    guard = MAX_TRAVERSAL_DEPTH
    for path in path_utils.iterate_parents(start_path):
        guard -= 1
        if guard == 0:
            return None
        if predicate(path):
            return path
    return None


def root_pattern(*patterns: str | list[str], path_utils: PathUtils = paths) -> Resolver:
    """Build a resolver returning the nearest ancestor matching any glob pattern.

    Args:
        patterns: Glob patterns evaluated relative to each candidate directory
        path_utils: Path helpers to resolve with

    Returns:
        A function mapping a start path to the matching directory, or None

    """
    flat_patterns = list(flatten(patterns))

    def matcher(path: str) -> bool:
        for pattern in flat_patterns:
            for match in glob.glob(path_utils.join(glob.escape(path), pattern)):
                if path_utils.exists(match):
                    return True
        return False

    def resolve(start_path: str) -> str | None:
        return search_ancestors(start_path, matcher, path_utils=path_utils)

    return resolve


def find_git_ancestor(start_path: str, *, path_utils: PathUtils = paths) -> str | None:
    """Find the version control root.

    ``.git`` is a file in worktrees and a directory in regular checkouts.
    """
    return search_ancestors(
        start_path,
        lambda path: bool(path_utils.exists(path_utils.join(path, ".git"))),
        path_utils=path_utils,
    )


def find_node_modules_ancestor(
    start_path: str, *, path_utils: PathUtils = paths
) -> str | None:
    """Find the nearest directory with installed dependencies."""
    return search_ancestors(
        start_path,
        lambda path: path_utils.is_dir(path_utils.join(path, "node_modules")),
        path_utils=path_utils,
    )


def find_package_json_ancestor(
    start_path: str, *, path_utils: PathUtils = paths
) -> str | None:
    """Find the nearest directory with a package manifest."""
    return search_ancestors(
        start_path,
        lambda path: path_utils.is_file(path_utils.join(path, "package.json")),
        path_utils=path_utils,
    )
