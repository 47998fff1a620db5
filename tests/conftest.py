"""Shared fixtures."""

from pathlib import Path

import pytest


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Create a JavaScript project with a Vitest config and one test file."""
    root = tmp_path.resolve() / "project"
    (root / "src" / "nested").mkdir(parents=True)
    (root / "package.json").write_text('{"name": "project"}\n')
    (root / "vitest.config.ts").write_text("export default {}\n")
    (root / "src" / "math.test.js").write_text("test('adds 1+2', () => {})\n")
    (root / "src" / "nested" / "deep.test.ts").write_text("")
    return root
