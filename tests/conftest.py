"""Shared fixtures: small node_modules trees on disk."""

from __future__ import annotations

from pathlib import Path

import pytest


def make_package(parent: Path, name: str, files: dict[str, str] | None = None) -> Path:
    """Create parent/name with a package.json and optional extra files."""
    pkg = parent / name
    pkg.mkdir(parents=True)
    (pkg / "package.json").write_text(f'{{"name": "{name}"}}')
    for rel, content in (files or {}).items():
        target = pkg / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
    return pkg


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """
    Workspace with node_modules holding ``foo`` and ``@scope/bar``, ``@scope/baz``.

    ``foo`` has ``index.js``, ``lib/util.js`` and its own nested
    ``node_modules/dep``.
    """
    ws = tmp_path / "ws"
    nm = ws / "node_modules"
    nm.mkdir(parents=True)
    foo = make_package(nm, "foo", {"index.js": "module.exports = 1;", "lib/util.js": ""})
    make_package(foo / "node_modules", "dep", {"main.js": ""})
    make_package(nm / "@scope", "bar", {"index.js": ""})
    make_package(nm / "@scope", "baz")
    return ws
