"""Tests for nmsearch.core.resolver module."""

from __future__ import annotations

from pathlib import Path
from unittest import mock

import pytest

from nmsearch.config import BrowserConfig
from nmsearch.core.errors import (
    NoActiveFileError,
    NoWorkspaceError,
    UnexpectedFsError,
    UnsupportedLayoutError,
)
from nmsearch.core.resolver import (
    WorkspaceContext,
    dependency_folder,
    exists,
    has_dependency_dir,
    resolve_dependency_root,
)


@pytest.fixture
def monorepo(tmp_path: Path) -> Path:
    """/ws without a root node_modules, holding pkgA/src/index.ts."""
    ws = tmp_path / "ws"
    src = ws / "pkgA" / "src"
    src.mkdir(parents=True)
    (src / "index.ts").write_text("export {};")
    return ws


class TestExists:
    """Tests for the existence check."""

    def test_present(self, tmp_path: Path) -> None:
        assert exists(tmp_path) is True

    def test_missing(self, tmp_path: Path) -> None:
        assert exists(tmp_path / "nope") is False

    def test_other_error_is_fatal(self, tmp_path: Path) -> None:
        denied = PermissionError(13, "Permission denied")
        with mock.patch("nmsearch.core.resolver.os.stat", side_effect=denied):
            with pytest.raises(UnexpectedFsError) as exc_info:
                exists(tmp_path / "node_modules")
        assert exc_info.value.cause is denied
        assert exc_info.value.__cause__ is denied

    def test_has_dependency_dir_custom_name(self, tmp_path: Path) -> None:
        (tmp_path / "vendor").mkdir()
        assert has_dependency_dir(tmp_path, BrowserConfig(dependency_dir="vendor")) is True
        assert has_dependency_dir(tmp_path) is False


class TestWorkspaceContext:
    """Tests for WorkspaceContext.capture."""

    def test_capture_absolute(self, tmp_path: Path) -> None:
        ctx = WorkspaceContext.capture(str(tmp_path), str(tmp_path / "a.js"))
        assert ctx.root_path == tmp_path
        assert ctx.active_file_path == tmp_path / "a.js"

    def test_capture_collapses_dot_dot(self, monorepo: Path) -> None:
        ctx = WorkspaceContext.capture(monorepo / "pkgA" / "src" / ".." / "..", "../x.js")
        assert ctx.root_path == monorepo
        assert ".." not in ctx.active_file_path.parts

    def test_capture_none(self) -> None:
        ctx = WorkspaceContext.capture(None)
        assert ctx.root_path is None
        assert ctx.active_file_path is None

    def test_to_dict(self, tmp_path: Path) -> None:
        d = WorkspaceContext(root_path=tmp_path).to_dict()
        assert d == {"root_path": str(tmp_path), "active_file_path": None}


class TestResolveDependencyRoot:
    """Tests for resolve_dependency_root."""

    def test_root_node_modules(self, workspace: Path) -> None:
        ctx = WorkspaceContext(root_path=workspace)
        assert resolve_dependency_root(ctx) == workspace

    def test_root_wins_regardless_of_active_file(self, workspace: Path) -> None:
        ctx = WorkspaceContext(
            root_path=workspace,
            active_file_path=workspace / "node_modules" / "foo" / "index.js",
        )
        assert resolve_dependency_root(ctx) == workspace

    def test_no_workspace(self) -> None:
        with pytest.raises(NoWorkspaceError):
            resolve_dependency_root(WorkspaceContext(root_path=None))

    def test_workspace_not_a_directory(self, tmp_path: Path) -> None:
        with pytest.raises(NoWorkspaceError):
            resolve_dependency_root(WorkspaceContext(root_path=tmp_path / "missing"))

    def test_no_active_file(self, monorepo: Path) -> None:
        with pytest.raises(NoActiveFileError):
            resolve_dependency_root(WorkspaceContext(root_path=monorepo))

    def test_sub_project(self, monorepo: Path) -> None:
        (monorepo / "pkgA" / "node_modules").mkdir()
        ctx = WorkspaceContext(
            root_path=monorepo,
            active_file_path=monorepo / "pkgA" / "src" / "index.ts",
        )
        assert resolve_dependency_root(ctx) == monorepo / "pkgA"

    def test_sub_project_from_relative_paths(self, monorepo: Path, monkeypatch) -> None:
        (monorepo / "pkgA" / "node_modules").mkdir()
        monkeypatch.chdir(monorepo / "pkgA" / "src")
        ctx = WorkspaceContext.capture("../..", "index.ts")
        assert resolve_dependency_root(ctx) == monorepo / "pkgA"

    def test_sub_project_without_node_modules(self, monorepo: Path) -> None:
        ctx = WorkspaceContext(
            root_path=monorepo,
            active_file_path=monorepo / "pkgA" / "src" / "index.ts",
        )
        with pytest.raises(UnsupportedLayoutError) as exc_info:
            resolve_dependency_root(ctx)
        assert exc_info.value.path == monorepo / "pkgA"

    def test_active_file_at_root(self, monorepo: Path) -> None:
        ctx = WorkspaceContext(root_path=monorepo, active_file_path=monorepo / "README.md")
        with pytest.raises(UnsupportedLayoutError):
            resolve_dependency_root(ctx)

    def test_active_file_outside_workspace(self, monorepo: Path, tmp_path: Path) -> None:
        ctx = WorkspaceContext(root_path=monorepo, active_file_path=tmp_path / "other" / "x.js")
        with pytest.raises(UnsupportedLayoutError):
            resolve_dependency_root(ctx)

    def test_dependency_folder(self, workspace: Path) -> None:
        ctx = WorkspaceContext(root_path=workspace)
        assert dependency_folder(ctx) == workspace / "node_modules"
