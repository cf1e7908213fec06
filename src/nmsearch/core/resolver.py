"""Locate the project directory whose node_modules should be browsed."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from nmsearch.config import DEFAULT_CONFIG, BrowserConfig
from nmsearch.core.errors import (
    NoActiveFileError,
    NoWorkspaceError,
    UnexpectedFsError,
    UnsupportedLayoutError,
)

logger = logging.getLogger(__name__)


def _normalize(path: str | Path) -> Path:
    """Absolute path with `.` and `..` removed; symlinks are kept as given."""
    return Path(os.path.abspath(Path(path).expanduser()))


@dataclass(frozen=True)
class WorkspaceContext:
    """Snapshot of the host state taken once when a command starts."""

    root_path: Path | None
    active_file_path: Path | None = None

    @classmethod
    def capture(
        cls,
        root_path: str | Path | None,
        active_file_path: str | Path | None = None,
    ) -> WorkspaceContext:
        """Build a context from raw paths, made absolute with `..` collapsed."""
        root = _normalize(root_path) if root_path else None
        active = _normalize(active_file_path) if active_file_path else None
        return cls(root_path=root, active_file_path=active)

    def to_dict(self) -> dict:
        """Serialize to dict for JSON output."""
        return {
            "root_path": str(self.root_path) if self.root_path else None,
            "active_file_path": str(self.active_file_path) if self.active_file_path else None,
        }


def exists(path: Path) -> bool:
    """
    True if something exists at path.

    A missing entry is a normal False result. Any other failure (permission
    denied, I/O error, ...) raises UnexpectedFsError.
    """
    try:
        os.stat(path)
    except FileNotFoundError:
        return False
    except OSError as err:
        raise UnexpectedFsError(path, err) from err
    return True


def has_dependency_dir(directory: Path, config: BrowserConfig = DEFAULT_CONFIG) -> bool:
    """True if directory contains a dependency folder."""
    return exists(directory / config.dependency_dir)


def _workspace_root(context: WorkspaceContext) -> Path:
    root = context.root_path
    if root is None:
        raise NoWorkspaceError()
    if not root.is_dir():
        raise NoWorkspaceError(root)
    return root


def _sub_project_of(root: Path, active_file: Path) -> Path:
    """First directory component of active_file below root, as an absolute path."""
    try:
        relative = active_file.relative_to(root)
    except ValueError:
        raise UnsupportedLayoutError(
            root,
            f"Active file {active_file} is outside the workspace {root}",
        ) from None
    if len(relative.parts) < 2:
        raise UnsupportedLayoutError(
            root,
            f"Active file {active_file} is not inside a sub-project of {root}",
        )
    return root / relative.parts[0]


def resolve_dependency_root(
    context: WorkspaceContext,
    config: BrowserConfig = DEFAULT_CONFIG,
) -> Path:
    """
    Return the directory whose dependency folder should be browsed.

    The workspace root wins when it has its own dependency folder. Otherwise
    the first directory of the active file's path below the root is treated
    as a monorepo sub-project and must have a dependency folder itself.

    Raises:
        NoWorkspaceError: No workspace root is configured.
        NoActiveFileError: Root has no dependency folder and no file is active.
        UnsupportedLayoutError: The inferred sub-project has no dependency folder.
        UnexpectedFsError: An existence check failed for another reason.
    """
    root = _workspace_root(context)
    if has_dependency_dir(root, config):
        logger.debug("Using workspace root %s", root)
        return root

    active_file = context.active_file_path
    if active_file is None:
        raise NoActiveFileError(root, config.dependency_dir)

    sub_project = _sub_project_of(root, active_file)
    if not has_dependency_dir(sub_project, config):
        raise UnsupportedLayoutError(sub_project)
    logger.debug("Using sub-project %s (from active file %s)", sub_project, active_file)
    return sub_project


def dependency_folder(
    context: WorkspaceContext,
    config: BrowserConfig = DEFAULT_CONFIG,
) -> Path:
    """Absolute path of the dependency folder to browse."""
    return resolve_dependency_root(context, config) / config.dependency_dir
