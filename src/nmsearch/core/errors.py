"""Error taxonomy for dependency-folder resolution and navigation.

Resolution errors (no workspace, no active file, unsupported layout,
unexpected filesystem failures) abort a command before anything is shown.
``NavigationReadError`` is raised while browsing and is recoverable: the
caller reports it and prompts again from the same place.

The native ``OSError`` is chained with ``raise X(...) from err`` and is also
kept on ``cause`` so front ends can show it without digging.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class ErrorKind(Enum):
    """Machine-readable category of a :class:`NodeModulesError`."""

    NO_WORKSPACE = "no_workspace"
    NO_ACTIVE_FILE = "no_active_file"
    UNSUPPORTED_LAYOUT = "unsupported_layout"
    UNEXPECTED_FS = "unexpected_fs"
    NAVIGATION_READ = "navigation_read"


class NodeModulesError(Exception):
    """Base for all nmsearch errors.

    Attributes:
        kind: Category of the failure.
        path: Filesystem path the failure is about, if any.
        cause: Underlying exception, if any.
    """

    kind: ErrorKind = ErrorKind.UNEXPECTED_FS

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.cause = cause

    @property
    def message(self) -> str:
        return str(self)

    def __repr__(self) -> str:
        parts = [repr(str(self))]
        if self.path is not None:
            parts.append(f"path={str(self.path)!r}")
        if self.cause is not None:
            parts.append(f"cause={self.cause!r}")
        return f"{type(self).__name__}({', '.join(parts)})"


class NoWorkspaceError(NodeModulesError):
    """No workspace root is configured."""

    kind = ErrorKind.NO_WORKSPACE

    def __init__(self, path: Path | None = None) -> None:
        if path is None:
            message = "No workspace detected"
        else:
            message = f"Workspace is not a directory: {path}"
        super().__init__(message, path=path)


class NoActiveFileError(NodeModulesError):
    """The workspace root has no dependency folder and no file is active."""

    kind = ErrorKind.NO_ACTIVE_FILE

    def __init__(self, workspace: Path, dependency_dir: str) -> None:
        super().__init__(
            f"Unable to locate a {dependency_dir} directory: none in {workspace} "
            "and no active file to pick a sub-project from",
            path=workspace,
        )


class UnsupportedLayoutError(NodeModulesError):
    """The inferred sub-project has no dependency folder of its own."""

    kind = ErrorKind.UNSUPPORTED_LAYOUT

    def __init__(self, path: Path, reason: str | None = None) -> None:
        message = reason or (
            f"No dependency folder in {path}: only one level of monorepo nesting is supported"
        )
        super().__init__(message, path=path)


class UnexpectedFsError(NodeModulesError):
    """A filesystem access failed with something other than "not found"."""

    kind = ErrorKind.UNEXPECTED_FS

    def __init__(self, path: Path, cause: BaseException) -> None:
        super().__init__(f"Unexpected error accessing {path}: {cause}", path=path, cause=cause)


class NavigationReadError(NodeModulesError):
    """A directory could not be read while browsing."""

    kind = ErrorKind.NAVIGATION_READ

    def __init__(self, path: Path, cause: BaseException) -> None:
        detail = cause.message if isinstance(cause, NodeModulesError) else str(cause)
        super().__init__(f"Cannot open {path}: {detail}", path=path, cause=cause)
