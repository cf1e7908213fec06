"""Core library: dependency-folder resolution, entry classification, listing, navigation."""

from nmsearch.core.entries import (
    EntryKind,
    NavigationItem,
    RawEntry,
    classify_entry,
    list_directory,
    read_entries,
)
from nmsearch.core.errors import (
    ErrorKind,
    NavigationReadError,
    NoActiveFileError,
    NodeModulesError,
    NoWorkspaceError,
    UnexpectedFsError,
    UnsupportedLayoutError,
)
from nmsearch.core.listing import list_dependencies
from nmsearch.core.navigation import (
    NavigationState,
    Phase,
    choices,
    run_navigation,
    start_navigation,
    transition,
)
from nmsearch.core.resolver import (
    WorkspaceContext,
    dependency_folder,
    resolve_dependency_root,
)

__all__ = [
    "EntryKind",
    "NavigationItem",
    "RawEntry",
    "classify_entry",
    "list_directory",
    "read_entries",
    "ErrorKind",
    "NavigationReadError",
    "NoActiveFileError",
    "NodeModulesError",
    "NoWorkspaceError",
    "UnexpectedFsError",
    "UnsupportedLayoutError",
    "list_dependencies",
    "NavigationState",
    "Phase",
    "choices",
    "run_navigation",
    "start_navigation",
    "transition",
    "WorkspaceContext",
    "dependency_folder",
    "resolve_dependency_root",
]
