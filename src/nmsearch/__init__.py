"""nmsearch: browse a project's node_modules and open a file (library, TUI, CLI)."""

from importlib.metadata import version, PackageNotFoundError

from nmsearch.api import (
    find_project_root,
    list_installed_packages,
    prompt_navigator,
    search_node_modules,
)
from nmsearch.config import BrowserConfig
from nmsearch.core.resolver import WorkspaceContext

__all__ = [
    "find_project_root",
    "list_installed_packages",
    "prompt_navigator",
    "search_node_modules",
    "BrowserConfig",
    "WorkspaceContext",
    "__version__",
]

try:
    __version__ = version("nmsearch")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed as package
