"""Public API: use nmsearch from Python or from other tools."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from nmsearch.config import DEFAULT_CONFIG, BrowserConfig
from nmsearch.core.entries import NavigationItem
from nmsearch.core.errors import NodeModulesError
from nmsearch.core.listing import list_dependencies
from nmsearch.core.navigation import Notify, Prompt, run_navigation
from nmsearch.core.resolver import (
    WorkspaceContext,
    dependency_folder,
    resolve_dependency_root,
)

logger = logging.getLogger(__name__)

Navigator = Callable[[Path], Path | None]


def find_project_root(
    context: WorkspaceContext,
    *,
    config: BrowserConfig = DEFAULT_CONFIG,
) -> Path:
    """
    Directory whose dependency folder should be browsed.

    The workspace root when it has a node_modules folder, otherwise the
    monorepo sub-project containing the active file.
    Raises a NodeModulesError subclass when neither applies.
    """
    return resolve_dependency_root(context, config)


def list_installed_packages(
    context: WorkspaceContext,
    *,
    config: BrowserConfig = DEFAULT_CONFIG,
) -> list[NavigationItem]:
    """
    Top-level packages of the resolved dependency folder.

    Scoped packages are returned as ``@scope/name`` items.
    """
    return list_dependencies(dependency_folder(context, config), config)


def prompt_navigator(
    prompt: Prompt,
    notify: Notify | None = None,
    *,
    config: BrowserConfig = DEFAULT_CONFIG,
) -> Navigator:
    """Navigator that drives the browser with a blocking prompt callable."""

    def navigate(folder: Path) -> Path | None:
        return run_navigation(folder, prompt, notify, config)

    return navigate


def search_node_modules(
    context: WorkspaceContext,
    navigate: Navigator,
    *,
    open_file: Callable[[Path], object],
    reveal_file: Callable[[Path], object] | None = None,
    notify: Notify | None = None,
    config: BrowserConfig = DEFAULT_CONFIG,
) -> Path | None:
    """
    Browse the dependency folder and open the file the user picks.

    Args:
        context: Workspace root and active file, captured at invocation.
        navigate: Runs the interactive browser from a dependency folder and
            returns the chosen file, or None when cancelled.
        open_file: Called once with the chosen file.
        reveal_file: Called once right after open_file; failures are logged
            and ignored.
        notify: Receives the message of an error that ended the command.
        config: Folder and manifest names.

    Returns:
        The opened file, or None if cancelled or an error was reported.
    """
    try:
        folder = dependency_folder(context, config)
        chosen = navigate(folder)
    except NodeModulesError as err:
        logger.debug("Command failed: %r", err)
        if notify is not None:
            notify(err.message)
        return None

    if chosen is None:
        return None

    open_file(chosen)
    if reveal_file is not None:
        try:
            reveal_file(chosen)
        except Exception as err:  # reveal is best-effort
            logger.warning("Could not reveal %s: %s", chosen, err)
    return chosen
