"""Drill-down navigation through a dependency folder.

The browser is a small state machine. ``select`` applies one user pick and
``load`` reads the directory a pick leads to; ``transition`` does both. The
functions are pure apart from directory reads, so the machine can be driven
by a blocking prompt (``run_navigation``) or by UI events (the Textual app).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path

from nmsearch.config import DEFAULT_CONFIG, BrowserConfig
from nmsearch.core.entries import EntryKind, NavigationItem, list_directory
from nmsearch.core.errors import NavigationReadError, NodeModulesError
from nmsearch.core.listing import list_dependencies

logger = logging.getLogger(__name__)

PARENT_LABEL = ".."

KIND_MARKERS = {
    EntryKind.DIRECTORY: "▸",
    EntryKind.FILE: "·",
    EntryKind.SYMLINK: "↪",
    EntryKind.UNKNOWN: "?",
}
PARENT_MARKER = "↑"

Choice = tuple[str, NavigationItem]
Prompt = Callable[[list[Choice]], NavigationItem | None]
Notify = Callable[[str], None]


class Phase(Enum):
    """Where the browser is in its lifecycle."""

    LISTING = "listing"
    SELECTED_DIRECTORY = "selected_directory"
    SELECTED_FILE = "selected_file"
    CANCELLED = "cancelled"


TERMINAL_PHASES = (Phase.SELECTED_FILE, Phase.CANCELLED)


@dataclass(frozen=True)
class NavigationState:
    """Current directory, its items, and how the user got there."""

    root: Path
    current_directory: Path
    items: tuple[NavigationItem, ...] = ()
    phase: Phase = Phase.LISTING
    selected_file: Path | None = None
    # Directories descended from, most recent last
    trail: tuple[Path, ...] = ()

    @property
    def done(self) -> bool:
        return self.phase in TERMINAL_PHASES

    @property
    def at_root(self) -> bool:
        """True at the top-level dependency folder."""
        return self.current_directory == self.root


def item_label(item: NavigationItem) -> str:
    """Prompt label: a kind marker followed by the display name."""
    marker = PARENT_MARKER if item.is_parent else KIND_MARKERS[item.kind]
    return f"{marker} {item.display_name}"


def parent_item(state: NavigationState) -> NavigationItem:
    """
    The synthetic ``..`` entry for a state below the root.

    It leads back to the directory the user came from. For plain directories
    that is the filesystem parent; for a scoped package picked from a
    dependency listing it is the dependency folder itself, skipping the
    ``@scope`` folder the user never saw.
    """
    target = state.trail[-1] if state.trail else state.current_directory.parent
    return NavigationItem(
        display_name=PARENT_LABEL,
        path=target,
        kind=EntryKind.DIRECTORY,
        is_parent=True,
    )


def choices(state: NavigationState) -> list[NavigationItem]:
    """Items to offer in the next prompt, ``..`` first when below the root."""
    if state.at_root:
        return list(state.items)
    return [parent_item(state), *state.items]


def is_dependency_dir(directory: Path, config: BrowserConfig = DEFAULT_CONFIG) -> bool:
    """True if directory is a dependency folder (top-level or nested)."""
    return directory.name.endswith(config.dependency_dir)


def read_items(directory: Path, config: BrowserConfig = DEFAULT_CONFIG) -> list[NavigationItem]:
    """
    Items for a directory: a package listing for dependency folders, a plain
    listing otherwise.

    Raises:
        NavigationReadError: The directory could not be read.
    """
    try:
        if is_dependency_dir(directory, config):
            return list_dependencies(directory, config)
        return list_directory(directory)
    except (OSError, NodeModulesError) as err:
        raise NavigationReadError(directory, err) from err


def start_navigation(
    dependency_dir: Path,
    config: BrowserConfig = DEFAULT_CONFIG,
) -> NavigationState:
    """Initial listing state at the top-level dependency folder."""
    items = read_items(dependency_dir, config)
    return NavigationState(
        root=dependency_dir,
        current_directory=dependency_dir,
        items=tuple(items),
    )


def select(state: NavigationState, picked: NavigationItem | None) -> NavigationState:
    """
    Apply one pick without touching the filesystem.

    None cancels. A file ends navigation. Anything else (directories, ``..``,
    symlinks, unknown entries) becomes the next directory to load.
    """
    if state.done:
        return state
    if picked is None:
        logger.debug("Navigation cancelled in %s", state.current_directory)
        return replace(state, phase=Phase.CANCELLED)
    if picked.is_file:
        logger.debug("Selected file %s", picked.path)
        return replace(state, phase=Phase.SELECTED_FILE, selected_file=picked.path)
    if picked.is_parent:
        trail = state.trail[:-1]
    else:
        trail = (*state.trail, state.current_directory)
    return replace(
        state,
        phase=Phase.SELECTED_DIRECTORY,
        current_directory=picked.path,
        items=(),
        trail=trail,
    )


def load(state: NavigationState, config: BrowserConfig = DEFAULT_CONFIG) -> NavigationState:
    """Read the directory of a SELECTED_DIRECTORY state and return to LISTING."""
    if state.phase is not Phase.SELECTED_DIRECTORY:
        return state
    items = read_items(state.current_directory, config)
    logger.debug("Entered %s (%d items)", state.current_directory, len(items))
    return replace(state, phase=Phase.LISTING, items=tuple(items))


def transition(
    state: NavigationState,
    picked: NavigationItem | None,
    config: BrowserConfig = DEFAULT_CONFIG,
) -> NavigationState:
    """
    Full step from one prompt to the next.

    Raises:
        NavigationReadError: The picked directory could not be read. The
            caller keeps ``state``, which is unchanged.
    """
    return load(select(state, picked), config)


def run_navigation(
    dependency_dir: Path,
    prompt: Prompt,
    notify: Notify | None = None,
    config: BrowserConfig = DEFAULT_CONFIG,
) -> Path | None:
    """
    Drive the browser with a blocking prompt until a file is picked.

    ``prompt`` receives ``(label, item)`` pairs and returns the chosen item,
    or None when dismissed. Read errors are passed to ``notify`` and the same
    listing is offered again.

    Returns:
        The chosen file's path, or None if the user cancelled.
    """
    state = start_navigation(dependency_dir, config)
    while not state.done:
        options = [(item_label(item), item) for item in choices(state)]
        picked = prompt(options)
        try:
            state = transition(state, picked, config)
        except NavigationReadError as err:
            logger.warning("%s", err)
            if notify is not None:
                notify(err.message)
    return state.selected_file
