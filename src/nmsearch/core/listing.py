"""Expand a dependency folder into its packages, grouping scoped ones."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from nmsearch.config import DEFAULT_CONFIG, BrowserConfig
from nmsearch.core.entries import (
    EntryKind,
    NavigationItem,
    RawEntry,
    classify_entry,
    read_subdirectories,
)
from nmsearch.core.resolver import exists

logger = logging.getLogger(__name__)


def is_package_dir(directory: Path, config: BrowserConfig = DEFAULT_CONFIG) -> bool:
    """True if directory has a manifest (contents are not parsed)."""
    return exists(directory / config.manifest_name)


def _expand_subdirectory(entry: RawEntry, config: BrowserConfig) -> list[NavigationItem]:
    """One item for a package, or one item per child for a scope folder."""
    path = entry.parent / entry.name
    if is_package_dir(path, config):
        return [NavigationItem(display_name=entry.name, path=path, kind=EntryKind.DIRECTORY)]
    return [classify_entry(child, entry.name) for child in read_subdirectories(path)]


def list_dependencies(
    dependency_dir: Path,
    config: BrowserConfig = DEFAULT_CONFIG,
) -> list[NavigationItem]:
    """
    List the packages installed in a dependency folder.

    Every subdirectory holding a manifest is an unscoped package. Any other
    subdirectory is a scope (``@org``) and contributes its own subdirectories
    as ``@org/<name>`` items. Subdirectories are expanded concurrently; the
    result keeps subdirectory order, then child order within each scope.

    Raises:
        OSError: A directory could not be listed.
        UnexpectedFsError: A manifest existence check failed.
    """
    subdirectories = read_subdirectories(dependency_dir)
    if not subdirectories:
        return []
    workers = max(1, min(config.max_workers, len(subdirectories)))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        groups = list(pool.map(lambda e: _expand_subdirectory(e, config), subdirectories))
    items = [item for group in groups for item in group]
    logger.debug(
        "Listed %d item(s) from %d folder(s) in %s",
        len(items),
        len(subdirectories),
        dependency_dir,
    )
    return items
