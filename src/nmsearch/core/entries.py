"""Classify raw directory entries into navigation items."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class EntryKind(Enum):
    """What a directory entry is, as reported without following symlinks."""

    DIRECTORY = "dir"
    FILE = "file"
    SYMLINK = "symlink"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class RawEntry:
    """One directory entry as read from the filesystem.

    Type flags are ``None`` when they could not be determined.
    """

    name: str
    parent: Path
    is_dir: bool | None = None
    is_file: bool | None = None
    is_symlink: bool | None = None

    @classmethod
    def from_dir_entry(cls, entry: os.DirEntry, parent: Path) -> RawEntry:
        """Build from ``os.scandir`` output with lstat semantics."""
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
            is_file = entry.is_file(follow_symlinks=False)
            is_symlink = entry.is_symlink()
        except OSError:
            return cls(name=entry.name, parent=parent)
        return cls(
            name=entry.name,
            parent=parent,
            is_dir=is_dir,
            is_file=is_file,
            is_symlink=is_symlink,
        )


@dataclass(frozen=True)
class NavigationItem:
    """A selectable row: a package, directory, file or the ``..`` entry."""

    display_name: str
    path: Path
    kind: EntryKind
    is_parent: bool = False

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE

    def to_dict(self) -> dict:
        """Serialize to dict for JSON output."""
        return {
            "name": self.display_name,
            "path": str(self.path),
            "type": self.kind.value,
        }


def entry_kind(entry: RawEntry) -> EntryKind:
    """Map type flags to a kind; directory wins over file, file over symlink."""
    if entry.is_dir:
        return EntryKind.DIRECTORY
    if entry.is_file:
        return EntryKind.FILE
    if entry.is_symlink:
        return EntryKind.SYMLINK
    return EntryKind.UNKNOWN


def classify_entry(entry: RawEntry, parent_label: str | None = None) -> NavigationItem:
    """
    Turn a raw entry into a navigation item.

    With a parent label the display name becomes ``<label>/<name>``, which is
    how scoped packages (``@scope/pkg``) are shown.
    """
    name = f"{parent_label}/{entry.name}" if parent_label else entry.name
    return NavigationItem(
        display_name=name,
        path=entry.parent / entry.name,
        kind=entry_kind(entry),
    )


def read_entries(directory: Path) -> list[RawEntry]:
    """List all entries of a directory, sorted by name. Raises OSError."""
    with os.scandir(directory) as it:
        entries = [RawEntry.from_dir_entry(e, directory) for e in it]
    return sorted(entries, key=lambda e: e.name)


def read_subdirectories(directory: Path) -> list[RawEntry]:
    """List the immediate subdirectories of a directory (symlinks not followed)."""
    return [e for e in read_entries(directory) if e.is_dir]


def list_directory(directory: Path) -> list[NavigationItem]:
    """Plain listing: every entry classified with no parent label."""
    return [classify_entry(e) for e in read_entries(directory)]
