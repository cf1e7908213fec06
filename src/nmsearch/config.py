"""Tunables for dependency-folder discovery and listing."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_DEPENDENCY_DIR = "node_modules"
DEFAULT_MANIFEST_NAME = "package.json"
# Listing expands each top-level folder on its own thread
DEFAULT_MAX_WORKERS = 8


@dataclass(frozen=True)
class BrowserConfig:
    """Names and limits used when locating and expanding dependency folders."""

    dependency_dir: str = DEFAULT_DEPENDENCY_DIR
    manifest_name: str = DEFAULT_MANIFEST_NAME
    max_workers: int = DEFAULT_MAX_WORKERS


DEFAULT_CONFIG = BrowserConfig()
