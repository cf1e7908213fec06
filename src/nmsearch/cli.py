"""Command-line interface for nmsearch: browse node_modules and open a file."""

from __future__ import annotations

import argparse
import json
import logging
import subprocess
import sys
from functools import partial
from pathlib import Path

from nmsearch import __version__
from nmsearch.api import (
    find_project_root,
    list_installed_packages,
    prompt_navigator,
    search_node_modules,
)
from nmsearch.config import DEFAULT_DEPENDENCY_DIR, DEFAULT_MANIFEST_NAME, BrowserConfig
from nmsearch.core.errors import NodeModulesError
from nmsearch.core.navigation import item_label
from nmsearch.core.resolver import WorkspaceContext
from nmsearch.host import console_prompt, open_file, print_error, reveal_file


def _config_from_args(args: argparse.Namespace) -> BrowserConfig:
    return BrowserConfig(
        dependency_dir=getattr(args, "dependency_dir", None) or DEFAULT_DEPENDENCY_DIR,
        manifest_name=getattr(args, "manifest", None) or DEFAULT_MANIFEST_NAME,
    )


def _context_from_args(args: argparse.Namespace) -> WorkspaceContext:
    workspace = getattr(args, "workspace", None) or Path.cwd()
    return WorkspaceContext.capture(workspace, getattr(args, "active_file", None))


def _print_path(path: Path) -> None:
    print(path)


def cmd_browse(args: argparse.Namespace) -> int:
    """Browse the dependency folder and open the chosen file."""
    config = _config_from_args(args)
    context = _context_from_args(args)

    if args.plain or not sys.stdin.isatty():
        navigate = prompt_navigator(console_prompt, print_error, config=config)
    else:
        from nmsearch.tui.app import browse

        navigate = partial(browse, config=config)

    if args.print:
        opener, revealer = _print_path, None
    else:
        opener = open_file
        revealer = partial(reveal_file, in_file_manager=args.reveal)

    errors: list[str] = []

    def notify(message: str) -> None:
        errors.append(message)
        print_error(message)

    try:
        search_node_modules(
            context,
            navigate,
            open_file=opener,
            reveal_file=revealer,
            notify=notify,
            config=config,
        )
    except (OSError, subprocess.CalledProcessError) as e:
        print_error(f"Could not open file: {e}")
        return 1
    return 1 if errors else 0


def cmd_root(args: argparse.Namespace) -> int:
    """Show which project directory and dependency folder would be browsed."""
    config = _config_from_args(args)
    context = _context_from_args(args)
    try:
        root = find_project_root(context, config=config)
    except NodeModulesError as e:
        print_error(e.message)
        return 1

    folder = root / config.dependency_dir
    if args.json:
        data = {"project": str(root), "dependency_dir": str(folder), **context.to_dict()}
        print(json.dumps(data, indent=2))
    else:
        print(f"Project: {root}")
        print(f"Dependencies: {folder}")
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """List the top-level packages of the dependency folder."""
    config = _config_from_args(args)
    context = _context_from_args(args)
    try:
        items = list_installed_packages(context, config=config)
    except NodeModulesError as e:
        print_error(e.message)
        return 1
    except OSError as e:
        print_error(f"Cannot list dependencies: {e}")
        return 1

    if args.json:
        print(json.dumps([item.to_dict() for item in items], indent=2))
        return 0
    if not items:
        print("No packages installed.")
        return 0
    print(f"Found {len(items)} package(s):\n")
    for item in items:
        if args.verbose:
            print(f"  {item_label(item)}: {item.path}")
        else:
            print(f"  {item_label(item)}")
    return 0


def _add_workspace_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-w",
        "--workspace",
        metavar="PATH",
        help="Workspace root (default: current directory)",
    )
    parser.add_argument(
        "-a",
        "--active-file",
        metavar="FILE",
        help="File being edited; picks the monorepo sub-project when the root has no node_modules",
    )
    # Same flag as the global one; SUPPRESS keeps "nmsearch -v list" working
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Verbose output and debug logging",
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the nmsearch CLI."""
    parser = argparse.ArgumentParser(
        prog="nmsearch",
        description="Browse node_modules interactively and open a file.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output and debug logging",
    )
    parser.add_argument(
        "--dependency-dir",
        metavar="NAME",
        default=DEFAULT_DEPENDENCY_DIR,
        help=f"Dependency folder name (default: {DEFAULT_DEPENDENCY_DIR})",
    )
    parser.add_argument(
        "--manifest",
        metavar="NAME",
        default=DEFAULT_MANIFEST_NAME,
        help=f"Package manifest file name (default: {DEFAULT_MANIFEST_NAME})",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # nmsearch browse (default if no command)
    browse_parser = subparsers.add_parser(
        "browse",
        help="Browse node_modules and open a file",
        description="Pick a package, drill down into it, and open the file you choose.",
    )
    _add_workspace_args(browse_parser)
    browse_parser.add_argument(
        "--plain",
        action="store_true",
        help="Use a numbered console prompt instead of the terminal UI",
    )
    browse_parser.add_argument(
        "--print",
        action="store_true",
        help="Print the chosen path instead of opening it",
    )
    browse_parser.add_argument(
        "--reveal",
        action="store_true",
        help="Also show the chosen file in the system file manager",
    )
    browse_parser.set_defaults(func=cmd_browse)

    # nmsearch root
    root_parser = subparsers.add_parser(
        "root",
        help="Show which node_modules folder would be browsed",
        description="Resolve the project directory from the workspace and active file.",
    )
    _add_workspace_args(root_parser)
    root_parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )
    root_parser.set_defaults(func=cmd_root)

    # nmsearch list
    list_parser = subparsers.add_parser(
        "list",
        help="List installed top-level packages",
        description="List packages in node_modules, showing scoped ones as @scope/name.",
    )
    _add_workspace_args(list_parser)
    list_parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )
    list_parser.set_defaults(func=cmd_list)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        return cmd_browse(
            argparse.Namespace(
                workspace=None,
                active_file=None,
                plain=False,
                print=False,
                reveal=False,
                dependency_dir=args.dependency_dir,
                manifest=args.manifest,
                verbose=args.verbose,
            )
        )

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
