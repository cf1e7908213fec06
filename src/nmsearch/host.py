"""Host actions used by the command: console prompt, open file, reveal file."""

from __future__ import annotations

import logging
import os
import platform
import shlex
import subprocess
import sys
from collections.abc import Callable
from pathlib import Path
from typing import TextIO

from nmsearch.core.entries import NavigationItem
from nmsearch.core.navigation import Choice

logger = logging.getLogger(__name__)

QUIT_WORDS = ("", "q", "quit", "exit")


def _filter_choices(options: list[Choice], query: str) -> list[Choice]:
    """Options whose label contains query (case-insensitive)."""
    needle = query.lower()
    return [opt for opt in options if needle in opt[0].lower()]


def console_prompt(
    options: list[Choice],
    *,
    read: Callable[[str], str] = input,
    out: TextIO | None = None,
) -> NavigationItem | None:
    """
    Numbered single-choice prompt on a plain terminal.

    Enter a number to pick, any other text to filter the list, an empty line
    or ``q`` to dismiss. A filter matching nothing shows the full list again.
    """
    out = out or sys.stdout
    shown = options
    while True:
        if not shown:
            print("  (empty)", file=out)
        for i, (label, _item) in enumerate(shown, start=1):
            print(f"  {i:>3}) {label}", file=out)
        try:
            answer = read("Select (number, text to filter, q to cancel): ").strip()
        except (EOFError, KeyboardInterrupt):
            print(file=out)
            return None
        if answer.lower() in QUIT_WORDS:
            return None
        if answer.isdecimal():
            index = int(answer)
            if 1 <= index <= len(shown):
                return shown[index - 1][1]
            print(f"No option {index}", file=out)
            continue
        filtered = _filter_choices(options, answer)
        if not filtered:
            print(f"No match for '{answer}'", file=out)
            shown = options
        else:
            shown = filtered


def _editor_command() -> list[str] | None:
    """Editor from VISUAL or EDITOR, split into argv."""
    for var in ("VISUAL", "EDITOR"):
        value = os.environ.get(var, "").strip()
        if value:
            return shlex.split(value)
    return None


def _system_open(path: Path) -> None:
    """Open a path with the system default application."""
    system = platform.system()
    if system == "Darwin":  # macOS
        subprocess.run(["open", str(path)], check=True)
    elif system == "Windows":
        subprocess.run(["start", "", str(path)], shell=True, check=True)
    else:  # Linux and others
        subprocess.run(["xdg-open", str(path)], check=True)


def open_file(path: Path) -> None:
    """
    Open a file in the user's editor.

    Uses VISUAL or EDITOR when set, otherwise the system default application.
    Raises OSError or CalledProcessError if the program cannot be run.
    """
    editor = _editor_command()
    if editor:
        logger.debug("Opening %s with %s", path, editor[0])
        subprocess.run([*editor, str(path)], check=True)
        return
    logger.debug("Opening %s with the system opener", path)
    _system_open(path)


def reveal_file(path: Path, *, in_file_manager: bool = False, out: TextIO | None = None) -> None:
    """
    Show where a file lives.

    Prints the path; with in_file_manager, also selects it in the platform
    file manager (Finder, Explorer, or the folder opened via xdg-open).
    """
    print(path, file=out or sys.stdout)
    if not in_file_manager:
        return
    system = platform.system()
    if system == "Darwin":
        subprocess.run(["open", "-R", str(path)], check=True)
    elif system == "Windows":
        subprocess.run(["explorer", f"/select,{path}"], check=False)
    else:
        subprocess.run(["xdg-open", str(path.parent)], check=True)


def print_error(message: str) -> None:
    """Report a failure on stderr."""
    print(f"Error: {message}", file=sys.stderr)
