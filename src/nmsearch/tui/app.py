"""Textual TUI for picking a file inside node_modules."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header, Input, OptionList, Static
from textual.widgets.option_list import Option

from nmsearch.config import DEFAULT_CONFIG, BrowserConfig
from nmsearch.core.entries import EntryKind, NavigationItem
from nmsearch.core.errors import NavigationReadError
from nmsearch.core.navigation import (
    NavigationState,
    choices,
    item_label,
    start_navigation,
    transition,
)

# Colors per entry kind (rich style strings)
COLOR_DIRECTORY = "bold cyan"
COLOR_FILE = "white"
COLOR_SYMLINK = "magenta"
COLOR_UNKNOWN = "dim"
COLOR_PARENT = "bold yellow"

KIND_COLORS = {
    EntryKind.DIRECTORY: COLOR_DIRECTORY,
    EntryKind.FILE: COLOR_FILE,
    EntryKind.SYMLINK: COLOR_SYMLINK,
    EntryKind.UNKNOWN: COLOR_UNKNOWN,
}


def filter_items(items: list[NavigationItem], query: str) -> list[NavigationItem]:
    """Items whose display name contains query, case-insensitive. ``..`` always stays."""
    needle = query.strip().lower()
    if not needle:
        return list(items)
    return [i for i in items if i.is_parent or needle in i.display_name.lower()]


def location_text(state: NavigationState) -> str:
    """Current directory relative to the project holding the top dependency folder."""
    base = state.root.parent
    try:
        return str(state.current_directory.relative_to(base))
    except ValueError:
        return str(state.current_directory)


def styled_label(item: NavigationItem) -> Text:
    """Option label, colored by kind. Plain Text so names are never read as markup."""
    style = COLOR_PARENT if item.is_parent else KIND_COLORS[item.kind]
    return Text(item_label(item), style=style)


class NodeModulesApp(App[Path | None]):
    """Terminal UI to browse a dependency folder and pick one file."""

    TITLE = "nmsearch"
    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("ctrl+b", "go_up", "Up", priority=True),
        Binding("down", "cursor_down", "Down", show=False),
        Binding("up", "cursor_up", "Up", show=False),
    ]

    DEFAULT_CSS = """
    #location {
        padding: 0 1;
        color: $text-muted;
    }
    #filter {
        margin: 0 1;
    }
    #options {
        height: 1fr;
    }
    """

    def __init__(
        self,
        state: NavigationState,
        config: BrowserConfig = DEFAULT_CONFIG,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self._state = state
        self._config = config
        self._visible: list[NavigationItem] = []

    @property
    def state(self) -> NavigationState:
        return self._state

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        with Vertical():
            yield Static("", id="location")
            yield Input(placeholder="type to filter...", id="filter")
            yield OptionList(id="options")
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = "Open a file from node_modules"
        self._refresh_options()
        self.query_one("#filter", Input).focus()

    def _refresh_options(self) -> None:
        query = self.query_one("#filter", Input).value
        self._visible = filter_items(choices(self._state), query)
        option_list = self.query_one("#options", OptionList)
        option_list.clear_options()
        option_list.add_options([Option(styled_label(item)) for item in self._visible])
        if self._visible:
            option_list.highlighted = 0
        self.query_one("#location", Static).update(
            Text(f"{location_text(self._state)}  ({len(self._state.items)} entries)")
        )

    def _choose(self, item: NavigationItem | None) -> None:
        try:
            state = transition(self._state, item, self._config)
        except NavigationReadError as err:
            self.notify(err.message, severity="error", timeout=4)
            return
        self._state = state
        if state.done:
            self.exit(state.selected_file)
            return
        filter_input = self.query_one("#filter", Input)
        with filter_input.prevent(Input.Changed):
            filter_input.value = ""
        self._refresh_options()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "filter":
            self._refresh_options()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Enter in the filter picks the highlighted option."""
        if event.input.id != "filter" or not self._visible:
            return
        highlighted = self.query_one("#options", OptionList).highlighted
        self._choose(self._visible[highlighted or 0])

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        index = event.option_index
        if 0 <= index < len(self._visible):
            self._choose(self._visible[index])

    def action_cursor_down(self) -> None:
        self.query_one("#options", OptionList).action_cursor_down()

    def action_cursor_up(self) -> None:
        self.query_one("#options", OptionList).action_cursor_up()

    def action_go_up(self) -> None:
        """Same as picking ``..``; does nothing at the top."""
        if self._state.at_root:
            return
        self._choose(choices(self._state)[0])

    def action_cancel(self) -> None:
        self._choose(None)


def browse(dependency_dir: Path, config: BrowserConfig = DEFAULT_CONFIG) -> Path | None:
    """
    Run the TUI from a dependency folder.

    The first listing is read before the UI starts, so a failure there
    raises NavigationReadError instead of showing an empty screen.
    """
    state = start_navigation(dependency_dir, config)
    return NodeModulesApp(state, config).run()
