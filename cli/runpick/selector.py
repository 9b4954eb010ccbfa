"""Interactive, filterable script picker built on Textual.

``PickerModel`` holds the picker state and has one handler per event
(filter text, key, highlight, viewport resize); ``ScriptPickerApp`` wires
Textual widgets to those handlers and refills the list from the model.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence
from unicodedata import normalize

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Input, OptionList
from textual.widgets.option_list import Option

from .errors import SelectorError
from .manifest import LAST_RUN_LABEL, ScriptEntry

__all__ = [
    "PICKER_TITLE",
    "PickerModel",
    "PickerState",
    "ScriptItem",
    "ScriptPickerApp",
    "fuzzy_filter",
    "select_script",
]

PICKER_TITLE = "Select a script to run"


class PickerState(Enum):
    ACTIVE = "active"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class ScriptItem:
    entry: ScriptEntry

    @property
    def title(self) -> str:
        return self.entry.name

    @property
    def description(self) -> str:
        return self.entry.description or self.entry.command

    @property
    def filter_value(self) -> str:
        return self.title

    @property
    def is_suggestion(self) -> bool:
        return self.entry.description == LAST_RUN_LABEL


def normalize_text(value: str) -> str:
    return normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")


def fuzzy_filter(query: str, items: Iterable[ScriptItem]) -> list[ScriptItem]:
    """Keep items whose filter value contains ``query`` as a subsequence.

    Tighter and earlier matches rank first; ties keep their input order.
    """
    if not query:
        return list(items)

    pattern = ".*?".join(map(re.escape, normalize_text(query.lower())))
    matches: list[tuple[int, int, int, ScriptItem]] = []
    for position, item in enumerate(items):
        haystack = normalize_text(item.filter_value.lower())
        match = re.search(pattern, haystack)
        if match:
            score = match.end() - match.start()
            matches.append((score, match.start(), position, item))

    matches.sort(key=lambda match: match[:3])
    return [item for _, _, _, item in matches]


class PickerModel:
    """State machine behind the picker.

    ``ACTIVE`` is the only state that accepts input; ``CONFIRMED`` and
    ``CANCELLED`` are terminal.
    """

    def __init__(self, entries: Sequence[ScriptEntry]) -> None:
        self.items = [ScriptItem(entry) for entry in entries]
        self.state = PickerState.ACTIVE
        self.chosen: ScriptEntry | None = None
        self.filter_text = ""
        self.visible = list(self.items)
        self.index = 0
        self.size = (0, 0)

    @property
    def highlighted(self) -> ScriptItem | None:
        if not self.visible:
            return None
        return self.visible[self.index]

    def handle_filter(self, text: str) -> PickerState:
        if self.state is PickerState.ACTIVE:
            self.filter_text = text
            self.visible = fuzzy_filter(text, self.items)
            self.index = 0
        return self.state

    def handle_key(self, key: str) -> PickerState:
        if self.state is not PickerState.ACTIVE:
            return self.state
        if key in ("ctrl+c", "escape"):
            self.chosen = None
            self.state = PickerState.CANCELLED
        elif key == "enter":
            item = self.highlighted
            if item is not None:
                self.chosen = item.entry
                self.state = PickerState.CONFIRMED
        elif key == "up":
            self.handle_highlight(self.index - 1)
        elif key == "down":
            self.handle_highlight(self.index + 1)
        return self.state

    def handle_highlight(self, index: int) -> PickerState:
        if self.state is PickerState.ACTIVE and self.visible:
            self.index = min(max(index, 0), len(self.visible) - 1)
        return self.state

    def handle_resize(self, width: int, height: int) -> PickerState:
        self.size = (width, height)
        return self.state


def _option_for(item: ScriptItem) -> Option:
    description_style = "italic magenta" if item.is_suggestion else "dim"
    prompt = Text.assemble((item.title, "bold"), "\n", (item.description, description_style))
    return Option(prompt)


class ScriptPickerApp(App[ScriptEntry | None]):
    """Filter box over a list of scripts; exits with the chosen entry or ``None``."""

    TITLE = PICKER_TITLE

    CSS = """
    Screen {
        padding: 1 2;
    }

    Input {
        margin-bottom: 1;
    }

    OptionList {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "cancel", "Quit", priority=True),
        Binding("escape", "cancel", "Quit", show=False, priority=True),
        Binding("up", "move('up')", "Up", priority=True),
        Binding("down", "move('down')", "Down", priority=True),
    ]

    def __init__(self, entries: Sequence[ScriptEntry]) -> None:
        super().__init__()
        self.model = PickerModel(entries)

    def compose(self) -> ComposeResult:
        yield Header()
        yield Input(placeholder="Type to filter scripts, Enter to run", id="filter")
        yield OptionList(id="scripts")
        yield Footer()

    def on_mount(self) -> None:
        self._option_list.can_focus = False
        self.model.handle_resize(self.size.width, self.size.height)
        self._refill()
        self.query_one("#filter", Input).focus()

    @property
    def _option_list(self) -> OptionList:
        return self.query_one("#scripts", OptionList)

    def on_input_changed(self, event: Input.Changed) -> None:
        self.model.handle_filter(event.value)
        self._refill()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._apply(self.model.handle_key("enter"))

    def on_option_list_option_highlighted(self, event: OptionList.OptionHighlighted) -> None:
        self.model.handle_highlight(event.option_index)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.model.handle_highlight(event.option_index)
        self._apply(self.model.handle_key("enter"))

    def on_resize(self, event: events.Resize) -> None:
        self.model.handle_resize(event.size.width, event.size.height)

    def action_move(self, direction: str) -> None:
        self.model.handle_key(direction)
        if self.model.visible:
            self._option_list.highlighted = self.model.index

    def action_cancel(self) -> None:
        self._apply(self.model.handle_key("ctrl+c"))

    def _apply(self, state: PickerState) -> None:
        if state is not PickerState.ACTIVE:
            self.exit(self.model.chosen)

    def _refill(self) -> None:
        self._option_list.clear_options()
        if not self.model.visible:
            placeholder = Text("No matching scripts.", style="dim")
            self._option_list.add_option(Option(placeholder, disabled=True))
            return
        self._option_list.add_options([_option_for(item) for item in self.model.visible])
        self._option_list.highlighted = self.model.index


def select_script(entries: Sequence[ScriptEntry]) -> tuple[ScriptEntry | None, bool]:
    """Show the picker and block until the user confirms or cancels."""
    app = ScriptPickerApp(entries)
    app.run()
    if app.return_code:
        raise SelectorError(f"Error running program: exit code {app.return_code}")
    if app.model.state is PickerState.CONFIRMED and app.model.chosen is not None:
        return app.model.chosen, True
    return None, False
