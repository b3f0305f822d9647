import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional, Sequence

from linuxbasix.catalog.definitions import (
    APT_PROGRAMS,
    BANNER,
    FLATPAK_PROGRAMS,
    MAIN_MENU_OPTIONS,
    ROW_EXIT,
    ROW_SELECT_APT,
    ROW_SELECT_FLATPAK,
    ROW_SELECT_PACKAGE_MANAGER,
)
from linuxbasix.state import ProgramState
from linuxbasix.utils.system import detect_package_managers, get_kernel_version

logger = logging.getLogger(__name__)

MAIN_MENU_ITEMS = len(MAIN_MENU_OPTIONS)

CHECKED = "[+]"
UNCHECKED = "[ ]"
LIST_HINT = "Press the number to select/unselect, q to quit"
INVALID_INPUT = "Invalid input"
NOT_IMPLEMENTED = "Not implemented yet"
INDEX_PATTERN = re.compile(r"\+?[0-9]+")


class Outcome(Enum):
    MOVED = "moved"
    QUIT = "quit"
    INVALID = "invalid"
    NOT_IMPLEMENTED = "not_implemented"
    TOGGLED = "toggled"
    IGNORED = "ignored"


@dataclass
class SelectRequest:
    """A multi-select sub-screen the front-end has to run.

    `selection` is mutated in place by the sub-screen. `on_done` runs once the
    user quits it.
    """
    title: str
    candidates: tuple
    selection: set
    on_done: Optional[Callable[[set], None]] = None

    def finish(self) -> None:
        if self.on_done is not None:
            self.on_done(self.selection)


@dataclass
class ActionRequest:
    """An install row bound to a plan builder."""
    row: int
    title: str
    build_plan: Callable[[ProgramState], object]

    def plan(self, state: ProgramState):
        return self.build_plan(state)


def first_checked(items: Iterable[str], selection: set) -> Optional[str]:
    for name in items:
        if name in selection:
            return name
    return None


class MultiSelectList:
    """Sorted checklist that toggles names in a caller-owned set."""

    def __init__(self, candidates: Sequence[str], selection: set, title: str = "Select programs:"):
        self.items = tuple(sorted(candidates))
        self.selection = selection
        self.title = title
        self.finished = False

    def is_checked(self, name: str) -> bool:
        return name in self.selection

    def toggle(self, index: int) -> bool:
        """Toggle the 1-based row `index`. Out-of-range rows are ignored."""
        if not 1 <= index <= len(self.items):
            return False
        name = self.items[index - 1]
        if name in self.selection:
            self.selection.discard(name)
        else:
            self.selection.add(name)
        logger.debug("Toggled %s -> %s", name, name in self.selection)
        return True

    def handle_input(self, line: str) -> Outcome:
        choice = line.strip()
        if choice == "q":
            self.finished = True
            return Outcome.QUIT
        if INDEX_PATTERN.fullmatch(choice):
            try:
                index = int(choice)
            except ValueError:
                # longer than the interpreter will convert
                return Outcome.INVALID
            return Outcome.TOGGLED if self.toggle(index) else Outcome.IGNORED
        return Outcome.INVALID

    def render(self) -> list:
        lines = [self.title]
        for i, name in enumerate(self.items, start=1):
            marker = CHECKED if self.is_checked(name) else UNCHECKED
            lines.append(f"{i} {marker} {name}")
        lines.append(LIST_HINT)
        return lines


class MainMenuController:
    """Cursor over the main menu rows plus the dispatch table behind them.

    The controller never blocks on input itself: `handle_input` returns either
    an `Outcome` or a request (`SelectRequest`, `ActionRequest`) that the
    front-end carries out.
    """

    def __init__(
        self,
        state: ProgramState,
        *,
        apt_catalog: Sequence[str] = APT_PROGRAMS,
        flatpak_catalog: Sequence[str] = FLATPAK_PROGRAMS,
        kernel_probe: Callable[[], str] = get_kernel_version,
        detect_managers: Callable[[], Sequence[str]] = detect_package_managers,
        actions: Optional[dict] = None,
    ):
        self.state = state
        self.apt_catalog = tuple(apt_catalog)
        self.flatpak_catalog = tuple(flatpak_catalog)
        self.kernel_probe = kernel_probe
        self.detect_managers = detect_managers
        self.actions = dict(actions or {})
        self.highlight = 1

    def move_up(self) -> None:
        self.highlight = self.highlight - 1 if self.highlight > 1 else MAIN_MENU_ITEMS

    def move_down(self) -> None:
        self.highlight = self.highlight + 1 if self.highlight < MAIN_MENU_ITEMS else 1

    def jump_to(self, row: int) -> None:
        if 1 <= row <= MAIN_MENU_ITEMS:
            self.highlight = row

    def handle_input(self, line: str):
        choice = line.strip()
        if choice in ("q", "Q"):
            return Outcome.QUIT
        if choice == "w":
            self.move_up()
            return Outcome.MOVED
        if choice == "s":
            self.move_down()
            return Outcome.MOVED
        if choice == "":
            return self.confirm()
        return Outcome.INVALID

    def confirm(self):
        row = self.highlight
        logger.info("Menu row %d selected: %s", row, MAIN_MENU_OPTIONS[row - 1])
        if row == ROW_SELECT_APT:
            return SelectRequest("Select programs:", self.apt_catalog, self.state.selected_apt_programs)
        if row == ROW_SELECT_FLATPAK:
            return SelectRequest("Select Flatpaks:", self.flatpak_catalog, self.state.selected_flatpak_programs)
        if row == ROW_SELECT_PACKAGE_MANAGER:
            return self._package_manager_request()
        if row == ROW_EXIT:
            return Outcome.QUIT
        if row in self.actions:
            return ActionRequest(row, MAIN_MENU_OPTIONS[row - 1], self.actions[row])
        return Outcome.NOT_IMPLEMENTED

    def _package_manager_request(self) -> SelectRequest:
        available = tuple(self.detect_managers())
        seeded = set()
        current = self.state.selected_package_manager
        if current is not None and current in available:
            seeded.add(current)

        def collapse(selection: set) -> None:
            self.state.selected_package_manager = first_checked(sorted(available), selection)
            logger.info("Package manager set to %s", self.state.selected_package_manager)

        return SelectRequest("Select package manager:", available, seeded, collapse)

    def render(self) -> list:
        lines = [BANNER, "Main Menu"]
        for i, option in enumerate(MAIN_MENU_OPTIONS, start=1):
            cursor = "> " if i == self.highlight else "  "
            lines.append(f"{cursor}{i}. {option}")

        managers = []
        for name in self.detect_managers():
            managers.append(f"{name}*" if name == self.state.selected_package_manager else name)

        lines.append("")
        lines.append(f"Current Linux Kernel version: {self.kernel_probe()}")
        lines.append(f"Detected packet managers (* = selected): {' '.join(managers) or 'None'}")
        return lines
