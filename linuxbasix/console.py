"""Line-oriented front-end: every screen is printed in full, one line of input per step."""
import logging
from typing import Callable, Optional

from linuxbasix.core.menu import (
    INVALID_INPUT,
    NOT_IMPLEMENTED,
    ActionRequest,
    MainMenuController,
    MultiSelectList,
    Outcome,
    SelectRequest,
)
from linuxbasix.installers import run_plan
from linuxbasix.utils.system import CommandExecutor, SubprocessExecutor

logger = logging.getLogger(__name__)


class Console:
    def __init__(self, read_line: Callable[[str], str] = input, write: Callable[[str], None] = print):
        self.read_line = read_line
        self.write = write

    def read(self, prompt: str = "") -> Optional[str]:
        """Next line of input, or None once input is exhausted."""
        try:
            return self.read_line(prompt)
        except EOFError:
            return None

    def show(self, lines) -> None:
        for line in lines:
            self.write(line)


def select_programs(console: Console, request: SelectRequest) -> None:
    screen = MultiSelectList(request.candidates, request.selection, request.title)
    while True:
        console.show(screen.render())
        line = console.read()
        if line is None:
            break
        outcome = screen.handle_input(line)
        if outcome is Outcome.QUIT:
            break
        if outcome is Outcome.INVALID:
            console.write(INVALID_INPUT)
    request.finish()


def main_menu(
    controller: MainMenuController,
    console: Optional[Console] = None,
    executor: Optional[CommandExecutor] = None,
) -> None:
    console = console or Console()
    executor = executor or SubprocessExecutor()

    while True:
        console.show(controller.render())
        line = console.read()
        if line is None:
            logger.info("Input closed, leaving main menu")
            return

        result = controller.handle_input(line)
        if result is Outcome.QUIT:
            logger.info("Quit requested")
            return
        if result is Outcome.INVALID:
            console.write(INVALID_INPUT)
        elif result is Outcome.NOT_IMPLEMENTED:
            console.write(NOT_IMPLEMENTED)
        elif isinstance(result, SelectRequest):
            select_programs(console, result)
        elif isinstance(result, ActionRequest):
            run_plan(result.plan(controller.state), executor, out=console.write)
            console.read("Press Enter to return to the main menu...")
