import logging

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.screen import Screen
from textual.widgets import Footer, Header, Label, ListItem, ListView, Static

from linuxbasix.catalog.definitions import MAIN_MENU_OPTIONS
from linuxbasix.core.menu import (
    INVALID_INPUT,
    NOT_IMPLEMENTED,
    ActionRequest,
    MainMenuController,
    Outcome,
    SelectRequest,
)
from linuxbasix.installers import NOTHING_SELECTED
from linuxbasix.safety.guardrails import ensure_sudo
from linuxbasix.screens.execution import ExecutionScreen
from linuxbasix.screens.selection import SelectionScreen
from linuxbasix.screens.splash import SplashScreen
from linuxbasix.utils.system import CommandExecutor, SubprocessExecutor

logger = logging.getLogger(__name__)


class MainMenu(Screen):
    """The main menu, driven by the same controller as the console front-end."""

    BINDINGS = [
        Binding("w", "move('w')", "Up"),
        Binding("s", "move('s')", "Down"),
        Binding("q", "quit_menu", "Quit"),
        Binding("Q", "quit_menu", "Quit", show=False),
    ]

    def __init__(self, controller: MainMenuController, executor: CommandExecutor):
        super().__init__()
        self.controller = controller
        self.executor = executor

    def compose(self) -> ComposeResult:
        yield Header()
        yield Container(
            Static("Main Menu", id="menu_title", classes="header"),
            ListView(
                *[ListItem(Label(f"{i}. {option}")) for i, option in enumerate(MAIN_MENU_OPTIONS, start=1)],
                id="menu_list",
            ),
            Static(id="system_info", classes="info"),
            id="menu_container"
        )
        yield Footer()

    def on_mount(self):
        self.refresh_menu()

    def refresh_menu(self):
        menu = self.query_one("#menu_list", ListView)
        if menu.index != self.controller.highlight - 1:
            menu.index = self.controller.highlight - 1
        # last two rendered lines are the kernel and package manager footer
        self.query_one("#system_info", Static).update("\n".join(self.controller.render()[-2:]))

    def action_move(self, key: str):
        self.controller.handle_input(key)
        self.refresh_menu()

    def action_quit_menu(self):
        self.app.exit()

    def on_list_view_highlighted(self, event: ListView.Highlighted):
        if event.list_view.index is not None:
            self.controller.jump_to(event.list_view.index + 1)

    def on_list_view_selected(self, event: ListView.Selected):
        if event.list_view.index is not None:
            self.controller.jump_to(event.list_view.index + 1)
        self.dispatch(self.controller.handle_input(""))

    def dispatch(self, result):
        if result is Outcome.QUIT:
            self.app.exit()
        elif result is Outcome.NOT_IMPLEMENTED:
            self.notify(NOT_IMPLEMENTED)
        elif result is Outcome.INVALID:
            self.notify(INVALID_INPUT, severity="warning")
        elif isinstance(result, SelectRequest):
            self.app.push_screen(SelectionScreen(result), lambda _selection: self.finish_selection(result))
        elif isinstance(result, ActionRequest):
            self.launch_plan(result)

    def finish_selection(self, request: SelectRequest):
        request.finish()
        self.refresh_menu()

    def launch_plan(self, request: ActionRequest):
        plan = request.plan(self.controller.state)
        if not plan.commands:
            self.notify(NOTHING_SELECTED)
            return
        if plan.needs_sudo and not getattr(self.executor, "dry_run", False) and not ensure_sudo(interactive=False):
            self.notify("sudo credentials are not cached. Run 'sudo -v' and try again.", severity="error")
            return
        self.app.push_screen(ExecutionScreen(plan, self.executor))


class BasixApp(App):
    TITLE = "LinuxBasix"
    CSS = """
    Screen { align: center middle; }
    .splash_container { width: 80%; height: 80%; border: solid green; align: center middle; }
    .logo { color: green; content-align: center middle; }
    .code_block { background: $surface; color: $text; padding: 1; border: solid white; }
    .risky { color: red; }
    #menu_list { height: auto; border: solid blue; margin: 1; }
    #selection_container { width: 70%; height: 90%; border: heavy $primary; padding: 1; }
    SelectionList { height: 1fr; }
    Log { height: 1fr; border: solid white; }
    """

    def __init__(self, controller: MainMenuController, executor: CommandExecutor | None = None, show_splash: bool = True):
        super().__init__()
        self.controller = controller
        self.executor = executor or SubprocessExecutor()
        self.show_splash = show_splash

    def on_mount(self):
        self.install_screen(MainMenu(self.controller, self.executor), name="main_menu")
        if self.show_splash:
            self.push_screen(SplashScreen())
        else:
            self.push_screen("main_menu")
