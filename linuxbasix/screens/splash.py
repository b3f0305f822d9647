from textual.screen import Screen
from textual.widgets import Static, Button
from textual.containers import Container
from linuxbasix.catalog.definitions import BANNER
from linuxbasix.utils.system import get_system_info

ASCII_LOGO = r"""
 _     _                 ______           _
| |   (_)                | ___ \         (_)
| |    _ _ __  _   ___  _| |_/ / __ _ ___ ___  __
| |   | | '_ \| | | \ \/ | ___ \/ _` / __| \ \/ /
| |___| | | | | |_| |>  <| |_/ | (_| \__ | |>  <
\_____|_|_| |_|\__,_/_/\_\____/ \__,_|___|_/_/\_\
"""


class SplashScreen(Screen):
    def compose(self):
        sys_info = get_system_info()

        yield Container(
            Static(ASCII_LOGO, classes="logo", markup=False),
            Static(BANNER, classes="meta"),
            Static("---", classes="separator"),
            Static(f"OS:     {sys_info.get('os')}", classes="info"),
            Static(f"Kernel: {sys_info.get('kernel')}", classes="info"),
            Static(f"Detected packet managers: {sys_info.get('package_managers')}", classes="info"),
            Static("---", classes="separator"),
            Static("Pick packages, pick a package manager, install.", classes="desc"),
            Button("Press Enter to Continue", variant="primary", id="start_btn"),
            classes="splash_container"
        )

    def on_button_pressed(self, event: Button.Pressed):
        if event.button.id == "start_btn":
            self.app.switch_screen("main_menu")
