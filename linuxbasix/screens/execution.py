import shlex

from textual import work
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, Log, Static

from linuxbasix.catalog.definitions import InstallPlan
from linuxbasix.utils.system import CommandExecutor


class ExecutionScreen(Screen):
    """Previews an InstallPlan, then runs it and streams the output."""

    def __init__(self, plan: InstallPlan, executor: CommandExecutor):
        super().__init__()
        self.plan = plan
        self.executor = executor

    def compose(self):
        preview = "\n".join(f"$ {shlex.join(argv)}" for argv in self.plan.commands)
        risk_class = "risky" if self.plan.is_risky else "safe"
        yield Vertical(
            Static(f"Operation: {self.plan.title}", classes=f"header {risk_class}"),
            Static(self.plan.description, classes="description"),
            Static("---", classes="sep"),
            Static("EXECUTABLE COMMANDS:", classes="label"),
            Static(preview, classes="code_block", markup=False),
            Static("---", classes="sep"),
            Log(id="output_log", highlight=True),
            Horizontal(
                Button("Cancel / Back", variant="error", id="cancel"),
                Button("Proceed", variant="success" if not self.plan.is_risky else "warning", id="proceed"),
                classes="buttons"
            ),
            classes="exec_container"
        )

    def on_button_pressed(self, event: Button.Pressed):
        if event.button.id == "cancel":
            self.app.pop_screen()
        elif event.button.id == "proceed":
            self.query_one("#proceed").disabled = True
            self.query_one("#cancel").disabled = True
            self.run_plan()

    def write_line(self, line: str):
        self.query_one("#output_log", Log).write_line(line)

    @work(exclusive=True, thread=True)
    def run_plan(self):
        self.app.call_from_thread(self.write_line, "Starting execution...")
        failures = 0
        for argv in self.plan.commands:
            self.app.call_from_thread(self.write_line, f"$ {shlex.join(argv)}")
            try:
                code = self.executor.run(argv, on_output=lambda line: self.app.call_from_thread(self.write_line, line))
            except OSError as e:
                self.app.call_from_thread(self.write_line, f"ERROR: {e}")
                code = 1
            if code != 0:
                failures += 1
        self.app.call_from_thread(self.finished, failures)

    def finished(self, failures: int):
        if failures == 0:
            self.write_line("SUCCESS: Operation completed.")
        else:
            self.write_line(f"FAILURE: {failures} command(s) failed, see the output above.")
        cancel = self.query_one("#cancel", Button)
        cancel.label = "Back to Menu"
        cancel.disabled = False
