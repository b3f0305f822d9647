from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, SelectionList, Static
from textual.widgets.selection_list import Selection

from linuxbasix.core.menu import LIST_HINT, MultiSelectList, SelectRequest


class SelectionScreen(ModalScreen):
    """Checklist over a SelectRequest. Toggles go through MultiSelectList."""

    BINDINGS = [Binding("q", "done", "Done"), Binding("escape", "done", "Done", show=False)]

    def __init__(self, request: SelectRequest):
        super().__init__()
        self.request = request
        self.checklist = MultiSelectList(request.candidates, request.selection, request.title)

    def compose(self):
        selections = [
            Selection(name, index, self.checklist.is_checked(name))
            for index, name in enumerate(self.checklist.items, start=1)
        ]
        yield Vertical(
            Static(self.checklist.title, classes="header"),
            SelectionList[int](*selections, id="checklist"),
            Static(LIST_HINT.replace("the number", "space"), classes="hint"),
            Button("Done", variant="primary", id="done"),
            id="selection_container"
        )

    def on_selection_list_selection_toggled(self, event: SelectionList.SelectionToggled):
        self.checklist.toggle(event.selection.value)

    def on_button_pressed(self, event: Button.Pressed):
        if event.button.id == "done":
            self.action_done()

    def action_done(self):
        self.checklist.finished = True
        self.dismiss(self.request.selection)
