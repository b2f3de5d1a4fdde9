# turbo_shell/Widgets/button_bar.py
# Description: Left and right header buttons for the current page
#
# Imports
from typing import List, Sequence
#
# Third-Party Imports
from loguru import logger
from rich.text import Text
from textual import on
from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.css.query import NoMatches
from textual.widgets import Button
#
# Local Imports
from ..Constants import ACTION_REPLACE
from ..navigation.shell_settings import ButtonSettings
from ..session.events import VisitProposal
#
#######################################################################################################################
#
# Classes:

class ButtonBar(Container):
    """Buttons the backend offers for one path; hidden when there are none."""

    DEFAULT_CSS = """
    ButtonBar {
        dock: top;
        height: 3;
        width: 100%;
        background: $panel;
    }

    ButtonBar .button-bar-side {
        width: 1fr;
        height: 100%;
    }

    ButtonBar #button-bar-right {
        align: right middle;
    }

    ButtonBar .bar-button {
        margin: 0 1;
        min-width: 6;
    }
    """

    def __init__(self, left: Sequence[ButtonSettings] = (), right: Sequence[ButtonSettings] = (), **kwargs):
        super().__init__(**kwargs)
        self.left_buttons = tuple(left)
        self.right_buttons = tuple(right)

    def compose(self) -> ComposeResult:
        yield Horizontal(*self._make_buttons("left"), id="button-bar-left", classes="button-bar-side")
        yield Horizontal(*self._make_buttons("right"), id="button-bar-right", classes="button-bar-side")

    def on_mount(self) -> None:
        self.display = bool(self.left_buttons or self.right_buttons)

    def _make_buttons(self, side: str) -> List[Button]:
        buttons = self.left_buttons if side == "left" else self.right_buttons
        return [
            Button(Text(button.label), id=f"bar-button-{side}-{index}", classes="bar-button")
            for index, button in enumerate(buttons)
        ]

    async def set_buttons(self, left: Sequence[ButtonSettings], right: Sequence[ButtonSettings]) -> None:
        """Replace the offered buttons."""
        self.left_buttons = tuple(left)
        self.right_buttons = tuple(right)
        for side in ("left", "right"):
            try:
                container = self.query_one(f"#button-bar-{side}", Horizontal)
            except NoMatches:
                # Not composed yet; compose picks up the new buttons
                return
            await container.remove_children()
            await container.mount_all(self._make_buttons(side))
        self.display = bool(self.left_buttons or self.right_buttons)

    @on(Button.Pressed, ".bar-button")
    def handle_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        _, _, side, index = event.button.id.split("-")
        buttons = self.left_buttons if side == "left" else self.right_buttons
        button = buttons[int(index)]
        logger.info(f"Header button pressed: {button.label} -> {button.visit}")
        self.post_message(VisitProposal(button.visit, action=ACTION_REPLACE))

#
# End of button_bar.py
#######################################################################################################################
