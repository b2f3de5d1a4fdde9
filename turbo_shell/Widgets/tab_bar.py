# turbo_shell/Widgets/tab_bar.py
# Description: Bottom tab bar built from the remote ``settings.tabs``
#
# Imports
from typing import Optional, Sequence
#
# Third-Party Imports
from loguru import logger
from rich.text import Text
from textual import on
from textual.app import ComposeResult
from textual.color import Color, ColorParseError
from textual.containers import Container, Horizontal
from textual.css.query import NoMatches
from textual.widgets import Button
#
# Local Imports
from ..Constants import ACTION_REPLACE
from ..navigation.shell_settings import TabbarSettings, TabSettings
from ..session.events import VisitProposal
#
#######################################################################################################################
#
# Classes:

def parse_color(value: Optional[str]) -> Optional[Color]:
    """Parse a ``#RRGGBB`` style colour from settings, ``None`` when unusable."""
    if not value:
        return None
    try:
        return Color.parse(value)
    except ColorParseError:
        logger.debug(f"Ignoring unparseable colour {value!r}")
        return None


class TabBar(Container):
    """
    Tabs offered by the backend. Hidden when no tab is visible.

    Selecting a tab proposes a ``replace`` visit to the tab's path.
    """

    DEFAULT_CSS = """
    TabBar {
        dock: bottom;
        height: 3;
        width: 100%;
        background: $panel;
        border-top: solid $primary;
    }

    TabBar .tab-bar-inner {
        height: 100%;
        width: 100%;
        align: center middle;
    }

    TabBar .tab-button {
        margin: 0 1;
        min-width: 8;
        height: 3;
        border: none;
        background: transparent;
    }

    TabBar .tab-button.-selected {
        text-style: bold underline;
    }
    """

    def __init__(
        self,
        tabs: Sequence[TabSettings] = (),
        palette: Optional[TabbarSettings] = None,
        selected_path: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.tabs = tuple(tabs)
        self.palette = palette
        self.selected_path = selected_path

    def compose(self) -> ComposeResult:
        with Horizontal(classes="tab-bar-inner"):
            yield from self._make_buttons()

    def on_mount(self) -> None:
        self.display = bool(self.tabs)
        self._apply_colors()

    async def set_tabs(self, tabs: Sequence[TabSettings], selected_path: Optional[str] = None) -> None:
        """Replace the offered tabs."""
        self.tabs = tuple(tabs)
        if selected_path is not None:
            self.selected_path = selected_path
        try:
            inner = self.query_one(".tab-bar-inner", Horizontal)
        except NoMatches:
            # Not composed yet; compose picks up the new tabs
            return
        await inner.remove_children()
        await inner.mount_all(self._make_buttons())
        self.display = bool(self.tabs)
        self._apply_colors()

    def _selected_index(self) -> int:
        for index, tab in enumerate(self.tabs):
            if tab.visit == self.selected_path:
                return index
        return 0

    def _make_buttons(self):
        selected = self._selected_index()
        buttons = []
        for index, tab in enumerate(self.tabs):
            button = Button(Text(tab.label), id=f"tab-{index}", classes="tab-button")
            if index == selected:
                button.add_class("-selected")
            buttons.append(button)
        return buttons

    def _apply_colors(self) -> None:
        if self.palette is None:
            return
        background = parse_color(self.palette.background)
        if background is not None:
            self.styles.background = background
        selected = parse_color(self.palette.selected)
        unselected = parse_color(self.palette.unselected)
        for button in self.query(".tab-button"):
            color = selected if button.has_class("-selected") else unselected
            if color is not None:
                button.styles.color = color

    @on(Button.Pressed, ".tab-button")
    def handle_tab_pressed(self, event: Button.Pressed) -> None:
        """Handle tab clicks."""
        event.stop()
        index = int(event.button.id.replace("tab-", ""))
        tab = self.tabs[index]
        for button in self.query(".tab-button"):
            button.remove_class("-selected")
        event.button.add_class("-selected")
        self.selected_path = tab.visit
        self._apply_colors()
        logger.info(f"Tab selected: {tab.label} -> {tab.visit}")
        self.post_message(VisitProposal(tab.visit, action=ACTION_REPLACE))

#
# End of tab_bar.py
#######################################################################################################################
