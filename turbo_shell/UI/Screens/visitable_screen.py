"""Screens bound to a single URL whose content comes from a content session."""

from typing import TYPE_CHECKING, Optional

import httpx
from loguru import logger
from textual import on
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.screen import ModalScreen, Screen
from textual.widgets import Header, LoadingIndicator, Markdown

from ...Utils.html_rendering import html_to_markdown
from ...Widgets.button_bar import ButtonBar
from ...Widgets.error_view import ErrorView
from ...Widgets.tab_bar import TabBar, parse_color
from ...navigation.capability_gate import Capabilities
from ...session.content_session import LoadState
from ...session.errors import ErrorKind, ErrorPresentation
from ...session.events import LoadedContent, VisitProposal

if TYPE_CHECKING:
    from ...app import TurboShell


class VisitableScreen(Screen):
    """
    One entry of the navigation stack.

    Bound to ``url`` for its whole life; a refresh of the same URL creates a
    new screen. The content session sets ``load_state`` as loads progress.
    """

    DEFAULT_CSS = """
    VisitableScreen {
        background: $background;
    }

    VisitableScreen #visit-content {
        width: 100%;
        height: 1fr;
        padding: 0 1;
    }
    """

    def __init__(self, url: httpx.URL, **kwargs):
        super().__init__(**kwargs)
        self.url = url
        self.load_state = LoadState.PENDING
        self.load_error: Optional[ErrorKind] = None
        self.loaded_url: Optional[httpx.URL] = None
        self.error_presentation: Optional[ErrorPresentation] = None
        self.capabilities: Optional[Capabilities] = None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({str(self.url)!r})"

    def compose(self) -> ComposeResult:
        shell = self.shell
        state = shell.shell_state if shell is not None else None
        yield Header()
        yield ButtonBar(id="button-bar")
        with VerticalScroll(id="visit-content"):
            yield LoadingIndicator()
        yield TabBar(
            tabs=state.visible_tabs if state is not None else (),
            palette=state.settings.tabbar if state is not None else None,
            selected_path=self.url.path,
            id="tab-bar",
        )

    def on_mount(self) -> None:
        logger.debug(f"Screen for {self.url} mounted")

    async def on_screen_resume(self) -> None:
        await self.sync_chrome()

    @property
    def shell(self) -> Optional["TurboShell"]:
        return self.app if hasattr(self.app, "shell_state") else None

    async def sync_chrome(self) -> None:
        """Bring tabs, buttons and header colours in line with the shell state."""
        shell = self.shell
        if shell is None or not self.is_mounted:
            return
        state = shell.shell_state
        navbar = state.settings.navbar
        if navbar is not None:
            header = self.query_one(Header)
            background = parse_color(navbar.background)
            foreground = parse_color(navbar.foreground)
            if background is not None:
                header.styles.background = background
            if foreground is not None:
                header.styles.color = foreground

        tab_bar = self.query_one(TabBar)
        tab_bar.palette = state.settings.tabbar
        await tab_bar.set_tabs(state.visible_tabs, selected_path=self.url.path)

        if self.capabilities is not None:
            await self.query_one(ButtonBar).set_buttons(
                self.capabilities.left_buttons, self.capabilities.right_buttons
            )

    async def apply_capabilities(self, capabilities: Capabilities) -> None:
        """Store the affordances computed for this screen's page and show them."""
        self.capabilities = capabilities
        await self.sync_chrome()

    async def show_content(self, content: LoadedContent) -> None:
        """Replace whatever is shown with the loaded page."""
        self.loaded_url = content.url
        self.error_presentation = None
        title, markdown = html_to_markdown(content.html)
        if title:
            self.title = title
        container = self.query_one("#visit-content", VerticalScroll)
        await container.remove_children()
        await container.mount(Markdown(markdown, id="visit-markdown", open_links=False))
        container.scroll_home(animate=False)

    async def show_error(self, presentation: ErrorPresentation) -> None:
        """Replace the screen's content with a full-screen notice."""
        self.error_presentation = presentation
        if self.shell is not None:
            self.title = self.shell.app_name
        container = self.query_one("#visit-content", VerticalScroll)
        await container.remove_children()
        await container.mount(ErrorView(presentation, id="visit-error"))

    @on(Markdown.LinkClicked)
    def handle_link_clicked(self, event: Markdown.LinkClicked) -> None:
        """Propose a visit for links activated inside the content."""
        event.stop()
        base = self.loaded_url or self.url
        try:
            target = base.join(event.href)
        except httpx.InvalidURL as e:
            logger.warning(f"Ignoring unparseable link {event.href!r} on {self.url}: {e}")
            self.notify(f"Could not open {event.href}: {e}", severity="error")
            return
        logger.debug(f"Link activated on {self.url}: {event.href} -> {target}")
        self.post_message(VisitProposal(str(target)))


class ModalVisitableScreen(VisitableScreen, ModalScreen):
    """A visitable screen presented over the primary stack."""

    DEFAULT_CSS = """
    ModalVisitableScreen {
        align: center middle;
        background: $background 60%;
    }

    ModalVisitableScreen #visit-content {
        width: 90%;
        height: 1fr;
        border: thick $accent;
        background: $surface;
    }
    """
