# turbo_shell/app.py
# Description: The Textual application hosting the Turbo navigation shell
#
# Imports
import argparse
import os
import sys
import webbrowser
from typing import Callable, Optional, Union
#
# Third-Party Imports
import httpx
from loguru import logger
from textual import on
from textual.app import App
#
# Local Imports
from . import __version__
from .Constants import ACTION_REPLACE, SESSION_MODAL, SESSION_PRIMARY
from .Logging_Config import configure_application_logging
from .Utils.url_helpers import is_managed_url, resolve_visit_url
from .config import (
    BASE_URL_ENV_VAR,
    ENVIRONMENT_ENV_VAR,
    get_base_url,
    get_cli_setting,
    get_connection_limits,
    get_session_timeout,
)
from .navigation.capability_gate import CapabilityGate
from .navigation.navigation_manager import NavigationManager
from .navigation.path_configuration import PathConfiguration, configured_sources
from .navigation.shell_settings import ShellSettings
from .navigation.visit_router import VisitRequest
from .session.content_session import ContentSession
from .session.errors import presentation_for
from .session.events import VisitCompleted, VisitFailed, VisitProposal
from .state.app_state import ShellState
#
#######################################################################################################################
#
# Classes:

class TurboShell(App[None]):
    """
    Terminal shell for a Turbo backend.

    Every navigation goes through ``VisitProposal`` messages handled here, one
    at a time; session completions arrive on the same queue.
    """

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("escape", "back", "Back"),
        ("ctrl+r", "reload", "Reload"),
    ]

    def __init__(
        self,
        base_url: Optional[Union[httpx.URL, str]] = None,
        path_configuration: Optional[PathConfiguration] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        open_external: Optional[Callable[[str], object]] = None,
    ):
        """
        Args:
            base_url: Backend root; read from the configuration when omitted
            path_configuration: Rule source; built from [path_configuration] when omitted
            transport: Transport shared by both content sessions
            open_external: Opens URLs the shell does not manage, the system browser by default
        """
        super().__init__()
        base_url = str(base_url) if base_url is not None else get_base_url()
        # A trailing slash keeps the home URL identical however it is reached
        self.base_url = httpx.URL(base_url if base_url.endswith("/") else base_url + "/")
        self.app_name = get_cli_setting("general", "app_name", "Turbo Shell")
        self.title = self.app_name

        self._owns_transport = transport is None
        self._transport = transport or httpx.AsyncHTTPTransport(limits=get_connection_limits())
        user_agent = get_cli_setting("session", "user_agent", "turbo-shell")
        timeout = get_session_timeout()
        self.primary_session = ContentSession(
            SESSION_PRIMARY, self, transport=self._transport, user_agent=user_agent, timeout=timeout
        )
        self.modal_session = ContentSession(
            SESSION_MODAL, self, transport=self._transport, user_agent=user_agent, timeout=timeout
        )

        if path_configuration is None:
            path_configuration = PathConfiguration(
                configured_sources(str(self.base_url)),
                client=httpx.AsyncClient(transport=self._transport, follow_redirects=True),
                timeout=float(get_cli_setting("path_configuration", "fetch_timeout", 10.0)),
            )
        self.path_configuration = path_configuration

        self.shell_state = ShellState()
        self.gate = CapabilityGate(self.shell_state)
        self.navigation = NavigationManager(self, self.shell_state, self.primary_session, self.modal_session)
        self._open_external = open_external or webbrowser.open

        logger.info(f"{self.app_name} {__version__} initialized for {self.base_url}")

    async def on_mount(self) -> None:
        """Load the path configuration, then the home page."""
        await self.path_configuration.load()
        self.shell_state.settings = ShellSettings.from_raw(self.path_configuration.settings)
        self.gate.initial()
        self.load_home()

    async def on_unmount(self) -> None:
        await self.primary_session.close()
        await self.modal_session.close()
        await self.path_configuration.close()
        if self._owns_transport:
            await self._transport.aclose()
        logger.info("Shell closed")

    def load_home(self) -> None:
        self.post_message(VisitProposal(str(self.base_url), action=ACTION_REPLACE))

    def session_named(self, name: str) -> ContentSession:
        return self.modal_session if name == SESSION_MODAL else self.primary_session

    def is_current(self, session_name: str, screen) -> bool:
        """Whether a completion for ``screen`` still matters."""
        return self.session_named(session_name).is_active(screen) and self.navigation.is_live(screen)

    # --- Message handlers ---

    @on(VisitProposal)
    async def handle_visit_proposal(self, message: VisitProposal) -> None:
        try:
            url = resolve_visit_url(message.url, self.base_url)
        except httpx.InvalidURL as e:
            logger.warning(f"Ignoring visit to unparseable URL {message.url!r}: {e}")
            self.notify(f"Could not open {message.url}: {e}", severity="error")
            return
        if not is_managed_url(url, self.base_url):
            logger.info(f"Opening external URL in browser: {url}")
            self._open_external(str(url))
            return

        properties = dict(self.path_configuration.properties_for(url))
        if message.properties:
            properties.update(message.properties)
        request = VisitRequest.create(url, message.action, properties)
        try:
            await self.navigation.visit(request)
        except Exception as e:
            logger.exception(f"Visit to {url} could not be applied")
            self.notify(f"Could not open {url.path}: {e}", severity="error")

    @on(VisitCompleted)
    async def handle_visit_completed(self, message: VisitCompleted) -> None:
        screen = message.screen
        if not self.is_current(message.session_name, screen):
            logger.debug(f"Ignoring completion for stale screen {screen!r}")
            return

        await screen.show_content(message.content)
        capabilities = self.gate.evaluate(message.content.html, message.content.url.path)
        await screen.apply_capabilities(capabilities)
        top = self.shell_state.navigation.top
        if top is not None and top is not screen:
            await top.sync_chrome()

    @on(VisitFailed)
    async def handle_visit_failed(self, message: VisitFailed) -> None:
        screen = message.screen
        if not self.is_current(message.session_name, screen):
            logger.debug(f"Ignoring failure for stale screen {screen!r}")
            return
        await screen.show_error(presentation_for(message.error))

    # --- Actions ---

    async def action_back(self) -> None:
        if not self.navigation.can_go_back():
            logger.debug("Nothing to go back to")
            return
        await self.navigation.go_back()

    def action_reload(self) -> None:
        if not self.navigation.reload():
            logger.debug("Nothing to reload")


def main_cli_runner():
    """Entry point for the turbo-shell command."""
    parser = argparse.ArgumentParser(
        description="turbo-shell - A terminal shell for Turbo web applications",
        prog="turbo-shell",
    )
    parser.add_argument(
        "--environment",
        type=str,
        help="Named environment from [urls] in the config file",
    )
    parser.add_argument(
        "--url",
        type=str,
        help="Base URL of the backend; overrides the environment",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log at DEBUG level",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args()

    if args.environment:
        os.environ[ENVIRONMENT_ENV_VAR] = args.environment
    if args.url:
        os.environ[BASE_URL_ENV_VAR] = args.url

    configure_application_logging(debug=args.debug)

    try:
        base_url = get_base_url()
    except KeyError as e:
        parser.error(str(e.args[0]))

    try:
        TurboShell(base_url=base_url).run()
    except Exception:
        logger.exception("Shell terminated with an error")
        sys.exit(1)


if __name__ == "__main__":
    main_cli_runner()

#
# End of app.py
#######################################################################################################################
