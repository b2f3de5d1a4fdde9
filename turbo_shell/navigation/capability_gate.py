# turbo_shell/navigation/capability_gate.py
# Description: Re-evaluates protected tabs and buttons after each successful load
#
# Imports
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence, Tuple
#
# Third-party imports
from bs4 import BeautifulSoup
from loguru import logger
#
# Local Imports
from ..Constants import AUTHENTICATION_META_NAME
from .shell_settings import ButtonSettings, ShellSettings, TabSettings

if TYPE_CHECKING:
    from ..state.app_state import ShellState
#
#######################################################################################################################
#
# Functions:

def probe_authentication(html: Optional[str]) -> bool:
    """
    Read the authentication marker from a loaded document.

    A missing marker, or a document that cannot be parsed, means not authenticated.
    """
    if not html:
        return False
    try:
        soup = BeautifulSoup(html, "html.parser")
        meta = soup.find("meta", attrs={"name": AUTHENTICATION_META_NAME})
    except Exception as e:
        logger.debug(f"Authentication probe failed: {e}")
        return False
    if meta is None:
        return False
    return str(meta.get("content", "")).strip().lower() == "true"


def visible_tabs(tabs: Sequence[TabSettings], authenticated: bool) -> Tuple[TabSettings, ...]:
    """Tabs to offer; protected ones only when authenticated."""
    return tuple(tab for tab in tabs if authenticated or not tab.protected)


def visible_buttons(
    buttons: Sequence[ButtonSettings],
    path: Optional[str],
    authenticated: bool,
) -> Tuple[Tuple[ButtonSettings, ...], Tuple[ButtonSettings, ...]]:
    """Left and right buttons for the page at ``path``."""
    left, right = [], []
    for button in buttons:
        if button.path != path:
            continue
        if button.protected and not authenticated:
            continue
        if button.visit is None:
            if button.script:
                logger.debug(f"Button '{button.label}' on {path} only runs a script; not offered")
            continue
        if button.label is None:
            continue
        (left if button.side == "left" else right).append(button)
    return tuple(left), tuple(right)


@dataclass(frozen=True)
class Capabilities:
    """Affordances offered after a load."""
    authenticated: bool
    tabs: Tuple[TabSettings, ...]
    left_buttons: Tuple[ButtonSettings, ...]
    right_buttons: Tuple[ButtonSettings, ...]


class CapabilityGate:
    """Recomputes ``ShellState.authenticated`` and what it unlocks."""

    def __init__(self, state: "ShellState"):
        self.state = state

    @property
    def settings(self) -> ShellSettings:
        return self.state.settings

    def initial(self) -> Capabilities:
        """Affordances before anything has loaded: unauthenticated, no buttons."""
        return self._publish(False, None)

    def evaluate(self, html: Optional[str], path: Optional[str]) -> Capabilities:
        """
        Run after a successful load.

        Args:
            html: The loaded document
            path: Path of the loaded page, used to pick its buttons
        """
        authenticated = probe_authentication(html)
        if authenticated != self.state.authenticated:
            logger.info(f"Authentication state changed: {self.state.authenticated} -> {authenticated}")
        return self._publish(authenticated, path)

    def _publish(self, authenticated: bool, path: Optional[str]) -> Capabilities:
        tabs = visible_tabs(self.settings.tabs, authenticated)
        left, right = visible_buttons(self.settings.buttons, path, authenticated)
        self.state.authenticated = authenticated
        self.state.visible_tabs = tabs
        self.state.left_buttons = left
        self.state.right_buttons = right
        return Capabilities(authenticated, tabs, left, right)

#
# End of capability_gate.py
#######################################################################################################################
