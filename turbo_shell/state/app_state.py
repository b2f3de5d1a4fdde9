"""
Root shell state container.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from ..navigation.shell_settings import ButtonSettings, ShellSettings, TabSettings
from .navigation_state import NavigationStack


@dataclass
class ShellState:
    """
    Single owner of the shell's mutable state.

    Passed explicitly to the routing engine and the capability gate. Nothing
    here is persisted; a restart starts from an empty stack and
    unauthenticated.
    """

    navigation: NavigationStack = field(default_factory=NavigationStack)
    settings: ShellSettings = field(default_factory=ShellSettings)

    # Modal presentation, shown over the primary stack
    modal_screen: Optional[Any] = None

    # Recomputed after every successful load
    authenticated: bool = False
    visible_tabs: Tuple[TabSettings, ...] = ()
    left_buttons: Tuple[ButtonSettings, ...] = ()
    right_buttons: Tuple[ButtonSettings, ...] = ()

    @property
    def modal_presented(self) -> bool:
        return self.modal_screen is not None
