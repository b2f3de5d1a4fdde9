"""
Navigation manager for URL-based navigation.

Applies routing decisions to the shell state, mirrors them onto Textual's
screen stack and starts the load in the right content session.
"""

from typing import TYPE_CHECKING, Callable, List, Optional

import httpx
from loguru import logger

from ..session.content_session import ContentSession
from ..state.app_state import ShellState
from ..state.navigation_state import StackMutation
from .visit_router import RouteDecision, VisitRequest, VisitTarget, route

if TYPE_CHECKING:
    from textual.app import App

    from ..UI.Screens.visitable_screen import VisitableScreen


class NavigationManager:
    """
    Owns every change to the primary stack and the modal presentation.

    Only called from the app's message handlers, so visits are applied one at
    a time in arrival order.
    """

    def __init__(
        self,
        app: "App",
        state: ShellState,
        session: ContentSession,
        modal_session: ContentSession,
        screen_factory: Optional[Callable[[httpx.URL, bool], "VisitableScreen"]] = None,
    ):
        self.app = app
        self.state = state
        self.session = session
        self.modal_session = modal_session
        self._screen_factory = screen_factory or _default_screen_factory
        self._log = logger.bind(module="NavigationManager")

    @property
    def active_url(self) -> Optional[httpx.URL]:
        screen = self.session.active_screen
        return screen.url if screen is not None else None

    def is_live(self, screen: "VisitableScreen") -> bool:
        """Whether ``screen`` is still on the stack or presented as the modal."""
        return screen in self.state.navigation or screen is self.state.modal_screen

    async def visit(self, request: VisitRequest) -> RouteDecision:
        """
        Route ``request`` and apply the outcome.

        Args:
            request: The visit to perform

        Returns:
            The routing decision that was applied
        """
        decision = route(
            request,
            self.state.navigation,
            modal_presented=self.state.modal_presented,
            active_url=self.active_url,
        )
        self._log.info(
            f"Visit {request.url} ({request.action.value}) -> {decision.branch.value}, "
            f"{decision.mutation.value}, {decision.target.value}"
        )

        if decision.dismiss_modal:
            await self.dismiss_modal()

        if decision.target is VisitTarget.MODAL:
            screen = self._screen_factory(decision.url, True)
            self.state.modal_screen = screen
            await self.app.push_screen(screen)
            self.modal_session.visit(screen, reload=decision.reload)
            return decision

        screen = self._screen_factory(decision.url, False)
        removed = self.state.navigation.apply(decision.mutation, screen)
        await self._mirror(decision.mutation, removed, screen)
        self.session.visit(screen, reload=decision.reload)
        return decision

    async def _mirror(self, mutation: StackMutation, removed: List["VisitableScreen"], screen: "VisitableScreen") -> None:
        """Make Textual's screen stack match the navigation stack."""
        if mutation is StackMutation.NONE:
            return
        if not removed:
            await self.app.push_screen(screen)
            return
        for _ in range(len(removed) - 1):
            await self.app.pop_screen()
        await self.app.switch_screen(screen)

    async def dismiss_modal(self) -> bool:
        """
        Dismiss the presented modal, if any.

        Returns:
            True if a modal was dismissed
        """
        modal = self.state.modal_screen
        if modal is None:
            return False
        self.state.modal_screen = None
        self.modal_session.activate(None)
        if self.app.screen is modal:
            await self.app.pop_screen()
        self._log.debug(f"Dismissed modal {modal.url}")
        return True

    async def go_back(self) -> bool:
        """
        Dismiss the modal, or reveal the previous screen without reloading it.

        Returns:
            True if navigation happened, False otherwise
        """
        if await self.dismiss_modal():
            return True

        popped = self.state.navigation.pop()
        if popped is None:
            self._log.debug("No previous screen to go back to")
            return False

        await self.app.pop_screen()
        self.session.activate(self.state.navigation.top)
        self._log.info(f"Back from {popped.url} to {self.state.navigation.top.url}")
        return True

    def reload(self) -> bool:
        """Reload whichever screen is in front."""
        session = self.modal_session if self.state.modal_presented else self.session
        return session.reload() is not None

    def can_go_back(self) -> bool:
        return self.state.modal_presented or len(self.state.navigation) > 1


def _default_screen_factory(url: httpx.URL, modal: bool) -> "VisitableScreen":
    from ..UI.Screens.visitable_screen import ModalVisitableScreen, VisitableScreen

    return ModalVisitableScreen(url) if modal else VisitableScreen(url)
