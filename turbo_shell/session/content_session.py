# turbo_shell/session/content_session.py
# Description: A browsing context that loads screens and reports the outcome
#
# Each session has its own httpx client, and so its own cookie jar. The
# primary and modal sessions share one transport, which holds the connection
# pool.
#
# Imports
from __future__ import annotations

import asyncio
import weakref
from enum import Enum
from typing import Any, Optional

import httpx
from loguru import logger

from ..Constants import HTML_CONTENT_TYPES, TURBO_USER_AGENT_SUFFIX
from .errors import (
    ContentTypeMismatch,
    HTTPStatusFailure,
    NetworkFailure,
    PageLoadFailure,
    TimeoutFailure,
    TurboError,
)
from .events import LoadedContent, VisitCompleted, VisitFailed

#######################################################################################################################
#
# Classes:

class LoadState(Enum):
    PENDING = "pending"
    LOADED = "loaded"
    FAILED = "failed"


class ContentSession:
    """
    Loads one screen at a time and posts the result to ``message_target``.

    A new visit supersedes the one in flight: the old task is cancelled and,
    should it finish anyway, its result is dropped.
    """

    def __init__(
        self,
        name: str,
        message_target: Any,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        user_agent: str = "turbo-shell",
        timeout: Optional[httpx.Timeout] = None,
    ):
        """
        Args:
            name: Session name, used in logs and on completion messages
            message_target: Receives ``VisitCompleted``/``VisitFailed`` via ``post_message``
            transport: Shared transport; the session owns a private one when omitted
            user_agent: Product token sent before the Turbo suffix
            timeout: Per-operation timeouts for loads
        """
        self.name = name
        self._target = message_target
        self._owns_transport = transport is None
        self._client = httpx.AsyncClient(
            transport=transport,
            headers={
                "User-Agent": f"{user_agent} {TURBO_USER_AGENT_SUFFIX}",
                "Accept": "text/html, application/xhtml+xml",
            },
            timeout=timeout if timeout is not None else httpx.Timeout(30.0, connect=10.0),
            follow_redirects=True,
        )
        self._active_screen_ref: Optional[weakref.ReferenceType] = None
        self._visit_task: Optional[asyncio.Task] = None
        self._visit_identifier = 0
        self._log = logger.bind(session=name)

    @property
    def active_screen(self) -> Optional[Any]:
        return self._active_screen_ref() if self._active_screen_ref is not None else None

    @property
    def cookies(self) -> httpx.Cookies:
        return self._client.cookies

    def is_active(self, screen: Any) -> bool:
        return screen is not None and self.active_screen is screen

    def activate(self, screen: Any) -> None:
        """Make ``screen`` active without loading it, e.g. when it is revealed by going back."""
        self._cancel_in_flight()
        self._active_screen_ref = weakref.ref(screen) if screen is not None else None

    def visit(self, screen: Any, reload: bool = False) -> asyncio.Task:
        """
        Start loading ``screen.url``; supersedes any load in flight.

        Args:
            screen: The screen to load and make active
            reload: Bypass caches, as for a forced reload

        Returns:
            The load task. Its outcome is posted as a message, so callers rarely await it.
        """
        self._active_screen_ref = weakref.ref(screen)
        return self._start(screen, reload=reload)

    def reload(self) -> Optional[asyncio.Task]:
        """Load the active screen again, bypassing caches; supersedes any load in flight."""
        screen = self.active_screen
        if screen is None:
            self._log.debug("Reload requested with no active screen")
            return None
        return self._start(screen, reload=True)

    async def close(self) -> None:
        self._cancel_in_flight()
        if self._owns_transport:
            await self._client.aclose()
        else:
            # The shared transport belongs to the shell; only drop our browsing state
            self._client.cookies.clear()

    async def fetch(self, url: httpx.URL, reload: bool = False) -> LoadedContent:
        """
        GET ``url`` and classify any failure.

        Raises:
            TurboError: One of the visit failure types
        """
        headers = {"Cache-Control": "no-cache", "Pragma": "no-cache"} if reload else None
        try:
            response = await self._client.get(url, headers=headers)
        except httpx.TimeoutException as e:
            raise TimeoutFailure() from e
        except httpx.TransportError as e:
            raise NetworkFailure(f"A network error prevented the page from loading: {e}") from e
        except httpx.HTTPError as e:
            raise PageLoadFailure(f"The page could not be loaded: {e}") from e

        if not response.is_success:
            raise HTTPStatusFailure(response.status_code)

        content_type = response.headers.get("content-type", "").split(";")[0].strip().lower()
        if content_type not in HTML_CONTENT_TYPES:
            raise ContentTypeMismatch(f"Expected an HTML page but received '{content_type or 'no content type'}'.")

        try:
            html = response.text
        except (UnicodeDecodeError, LookupError) as e:
            raise PageLoadFailure(f"The page could not be decoded: {e}") from e

        return LoadedContent(
            requested_url=url,
            url=response.url,
            status_code=response.status_code,
            content_type=content_type,
            html=html,
        )

    def _start(self, screen: Any, reload: bool) -> asyncio.Task:
        self._cancel_in_flight()
        self._visit_identifier += 1
        screen.load_state = LoadState.PENDING
        screen.load_error = None
        self._log.info(f"{'Reloading' if reload else 'Visiting'} {screen.url}")
        self._visit_task = asyncio.get_running_loop().create_task(
            self._run_visit(screen, self._visit_identifier, reload),
            name=f"{self.name}-visit-{self._visit_identifier}",
        )
        return self._visit_task

    def _cancel_in_flight(self) -> None:
        if self._visit_task is not None and not self._visit_task.done():
            self._log.debug("Superseding in-flight visit")
            self._visit_task.cancel()
        self._visit_task = None

    async def _run_visit(self, screen: Any, visit_identifier: int, reload: bool) -> None:
        try:
            content = await self.fetch(screen.url, reload=reload)
        except TurboError as e:
            outcome = VisitFailed(self.name, screen, e)
        except asyncio.CancelledError:
            self._log.debug(f"Visit to {screen.url} cancelled")
            raise
        except Exception as e:
            # Outside the taxonomy; still reported so the user sees a notice
            self._log.exception(f"Unexpected error visiting {screen.url}")
            outcome = VisitFailed(self.name, screen, e)
        else:
            outcome = VisitCompleted(self.name, screen, content)

        if visit_identifier != self._visit_identifier:
            self._log.debug(f"Dropping superseded result for {screen.url}")
            return

        if isinstance(outcome, VisitCompleted):
            screen.load_state = LoadState.LOADED
            self._log.info(f"Loaded {screen.url} ({outcome.content.status_code})")
        else:
            screen.load_state = LoadState.FAILED
            screen.load_error = getattr(outcome.error, "kind", None)
            self._log.warning(f"Failed to load {screen.url}: {outcome.error!r}")
        self._target.post_message(outcome)

#
# End of content_session.py
#######################################################################################################################
