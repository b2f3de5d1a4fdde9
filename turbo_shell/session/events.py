"""
Messages carried between the content sessions, the screens and the shell.

Completions are posted to the app and handled on Textual's message loop, one
at a time, so routing and the capability gate never run concurrently.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

import httpx
from textual.message import Message


@dataclass(frozen=True)
class LoadedContent:
    """A successful response for a visit."""
    requested_url: httpx.URL
    url: httpx.URL
    status_code: int
    content_type: str
    html: str


class VisitProposal(Message):
    """Request to visit a URL. The single inbound entry point for navigation."""

    def __init__(
        self,
        url: str,
        action: Optional[str] = None,
        properties: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__()
        self.url = url
        self.action = action
        self.properties = properties


class VisitCompleted(Message):
    """A session finished loading a screen."""

    def __init__(self, session_name: str, screen: Any, content: LoadedContent):
        super().__init__()
        self.session_name = session_name
        self.screen = screen
        self.content = content


class VisitFailed(Message):
    """A session could not load a screen."""

    def __init__(self, session_name: str, screen: Any, error: Exception):
        super().__init__()
        self.session_name = session_name
        self.screen = screen
        self.error = error
