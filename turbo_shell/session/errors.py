# turbo_shell/session/errors.py
# Description: Visit failure taxonomy and the notice shown for each failure
#
# Imports
from dataclasses import dataclass
from enum import Enum
from typing import Optional
#
#######################################################################################################################
#
# Classes:

class TurboShellError(Exception):
    """Base exception for errors raised by the shell."""
    pass


class ErrorKind(Enum):
    """Closed set of ways a visit can fail."""
    HTTP = "http"
    NETWORK_FAILURE = "network_failure"
    TIMEOUT_FAILURE = "timeout_failure"
    CONTENT_TYPE_MISMATCH = "content_type_mismatch"
    PAGE_LOAD_FAILURE = "page_load_failure"


class TurboError(TurboShellError):
    """A visit failed. Terminal for the visit that raised it."""

    kind: ErrorKind = ErrorKind.PAGE_LOAD_FAILURE
    default_description = "The page could not be loaded."

    def __init__(self, description: Optional[str] = None):
        self.description = description or self.default_description
        super().__init__(self.description)


class HTTPStatusFailure(TurboError):
    """The server answered with a non-success status."""

    kind = ErrorKind.HTTP

    def __init__(self, status_code: int, description: Optional[str] = None):
        self.status_code = status_code
        super().__init__(description or f"The server responded with status {status_code}.")


class NetworkFailure(TurboError):
    kind = ErrorKind.NETWORK_FAILURE
    default_description = "A network error prevented the page from loading."


class TimeoutFailure(TurboError):
    kind = ErrorKind.TIMEOUT_FAILURE
    default_description = "The server took too long to respond."


class ContentTypeMismatch(TurboError):
    kind = ErrorKind.CONTENT_TYPE_MISMATCH
    default_description = "The server returned content that cannot be displayed."


class PageLoadFailure(TurboError):
    kind = ErrorKind.PAGE_LOAD_FAILURE


@dataclass(frozen=True)
class ErrorPresentation:
    """What the full-screen notice for a failed visit shows."""
    title: str
    icon: str
    message: str


GENERIC_TITLE = "Problem Loading Page"
GENERIC_ICON = "⚠"

_KIND_PRESENTATIONS = {
    ErrorKind.NETWORK_FAILURE: ("Network Failure", "📡"),
    ErrorKind.TIMEOUT_FAILURE: ("Request Timeout", "⏱"),
    ErrorKind.CONTENT_TYPE_MISMATCH: ("Content Type Mismatch", "🚫"),
    ErrorKind.PAGE_LOAD_FAILURE: (GENERIC_TITLE, "❎"),
}

_STATUS_PRESENTATIONS = {
    401: ("Login Required", "🔒"),
    404: ("Page Not Found", "❓"),
}


def presentation_for(error: BaseException) -> ErrorPresentation:
    """
    Choose the notice for a failed visit.

    Errors outside the taxonomy get the generic presentation.
    """
    message = str(error) or error.__class__.__name__
    if not isinstance(error, TurboError):
        return ErrorPresentation(GENERIC_TITLE, GENERIC_ICON, message)

    if isinstance(error, HTTPStatusFailure):
        title, icon = _STATUS_PRESENTATIONS.get(error.status_code, (GENERIC_TITLE, GENERIC_ICON))
    else:
        title, icon = _KIND_PRESENTATIONS.get(error.kind, (GENERIC_TITLE, GENERIC_ICON))
    return ErrorPresentation(title, icon, error.description)

#
# End of errors.py
#######################################################################################################################
