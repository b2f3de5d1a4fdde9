"""
Content sessions: browsing contexts that load screens.
"""

from .content_session import ContentSession, LoadState
from .errors import (
    ContentTypeMismatch,
    ErrorKind,
    ErrorPresentation,
    HTTPStatusFailure,
    NetworkFailure,
    PageLoadFailure,
    TimeoutFailure,
    TurboError,
    TurboShellError,
    presentation_for,
)
from .events import LoadedContent, VisitCompleted, VisitFailed, VisitProposal

__all__ = [
    'ContentSession',
    'LoadState',
    'ErrorKind',
    'ErrorPresentation',
    'TurboShellError',
    'TurboError',
    'HTTPStatusFailure',
    'NetworkFailure',
    'TimeoutFailure',
    'ContentTypeMismatch',
    'PageLoadFailure',
    'presentation_for',
    'LoadedContent',
    'VisitProposal',
    'VisitCompleted',
    'VisitFailed',
]
