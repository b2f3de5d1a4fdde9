"""
Tests for the notice chosen for each visit failure.
"""

import pytest

from turbo_shell.session.errors import (
    ContentTypeMismatch,
    ErrorKind,
    HTTPStatusFailure,
    NetworkFailure,
    PageLoadFailure,
    TimeoutFailure,
    presentation_for,
)


@pytest.mark.parametrize("error,title,icon", [
    (HTTPStatusFailure(401), "Login Required", "🔒"),
    (HTTPStatusFailure(404), "Page Not Found", "❓"),
    (HTTPStatusFailure(500), "Problem Loading Page", "⚠"),
    (HTTPStatusFailure(422), "Problem Loading Page", "⚠"),
    (NetworkFailure(), "Network Failure", "📡"),
    (TimeoutFailure(), "Request Timeout", "⏱"),
    (ContentTypeMismatch(), "Content Type Mismatch", "🚫"),
    (PageLoadFailure(), "Problem Loading Page", "❎"),
])
def test_presentation_for_each_failure(error, title, icon):
    presentation = presentation_for(error)
    assert presentation.title == title
    assert presentation.icon == icon
    assert presentation.message == error.description


def test_errors_outside_the_taxonomy_get_the_generic_notice():
    presentation = presentation_for(KeyError("surprise"))
    assert presentation.title == "Problem Loading Page"
    assert presentation.icon == "⚠"


def test_http_failure_carries_its_status():
    error = HTTPStatusFailure(503)
    assert error.kind is ErrorKind.HTTP
    assert "503" in error.description


def test_custom_descriptions_are_kept():
    assert NetworkFailure("offline").description == "offline"
    assert str(TimeoutFailure()) == TimeoutFailure.default_description
