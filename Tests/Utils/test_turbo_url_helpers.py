"""
Tests for URL resolution and the managed-domain check.
"""

import httpx
import pytest

from turbo_shell.Utils.url_helpers import is_managed_url, resolve_visit_url

BASE = "http://turbo.test/"


@pytest.mark.parametrize("proposed,expected", [
    ("/posts", "http://turbo.test/posts"),
    ("posts/1", "http://turbo.test/posts/1"),
    ("http://turbo.test/a?b=1", "http://turbo.test/a?b=1"),
    ("https://other.example.org/x", "https://other.example.org/x"),
])
def test_resolve_visit_url(proposed, expected):
    assert resolve_visit_url(proposed, BASE) == httpx.URL(expected)


@pytest.mark.parametrize("candidate,managed", [
    ("http://turbo.test/posts", True),
    ("http://turbo.test:8080/posts", False),
    ("https://other.example.org/", False),
    ("mailto:someone@turbo.test", False),
])
def test_is_managed_url(candidate, managed):
    assert is_managed_url(httpx.URL(candidate), BASE) is managed
