"""
Tests for turning loaded pages into Markdown.
"""

from turbo_shell.Utils.html_rendering import html_to_markdown


def test_title_and_body_are_extracted():
    title, markdown = html_to_markdown(
        "<html><head><title> Posts </title></head>"
        "<body><h1>All posts</h1><p>See <a href=\"/posts/1\">the first</a>.</p></body></html>"
    )
    assert title == "Posts"
    assert "# All posts" in markdown
    assert "[the first](/posts/1)" in markdown


def test_scripts_and_styles_are_dropped():
    _, markdown = html_to_markdown(
        "<body><script>alert('x')</script><style>p {}</style><p>Visible</p></body>"
    )
    assert "alert" not in markdown
    assert "Visible" in markdown


def test_empty_document():
    assert html_to_markdown("") == (None, "")


def test_page_without_title():
    title, markdown = html_to_markdown("<p>Just text</p>")
    assert title is None
    assert markdown == "Just text"
