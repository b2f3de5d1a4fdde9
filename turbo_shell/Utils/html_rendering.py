# html_rendering.py
#
# Turns a loaded HTML document into something the terminal can show
#
# Imports
import re
from typing import Optional, Tuple
#
# Third-party imports
from bs4 import BeautifulSoup
from markdownify import markdownify as md
#
#######################################################################################################################
#
# Functions

_EXCESS_BLANK_LINES = re.compile(r"\n{3,}")


def extract_title(soup: BeautifulSoup) -> Optional[str]:
    if soup.title and soup.title.string:
        return soup.title.string.strip() or None
    return None


def html_to_markdown(html: str) -> Tuple[Optional[str], str]:
    """
    Convert a page to Markdown for the terminal renderer.

    Args:
        html: The loaded document

    Returns:
        The document title (if any) and the Markdown of its body
    """
    if not html:
        return None, ""

    soup = BeautifulSoup(html, "html.parser")
    title = extract_title(soup)
    for element in soup(["script", "style", "template", "noscript"]):
        element.decompose()
    body = soup.body or soup

    markdown = md(
        str(body),
        heading_style="atx",
        bullets="-",
        autolinks=True,
        strip=["head", "meta", "link", "form", "input", "button"],
    )
    markdown = _EXCESS_BLANK_LINES.sub("\n\n", markdown)
    return title, markdown.strip()

#
# End of html_rendering.py
#######################################################################################################################
