# url_helpers.py
#
# Helpers for deciding where a proposed URL should go
#
# Imports
from typing import Union
#
# Third-party imports
import httpx
#
#######################################################################################################################
#
# Functions

WEB_SCHEMES = ("http", "https")


def resolve_visit_url(url_or_path: Union[httpx.URL, str], base: Union[httpx.URL, str]) -> httpx.URL:
    """Absolute URL for a proposed visit; paths are taken relative to ``base``."""
    return httpx.URL(base).join(url_or_path)


def is_managed_url(url: httpx.URL, base: Union[httpx.URL, str]) -> bool:
    """
    Whether ``url`` belongs to the backend and is shown inside the shell.

    Anything on another host, or with a non-web scheme such as ``mailto:``,
    is handed to the system browser instead.
    """
    base = httpx.URL(base)
    if url.scheme not in WEB_SCHEMES:
        return False
    return url.host == base.host and url.port == base.port

#
# End of url_helpers.py
#######################################################################################################################
