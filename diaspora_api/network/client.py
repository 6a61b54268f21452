"""
HTTP client configuration for pod communication.

Provides a keep-alive ``requests.Session`` that never retries on its own:
a failed request is reported once and any retry policy is left to the caller.
"""

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import USER_AGENT


def build_session(verify_ssl: bool = True, ca_bundle: str | None = None) -> requests.Session:
    """
    Return a requests.Session with retries disabled and keep-alive pre-configured.

    Args:
        verify_ssl: Whether to verify TLS certificates at all
        ca_bundle:  Path to a PEM bundle to verify against instead of the
                    system store (ignored when *verify_ssl* is False)

    Returns:
        Configured requests.Session instance
    """
    session = requests.Session()
    retry = Retry(total=0, read=False, redirect=False, raise_on_redirect=False)
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    if not verify_ssl:
        session.verify = False
    elif ca_bundle:
        session.verify = ca_bundle
    else:
        session.verify = True
    session.headers.update({
        "User-Agent": USER_AGENT,
        "Connection": "keep-alive",
    })
    return session
