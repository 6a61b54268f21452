"""
Session state for one connection to a diaspora* pod.

A :class:`Session` is a plain mutable record; the request executor, the
authentication functions and the resource operations all read and write
it.  It is owned by exactly one :class:`~diaspora_api.client.DiasporaClient`
and is not safe to share between threads.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from requests.structures import CaseInsensitiveDict

    from .errors import ApiError


def normalise_pod(pod: str) -> str:
    """Reduce *pod* to a bare domain: no scheme, no surrounding slashes."""
    pod = pod.strip()
    for prefix in ("https://", "http://"):
        if pod.lower().startswith(prefix):
            pod = pod[len(prefix):]
            break
    return pod.strip("/")


@dataclass(frozen=True)
class LastRequest:
    """Snapshot of a completed HTTP exchange (any status code)."""

    status_code: int
    reason: str
    headers: CaseInsensitiveDict
    body: str


@dataclass
class Session:
    pod: str
    secure: bool = True

    token: str | None = None
    cookies: dict[str, str] = field(default_factory=dict)
    last_request: LastRequest | None = None
    last_error: "ApiError | None" = None

    logged_in: bool = False
    # Sensitive: kept only to short-circuit a repeated login with the same
    # credentials.  The password itself is never stored, only a salted digest.
    username: str | None = None
    credential_salt: bytes | None = field(default=None, repr=False)
    credential_digest: bytes | None = field(default=None, repr=False)

    aspects: dict[Any, str] = field(default_factory=dict)
    services: dict[str, str] = field(default_factory=dict)

    @property
    def scheme(self) -> str:
        return "https" if self.secure else "http"

    def pod_url(self, path: str = "") -> str:
        """
        Full pod URL for *path*, e.g. ``https://pod.example/posts/abc``.

        *path* is trimmed of spaces and slashes on both ends; an empty path
        yields the bare ``scheme://pod``.
        """
        path = path.strip(" /")
        if path:
            path = "/" + path
        return f"{self.scheme}://{self.pod}{path}"

    def clear_login(self) -> None:
        self.logged_in = False
        self.username = None
        self.credential_salt = None
        self.credential_digest = None
        self.aspects = {}
        self.services = {}

    def clear_connection(self) -> None:
        self.last_error = None
        self.token = None
        self.cookies = {}
        self.last_request = None
