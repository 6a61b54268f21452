"""
DiasporaClient – one caller-owned connection to a diaspora* pod.

Typical use::

    client = DiasporaClient("pod.example.org")
    if client.init() and client.login("alice", "secret"):
        result = client.post("Hello world", aspects="public")
        if result is None:
            print(client.last_error)

No method raises for network or protocol failures; each returns a
definite result and leaves the reason in :attr:`last_error`.  A client is
meant to be used from one thread at a time.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import requests

from .auth.login import deinit as _deinit
from .auth.login import init_connection as _init_connection
from .auth.login import login as _login
from .auth.login import logout as _logout
from .config import DEFAULT_PROVIDER, REQUEST_TIMEOUT
from .errors import ApiError
from .network.client import build_session
from .network.executor import RequestExecutor
from .resources import lists as _lists
from .resources import posts as _posts
from .session import Session, normalise_pod


class DiasporaClient:
    """Session-holding client for a single pod and a single account."""

    def __init__(
        self,
        pod: str,
        secure: bool = True,
        *,
        provider: str = DEFAULT_PROVIDER,
        timeout: float = REQUEST_TIMEOUT,
        verify_ssl: bool = True,
        ca_bundle: str | None = None,
        http: requests.Session | None = None,
    ) -> None:
        self.provider = provider
        self._session = Session(pod=normalise_pod(pod), secure=bool(secure))
        self._http = http if http is not None else build_session(verify_ssl=verify_ssl, ca_bundle=ca_bundle)
        self._executor = RequestExecutor(self._session, self._http, timeout=timeout)

    def __repr__(self) -> str:
        return f"DiasporaClient(pod={self._session.pod!r}, secure={self._session.secure}, logged_in={self._session.logged_in})"

    # ------------------------------------------------------------------
    # Connection state
    # ------------------------------------------------------------------

    @property
    def pod(self) -> str:
        return self._session.pod

    @property
    def secure(self) -> bool:
        return self._session.secure

    @property
    def token(self) -> str | None:
        return self._session.token

    @property
    def last_error(self) -> ApiError | None:
        return self._session.last_error

    @property
    def last_request(self):
        return self._session.last_request

    def get_pod_url(self, path: str = "") -> str:
        return self._session.pod_url(path)

    def is_logged_in(self) -> bool:
        return self._session.logged_in

    def init(self, pod: str | None = None, secure: bool | None = None) -> bool:
        return _init_connection(self._executor, pod, secure)

    def login(self, username: str, password: str, force: bool = False) -> bool:
        return _login(self._executor, username, password, force)

    def logout(self) -> None:
        _logout(self._session)

    def deinit(self) -> None:
        _deinit(self._session)

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    def post(
        self,
        text: str,
        aspects: str | Iterable[Any] | None = "public",
        extra_fields: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        return _posts.post(self._executor, text, aspects, extra_fields, provider=self.provider)

    def delete(self, kind: str, item_id: Any) -> bool:
        return _posts.delete(self._executor, kind, item_id)

    def get_aspects(self, force: bool = False) -> dict[Any, str] | None:
        return _lists.get_list(self._executor, "aspects", force)

    def get_services(self, force: bool = False) -> dict[str, str] | None:
        return _lists.get_list(self._executor, "services", force)

    # ------------------------------------------------------------------
    # Persistence support
    # ------------------------------------------------------------------

    def export_state(self) -> dict[str, Any]:
        """
        Opaque, JSON-serialisable connection state for the caller to store.

        Credentials are not part of it; after :meth:`restore_state` the
        client is initialised but has to :meth:`login` again (usually
        without a fresh :meth:`init`, the cookies carry the pod session).
        """
        return {
            "pod": self._session.pod,
            "secure": self._session.secure,
            "token": self._session.token,
            "cookies": dict(self._session.cookies),
        }

    def restore_state(self, state: dict[str, Any]) -> None:
        _deinit(self._session)
        self._session.pod = normalise_pod(state.get("pod") or self._session.pod)
        self._session.secure = bool(state.get("secure", self._session.secure))
        self._session.token = state.get("token") or None
        self._session.cookies = dict(state.get("cookies") or {})

    # ------------------------------------------------------------------
    # Resource management
    # ------------------------------------------------------------------

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "DiasporaClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def quick_connect(
    pod: str,
    username: str,
    password: str,
    secure: bool = True,
    **kwargs: Any,
) -> DiasporaClient:
    """
    Build a client and attempt ``init`` + ``login``.

    The client is returned either way; check ``is_logged_in()`` and
    ``last_error`` to see how far it got.
    """
    client = DiasporaClient(pod, secure, **kwargs)
    if client.init():
        client.login(username, password)
    return client
