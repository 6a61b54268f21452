"""
Single-request execution against the pod.

Every call goes through :meth:`RequestExecutor.execute`, which

* resolves pod-rooted paths against the session's *current* pod and scheme,
* never follows redirects (status codes are the protocol),
* sends the session's cookie mapping and replaces it with whatever cookies
  the response sets,
* snapshots the response into ``session.last_request`` and picks up a fresh
  CSRF token from the body whenever one is present.

Transport failures are returned as an :class:`~diaspora_api.errors.ApiError`
and leave the session's token, cookies and last request untouched.
"""

from __future__ import annotations

from typing import Any

import requests
from requests.structures import CaseInsensitiveDict

from ..config import REQUEST_TIMEOUT
from ..errors import ApiError, transport_error
from ..extraction.patterns import extract_pattern
from ..logging_setup import log, mask_secret
from ..session import LastRequest, Session


class RequestExecutor:
    def __init__(
        self,
        session: Session,
        http: requests.Session,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self.session = session
        self.http = http
        self.timeout = timeout

    def execute(
        self,
        path: str,
        method: str = "GET",
        data: Any = None,
        headers: dict[str, str] | None = None,
    ) -> LastRequest | ApiError:
        """
        Issue one request and return the normalised response, or the
        transport error when the pod could not be reached at all.
        """
        url = self.session.pod_url(path) if path.startswith("/") else path

        kwargs: dict[str, Any] = {
            "timeout": self.timeout,
            "allow_redirects": False,
        }
        if data is not None:
            kwargs["data"] = data
        if headers:
            kwargs["headers"] = headers
        if self.session.cookies:
            kwargs["cookies"] = dict(self.session.cookies)

        log.debug("%s %s", method, url)
        try:
            resp = self.http.request(method, url, **kwargs)
        except requests.RequestException as exc:
            log.debug("%s %s failed: %s", method, url, exc)
            return transport_error(self.session, exc)
        finally:
            # The session's mapping is the only cookie store; keep the
            # requests jar from merging old and new cookies behind our back.
            self.http.cookies.clear()

        body = resp.text or ""
        last = LastRequest(
            status_code=resp.status_code,
            reason=resp.reason or "",
            headers=CaseInsensitiveDict(resp.headers),
            body=body,
        )
        self.session.last_request = last
        log.debug("%s %s → HTTP %s %s", method, url, last.status_code, last.reason)

        token = extract_pattern(body, "token")
        if token:
            if token != self.session.token:
                log.debug("CSRF token updated: %s", mask_secret(token))
            self.session.token = token

        if resp.cookies:
            self.session.cookies = resp.cookies.get_dict()
            log.debug("Cookies replaced: %s", sorted(self.session.cookies))

        return last
