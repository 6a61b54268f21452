"""
Connection set-up, login and teardown for a diaspora* pod.

State machine::

    Uninitialized ──init()──▶ Initialized ──login()──▶ LoggedIn
          ▲                        ▲                       │
          └──────── deinit() ──────┴────── logout() ◀──────┘

* ``init`` is complete once a CSRF token has been scraped.
* ``login`` posts the sign-in form and then loads ``/bookmarklet``; only a
  200 from that session-gated page counts as logged in, because the sign-in
  POST answers with a redirect whether or not the credentials were right.
"""

from ..config import BOOKMARKLET_PATH, SIGN_IN_PATH
from ..errors import ApiError, ErrorKind, report_error
from ..extraction.html_parser import extract_flash_message
from ..logging_setup import log
from ..network.executor import RequestExecutor
from ..session import LastRequest, Session, normalise_pod
from .credentials import credentials_match, new_credential_digest
from .token import check_init, fetch_token


def init_connection(
    executor: RequestExecutor,
    pod: str | None = None,
    secure: bool | None = None,
) -> bool:
    """
    Make sure a CSRF token is available, switching pod/scheme first when a
    different one is passed.  Returns True when a token was obtained.
    """
    session = executor.session
    # Repeated init attempts must not report a stale error.
    session.last_error = None

    force_new_token = False
    new_pod = normalise_pod(pod) if pod is not None else session.pod
    new_secure = bool(secure) if secure is not None else session.secure
    if new_pod != session.pod or new_secure != session.secure:
        log.info("Switching pod: %s → %s://%s", session.pod_url(), "https" if new_secure else "http", new_pod)
        session.pod = new_pod
        session.secure = new_secure
        # Token, cookies and login all belong to the previous pod.
        logout(session)
        session.token = None
        session.cookies = {}
        force_new_token = True

    if fetch_token(executor, force=force_new_token) is None:
        previous = session.last_error
        suffix = f" {previous.message}" if previous is not None else ""
        report_error(
            session,
            ErrorKind.INIT_FAILED,
            f'Failed to initialise connection to pod "{session.pod_url()}".{suffix}',
            {"help": "troubleshooting"},
        )
        return False

    log.debug("Connection to %s initialised", session.pod_url())
    return True


def login(
    executor: RequestExecutor,
    username: str,
    password: str,
    force: bool = False,
) -> bool:
    """
    Log in to the pod.

    A second call with the same credentials while still logged in returns
    True without touching the network unless *force* is set.
    """
    session = executor.session

    if not check_init(session):
        logout(session)
        return False

    if not username or not password or not username.strip() or not password.strip():
        report_error(session, ErrorKind.LOGIN_FAILED, "Username and password must both be set.")
        logout(session)
        return False

    if not force and session.logged_in and credentials_match(
        username, password, session.username, session.credential_salt, session.credential_digest
    ):
        log.debug("Already logged in as %s", username)
        return True

    session.username = username
    session.credential_salt, session.credential_digest = new_credential_digest(username, password)

    params = {
        "user[username]": username,
        "user[password]": password,
        "authenticity_token": fetch_token(executor),
    }
    sign_in = executor.execute(SIGN_IN_PATH, method="POST", data=params)

    # The sign-in POST redirects either way; a session-gated page tells the truth.
    probe = executor.execute(BOOKMARKLET_PATH)

    if isinstance(probe, ApiError) or probe.status_code != 200:
        data: dict = {"help": "troubleshooting"}
        if isinstance(sign_in, LastRequest):
            data["server_message"] = extract_flash_message(sign_in.body)
        report_error(session, ErrorKind.LOGIN_FAILED, "Login failed. Check your login details.", data)
        logout(session)
        return False

    session.logged_in = True
    log.info("Logged in to %s as %s", session.pod_url(), username)
    return True


def logout(session: Session) -> None:
    """Forget login state, credentials and cached lists; keep token and cookies."""
    if session.logged_in:
        log.info("Logged out of %s", session.pod_url())
    session.clear_login()


def deinit(session: Session) -> None:
    """Return the session to its freshly constructed state."""
    logout(session)
    session.clear_connection()
