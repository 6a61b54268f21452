"""Anti-CSRF token retrieval and session-state guards."""

from ..config import SIGN_IN_PATH
from ..errors import ErrorKind, report_error
from ..network.executor import RequestExecutor
from ..session import Session


def fetch_token(executor: RequestExecutor, force: bool = False) -> str | None:
    """
    Return the session's CSRF token, loading ``/users/sign_in`` first when
    none is known yet or *force* is set.

    Any pod page carries the token in a ``csrf-token`` meta tag; the sign-in
    page is the one every other page would redirect to when logged out.
    The executor stores the token itself, so the response is not inspected
    here.
    """
    if executor.session.token is None or force:
        executor.execute(SIGN_IN_PATH)
    return executor.session.token


def check_init(session: Session) -> bool:
    if session.token is None:
        report_error(session, ErrorKind.CONNECTION_NOT_INITIALIZED, "Connection not initialised.")
        return False
    return True


def check_login(session: Session) -> bool:
    if not check_init(session):
        return False
    if not session.logged_in:
        report_error(session, ErrorKind.NOT_LOGGED_IN, "Not logged in.")
        return False
    return True
