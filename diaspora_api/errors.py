"""
Structured error values for the diaspora* pod client.

Nothing in here is raised.  Every client operation returns a plain result
(``True``/``False``, a dict or ``None``) and leaves the reason for a failure
in ``Session.last_error`` as an :class:`ApiError`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from .logging_setup import log

if TYPE_CHECKING:
    from .session import Session


UNKNOWN_ERROR_MESSAGE = "Unknown error occurred."


class ErrorKind(str, Enum):
    """Stable error codes surfaced through ``last_error.kind``."""

    CONNECTION_NOT_INITIALIZED = "connection_not_initialized"
    NOT_LOGGED_IN = "not_logged_in"
    INIT_FAILED = "init_failed"
    LOGIN_FAILED = "login_failed"
    POST_FAILED = "post_failed"
    DELETE_POST_FAILED = "delete_post_failed"
    DELETE_COMMENT_FAILED = "delete_comment_failed"
    ASPECTS_FETCH_FAILED = "aspects_fetch_failed"
    SERVICES_FETCH_FAILED = "services_fetch_failed"
    INVALID_DELETE_TARGET = "invalid_delete_target"
    UNKNOWN_REMOTE_ERROR = "unknown_remote_error"
    TRANSPORT_ERROR = "transport_error"

    @classmethod
    def delete_failed(cls, kind: str) -> "ErrorKind":
        return cls.DELETE_POST_FAILED if kind == "post" else cls.DELETE_COMMENT_FAILED

    @classmethod
    def fetch_failed(cls, kind: str) -> "ErrorKind":
        return cls.ASPECTS_FETCH_FAILED if kind == "aspects" else cls.SERVICES_FETCH_FAILED


@dataclass(frozen=True)
class ApiError:
    """One failure: a stable *kind*, a readable *message* and context *data*."""

    kind: ErrorKind
    message: str
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def status_code(self) -> int | None:
        return self.data.get("status_code")

    @property
    def status_message(self) -> str | None:
        return self.data.get("status_message")

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


def transport_error(session: "Session", exc: Exception) -> ApiError:
    """Record a ``requests`` exception raised before any response arrived."""
    return report_error(
        session,
        ErrorKind.TRANSPORT_ERROR,
        str(exc) or exc.__class__.__name__,
        {"exception": exc.__class__.__name__},
    )


def report_error(
    session: "Session",
    kind: ErrorKind,
    message: str,
    data: dict[str, Any] | None = None,
) -> ApiError:
    """
    Record an error as the session's ``last_error`` and return it.

    The status code and reason of the most recent completed request are
    always attached, even when the failure has nothing to do with that
    request, so a caller looking at the error sees where the session was.
    """
    context = {k: v for k, v in (data or {}).items() if v is not None}
    last = session.last_request
    context["status_code"] = last.status_code if last is not None else None
    context["status_message"] = last.reason if last is not None else None

    error = ApiError(kind=kind, message=message, data=context)
    session.last_error = error
    log.warning("%s (HTTP %s %s)", error, context["status_code"], context["status_message"] or "")
    return error
