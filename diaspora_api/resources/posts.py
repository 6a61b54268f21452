"""Creating and deleting posts (and deleting comments) on a pod."""

import json
from collections.abc import Iterable
from typing import Any

from ..auth.token import check_login, fetch_token
from ..config import DELETABLE_KINDS, PUBLIC_ASPECT, STATUS_MESSAGES_PATH
from ..errors import UNKNOWN_ERROR_MESSAGE, ApiError, ErrorKind, report_error
from ..logging_setup import log
from ..network.executor import RequestExecutor


def normalise_aspects(aspects: "str | int | Iterable[Any] | None") -> "str | list[str]":
    """
    Turn a comma-separated string, a single id or an iterable of ids into the
    ``aspect_ids`` value the pod expects.

    Blank entries are dropped and duplicates removed (first one wins).
    ``"public"`` excludes every other aspect, so a selection that is empty
    or contains it collapses to the plain string ``"public"``.
    """
    if aspects is None:
        raw: Iterable[Any] = []
    elif isinstance(aspects, str):
        raw = aspects.split(",")
    elif not isinstance(aspects, Iterable):
        raw = [aspects]
    else:
        raw = aspects

    cleaned: list[str] = []
    for aspect in raw:
        value = str(aspect).strip()
        if value and value not in cleaned:
            cleaned.append(value)

    if not cleaned or PUBLIC_ASPECT in cleaned:
        return PUBLIC_ASPECT
    return cleaned


def _json_headers(executor: RequestExecutor) -> dict[str, str]:
    return {
        "Accept": "application/json",
        "Content-Type": "application/json",
        "X-CSRF-Token": fetch_token(executor) or "",
    }


def _decode(body: str) -> Any:
    try:
        return json.loads(body)
    except (json.JSONDecodeError, ValueError):
        return None


def post(
    executor: RequestExecutor,
    text: str,
    aspects: "str | Iterable[Any] | None" = PUBLIC_ASPECT,
    extra_fields: dict[str, Any] | None = None,
    provider: str = "",
) -> dict[str, Any] | None:
    """
    Publish a status message.

    Returns the pod's JSON representation of the new post with an added
    ``permalink``, or None on failure (see ``session.last_error``).
    """
    session = executor.session
    if not check_login(session):
        return None

    # Extra fields never override the message itself.
    payload = dict(extra_fields or {})
    payload.update({
        "aspect_ids": normalise_aspects(aspects),
        "status_message": {
            "text": text,
            "provider_display_name": provider,
        },
    })

    response = executor.execute(
        STATUS_MESSAGES_PATH,
        method="POST",
        data=json.dumps(payload),
        headers=_json_headers(executor),
    )

    if isinstance(response, ApiError):
        report_error(session, ErrorKind.POST_FAILED, response.message)
        return None

    decoded = _decode(response.body)
    if response.status_code != 201:
        message = UNKNOWN_ERROR_MESSAGE
        if isinstance(decoded, dict) and decoded.get("error"):
            message = str(decoded["error"])
        report_error(session, ErrorKind.POST_FAILED, message)
        return None

    if not isinstance(decoded, dict) or not decoded.get("guid"):
        report_error(session, ErrorKind.POST_FAILED, UNKNOWN_ERROR_MESSAGE, {"body": response.body[:200]})
        return None

    decoded["permalink"] = session.pod_url(f"/posts/{decoded['guid']}")
    log.info("Posted to %s → %s", session.pod, decoded["permalink"])
    return decoded


def delete(executor: RequestExecutor, kind: str, item_id: Any) -> bool:
    """
    Delete one of our own posts or comments.

    The pod answers a foreign comment with 403 but a foreign post with 500;
    both mean "not yours" and are mapped as such, while 403 for a post and
    500 for a comment are reported as unknown errors.
    """
    session = executor.session
    if not check_login(session):
        return False

    if kind not in DELETABLE_KINDS:
        report_error(session, ErrorKind.INVALID_DELETE_TARGET, "You can only delete posts and comments.", {"kind": kind})
        return False

    response = executor.execute(
        f"/{kind}s/{item_id}",
        method="DELETE",
        headers=_json_headers(executor),
    )

    if isinstance(response, ApiError):
        report_error(session, ErrorKind.UNKNOWN_REMOTE_ERROR, response.message, {"kind": kind, "id": item_id})
        return False

    code = response.status_code
    if code == 204:
        log.info("Deleted %s %s", kind, item_id)
        return True

    context = {"kind": kind, "id": item_id}
    if code == 404:
        report_error(session, ErrorKind.delete_failed(kind), f"The {kind} you tried to delete does not exist.", context)
    elif (code == 403 and kind == "comment") or (code == 500 and kind == "post"):
        report_error(session, ErrorKind.delete_failed(kind), f"The {kind} you tried to delete does not belong to you.", context)
    else:
        report_error(session, ErrorKind.UNKNOWN_REMOTE_ERROR, UNKNOWN_ERROR_MESSAGE, context)
    return False
