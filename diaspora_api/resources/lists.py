"""Cached aspect and connected-service lists scraped from the bookmarklet page."""

import json
from typing import Any

from ..auth.token import check_login
from ..config import BOOKMARKLET_PATH, PUBLIC_ASPECT
from ..errors import ApiError, ErrorKind, report_error
from ..extraction.patterns import extract_pattern
from ..logging_setup import log
from ..network.executor import RequestExecutor

LIST_KINDS = ("aspects", "services")

_FETCH_ERRORS = {
    "aspects":  "Error loading aspects.",
    "services": "Error loading services.",
}


def _build_aspects(raw: list[Any]) -> dict[Any, str]:
    # "public" is not a real aspect, but it is always a valid target.
    result: dict[Any, str] = {PUBLIC_ASPECT: "Public"}
    for aspect in raw:
        if isinstance(aspect, dict) and "id" in aspect:
            result[aspect["id"]] = str(aspect.get("name", aspect["id"]))
    return result


def _build_services(raw: list[Any]) -> dict[str, str]:
    result: dict[str, str] = {}
    for service in raw:
        name = str(service)
        if name:
            result[name] = name[0].upper() + name[1:]
    return result


def get_list(executor: RequestExecutor, kind: str, force: bool = False) -> dict[Any, str] | None:
    """
    Return the ``id → display name`` mapping for *kind* (``"aspects"`` or
    ``"services"``).

    A non-empty cache is served without any request unless *force* is set.
    A failed fetch leaves the cache untouched and returns None; a page that
    loads but has no decodable list returns the existing cache.
    """
    if kind not in LIST_KINDS:
        raise ValueError(f"unknown list kind: {kind!r}")

    session = executor.session
    if not check_login(session):
        return None

    current: dict[Any, str] = getattr(session, kind)
    if current and not force:
        return dict(current)

    response = executor.execute(BOOKMARKLET_PATH)
    if isinstance(response, ApiError) or response.status_code != 200:
        report_error(session, ErrorKind.fetch_failed(kind), _FETCH_ERRORS[kind])
        return None

    fragment = extract_pattern(response.body, kind)
    try:
        raw = json.loads(fragment) if fragment else None
    except (json.JSONDecodeError, ValueError) as exc:
        log.debug("Could not decode %s list: %s", kind, exc)
        raw = None

    if not isinstance(raw, list):
        log.debug("No %s list found on %s", kind, BOOKMARKLET_PATH)
        return dict(current)

    rebuilt = _build_aspects(raw) if kind == "aspects" else _build_services(raw)
    setattr(session, kind, rebuilt)
    log.debug("Loaded %d %s", len(rebuilt), kind)
    return dict(rebuilt)
