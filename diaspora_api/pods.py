"""Public pod directory lookup."""

import requests

from .config import POD_LIST_URL, REQUEST_TIMEOUT
from .logging_setup import log


def fetch_pod_list(
    url: str = POD_LIST_URL,
    timeout: float = REQUEST_TIMEOUT,
    http: requests.Session | None = None,
) -> list[dict]:
    """
    Download the public pod directory and return the visible pods as
    ``{"domain": ..., "secure": ...}`` dicts.

    Pods flagged as hidden are skipped.  Any network or decoding problem is
    logged and results in an empty list.
    """
    getter = http.get if http is not None else requests.get
    try:
        resp = getter(url, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except requests.RequestException as exc:
        log.error("Could not fetch pod list from %s: %s", url, exc)
        return []
    except ValueError as exc:
        log.error("Pod list from %s is not valid JSON: %s", url, exc)
        return []

    pods = []
    for pod in (data.get("pods") or []) if isinstance(data, dict) else []:
        if not isinstance(pod, dict) or pod.get("hidden") != "no" or not pod.get("domain"):
            continue
        pods.append({"domain": pod["domain"], "secure": pod.get("secure")})
    log.debug("Pod list: %d visible pod(s)", len(pods))
    return pods
