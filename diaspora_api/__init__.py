"""
diaspora_api
============
Python package for talking to a diaspora* pod through its web interface:
log in, publish and delete posts, delete comments, and read the account's
aspects and connected services.

The pod has no token-issuing API, so the client scrapes the CSRF token
from server-rendered pages, echoes it back on every state-changing
request and carries the pod's session cookies between calls.

Package structure
-----------------
diaspora_api/
├── __init__.py       – package init and public API
├── config.py         – configuration constants and env-var defaults
├── logging_setup.py  – package logger (colorlog when installed)
├── session.py        – Session state record and pod URL building
├── errors.py         – ErrorKind, ApiError and the error reporter
├── client.py         – DiasporaClient façade, quick_connect()
├── pods.py           – public pod directory lookup
├── cli.py            – argparse CLI (``python -m diaspora_api``)
├── network/          – requests.Session factory and RequestExecutor
├── auth/             – init / login / logout / deinit, CSRF token, digests
├── resources/        – post, delete, cached aspects / services
└── extraction/       – named regex patterns, flash-message parsing

Quick start
-----------
    from diaspora_api import DiasporaClient

    client = DiasporaClient("pod.example.org")
    if client.init() and client.login("alice", "secret"):
        print(client.post("Hello world")["permalink"])
    else:
        print(client.last_error)
"""

from .client import DiasporaClient, quick_connect
from .errors import ApiError, ErrorKind
from .extraction import extract_pattern
from .pods import fetch_pod_list
from .resources import normalise_aspects
from .session import LastRequest, Session

__version__ = "1.0.0"

__all__ = [
    "DiasporaClient",
    "quick_connect",
    "ApiError",
    "ErrorKind",
    "LastRequest",
    "Session",
    "extract_pattern",
    "fetch_pod_list",
    "normalise_aspects",
]
