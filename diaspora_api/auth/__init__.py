"""Authentication submodule – token handling, login state machine, credential digests."""

from diaspora_api.auth.credentials import credentials_match, new_credential_digest
from diaspora_api.auth.login import deinit, init_connection, login, logout
from diaspora_api.auth.token import check_init, check_login, fetch_token

__all__ = [
    "init_connection",
    "login",
    "logout",
    "deinit",
    "fetch_token",
    "check_init",
    "check_login",
    "credentials_match",
    "new_credential_digest",
]
