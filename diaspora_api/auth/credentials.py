"""Salted credential digests used for the idempotent re-login check."""

import hashlib
import hmac
import os

from ..config import CREDENTIAL_HASH_ITERATIONS


def credential_digest(username: str, password: str, salt: bytes) -> bytes:
    """
    PBKDF2-HMAC-SHA256 over ``username + NUL + password`` with *salt*.

    The username is mixed in so a digest cannot be replayed against a
    different account on the same client.
    """
    secret = username.encode("utf-8") + b"\x00" + password.encode("utf-8")
    return hashlib.pbkdf2_hmac(
        "sha256",
        secret,
        salt,
        CREDENTIAL_HASH_ITERATIONS,
        dklen=32,
    )


def new_credential_digest(username: str, password: str) -> tuple[bytes, bytes]:
    """Return ``(salt, digest)`` for freshly supplied credentials."""
    salt = os.urandom(16)
    return salt, credential_digest(username, password, salt)


def credentials_match(
    username: str,
    password: str,
    stored_username: str | None,
    salt: bytes | None,
    digest: bytes | None,
) -> bool:
    if stored_username is None or salt is None or digest is None:
        return False
    if not hmac.compare_digest(username.encode("utf-8"), stored_username.encode("utf-8")):
        return False
    return hmac.compare_digest(credential_digest(username, password, salt), digest)
