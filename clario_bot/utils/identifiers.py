"""Identifier helpers for producing log-safe participant tokens."""

from __future__ import annotations

import base64
import hmac
import hashlib
import os
from functools import lru_cache
from typing import Optional


def _encode_digest(digest: bytes) -> str:
    """URL-safe base64 encoding without padding."""
    token = base64.urlsafe_b64encode(digest).decode("ascii")
    return token.rstrip("=")


def _pseudonymize(value: str, secret: str, length: int = 16) -> str:
    """Return a deterministic pseudonym for a value using the provided secret."""
    digest = hmac.new(secret.encode("utf-8"), value.encode("utf-8"), hashlib.sha256).digest()
    token = _encode_digest(digest)
    return token[:length]


def _resolve_secret(secret: Optional[str]) -> Optional[str]:
    """Return the secret to use for pseudonymization, falling back to env."""
    if secret:
        return secret
    return os.environ.get("LOG_PSEUDONYM_SECRET") or None


@lru_cache(maxsize=4096)
def _pseudonym_cache(participant_id: str, secret: str) -> str:
    return _pseudonymize(participant_id, secret)


def get_log_safe_participant_id(participant_id: str, *, secret: Optional[str] = None) -> str:
    """Return a deterministic, non-reversible identifier suitable for logs.

    Without a configured secret the id is masked to its last four characters.
    """
    resolved_secret = _resolve_secret(secret)
    if resolved_secret is None:
        return f"***{participant_id[-4:]}"
    return _pseudonym_cache(participant_id, resolved_secret)


def clear_log_safe_participant_cache() -> None:
    """Clear cached pseudonyms (useful for tests or secret rotation)."""
    _pseudonym_cache.cache_clear()
