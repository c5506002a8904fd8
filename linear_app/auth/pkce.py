"""OAuth 2.0 PKCE helpers for the Linear authorization flow."""

from __future__ import annotations

import base64
import hashlib
import secrets
from urllib.parse import urlencode

LINEAR_AUTH_URL = "https://linear.app/oauth/authorize"


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def generate_state() -> str:
    """Random CSRF state value (64 hex characters)."""
    return secrets.token_hex(32)


def generate_code_verifier() -> str:
    return _b64url(secrets.token_bytes(32))


def generate_code_challenge(verifier: str) -> str:
    """S256 challenge: base64url(sha256(verifier)) without padding."""
    return _b64url(hashlib.sha256(verifier.encode("ascii")).digest())


def build_authorization_url(
    client_id: str,
    redirect_uri: str,
    state: str,
    code_challenge: str,
    *,
    scope: str = "read",
) -> str:
    if not client_id or not redirect_uri:
        raise RuntimeError("OAuth client_id and redirect_uri are required")
    params = {
        "client_id": client_id,
        "redirect_uri": redirect_uri,
        "response_type": "code",
        "scope": scope,
        "state": state,
        "code_challenge": code_challenge,
        "code_challenge_method": "S256",
        "prompt": "consent",
    }
    return f"{LINEAR_AUTH_URL}?{urlencode(params)}"
