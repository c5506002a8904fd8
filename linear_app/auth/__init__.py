"""OAuth flow state and session handling, independent of the metrics engine."""

from linear_app.auth.pkce import (
    build_authorization_url,
    generate_code_challenge,
    generate_code_verifier,
    generate_state,
)
from linear_app.auth.session import AuthTokens, SessionSigner, SessionStore
from linear_app.auth.state_store import OAUTH_STATE_KEY, PKCE_VERIFIER_KEY, OneTimeStore

__all__ = [
    "OAUTH_STATE_KEY",
    "PKCE_VERIFIER_KEY",
    "AuthTokens",
    "OneTimeStore",
    "SessionSigner",
    "SessionStore",
    "build_authorization_url",
    "generate_code_challenge",
    "generate_code_verifier",
    "generate_state",
]
