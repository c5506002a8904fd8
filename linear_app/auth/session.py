"""Signed, expiring session tokens carrying the user's OAuth tokens."""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
import logging
import time
from collections.abc import Callable
from dataclasses import asdict, dataclass

from linear_app.core.config import SESSION_TTL

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class AuthTokens:
    access_token: str
    refresh_token: str | None
    expires_at: float


def _b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64decode(text: str) -> bytes:
    return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))


class SessionSigner:
    """Encode AuthTokens into an HMAC-SHA256 signed ``payload.signature`` string.

    Tokens are valid for ``ttl`` seconds after signing. Verification returns
    None for anything tampered with, expired, or malformed.
    """

    def __init__(self, secret: str | bytes | None, ttl: float = SESSION_TTL, clock: Callable[[], float] = time.time):
        if not secret:
            raise RuntimeError("Missing session secret")
        self._key = secret.encode() if isinstance(secret, str) else secret
        self.ttl = float(ttl)
        self._clock = clock

    def _sign(self, payload: str) -> str:
        return _b64encode(hmac.new(self._key, payload.encode(), hashlib.sha256).digest())

    def sign(self, tokens: AuthTokens) -> str:
        body = asdict(tokens)
        body["exp"] = self._clock() + self.ttl
        payload = _b64encode(json.dumps(body, sort_keys=True).encode())
        return f"{payload}.{self._sign(payload)}"

    def verify(self, token: str | None) -> AuthTokens | None:
        if not token or token.count(".") != 1:
            return None
        payload, signature = token.split(".")
        if not hmac.compare_digest(signature.encode(), self._sign(payload).encode()):
            logger.warning("Rejected session token with invalid signature")
            return None
        try:
            body = json.loads(_b64decode(payload))
        except (binascii.Error, UnicodeDecodeError, ValueError) as exc:
            logger.warning("Rejected malformed session token: %s", exc)
            return None
        if not isinstance(body, dict):
            return None
        try:
            if self._clock() >= float(body.get("exp", 0)):
                return None
            return AuthTokens(
                access_token=body["access_token"],
                refresh_token=body.get("refresh_token"),
                expires_at=float(body["expires_at"]),
            )
        except (KeyError, TypeError, ValueError):
            return None


class SessionStore:
    """Cookie-style session holder backed by a SessionSigner."""

    def __init__(self, signer: SessionSigner):
        self.signer = signer
        self._token: str | None = None

    def create(self, tokens: AuthTokens) -> str:
        self._token = self.signer.sign(tokens)
        return self._token

    def get(self) -> AuthTokens | None:
        return self.signer.verify(self._token)

    def delete(self) -> None:
        self._token = None
