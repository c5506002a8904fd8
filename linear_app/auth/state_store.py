"""Short-lived, read-once key/value store for OAuth flow values."""

from __future__ import annotations

import time
from collections.abc import Callable

from linear_app.core.config import OAUTH_STATE_TTL

PKCE_VERIFIER_KEY = "pkce_verifier"
OAUTH_STATE_KEY = "oauth_state"


class OneTimeStore:
    """Hold values such as the PKCE verifier or CSRF state between redirects.

    Every entry expires ``ttl`` seconds after it was written and is removed
    the first time it is read, so a value can complete at most one callback.
    """

    def __init__(self, ttl: float = OAUTH_STATE_TTL, clock: Callable[[], float] = time.time):
        self.ttl = float(ttl)
        self._clock = clock
        self._entries: dict[str, tuple[float, str]] = {}

    def put(self, key: str, value: str) -> None:
        self._purge()
        self._entries[key] = (self._clock() + self.ttl, value)

    def pop(self, key: str) -> str | None:
        """Return and delete the value, or None when missing or expired."""
        entry = self._entries.pop(key, None)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            return None
        return value

    def __len__(self) -> int:
        self._purge()
        return len(self._entries)

    def _purge(self) -> None:
        now = self._clock()
        expired = [k for k, (expires_at, _) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
