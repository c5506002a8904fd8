import base64
import hashlib
from urllib.parse import parse_qs, urlparse

import pytest

from linear_app.auth import (
    OAUTH_STATE_KEY,
    PKCE_VERIFIER_KEY,
    AuthTokens,
    OneTimeStore,
    SessionSigner,
    SessionStore,
    build_authorization_url,
    generate_code_challenge,
    generate_code_verifier,
    generate_state,
)


class FakeClock:
    def __init__(self, now=1_000.0):
        self.now = now

    def __call__(self):
        return self.now


def test_state_and_verifier_shape():
    state = generate_state()
    assert len(state) == 64
    int(state, 16)
    assert generate_state() != state

    verifier = generate_code_verifier()
    assert 43 <= len(verifier) <= 128
    assert "=" not in verifier


def test_code_challenge_is_s256():
    verifier = "dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk"
    expected = base64.urlsafe_b64encode(hashlib.sha256(verifier.encode()).digest()).rstrip(b"=").decode()
    assert generate_code_challenge(verifier) == expected == "E9Melhoa2OwvFrEMTJguCHaoeK1t8URWbuGJSstw-cM"


def test_authorization_url():
    url = build_authorization_url("client", "https://app.example/callback", "st", "ch")
    query = parse_qs(urlparse(url).query)
    assert url.startswith("https://linear.app/oauth/authorize?")
    assert query["code_challenge_method"] == ["S256"]
    assert query["state"] == ["st"]
    assert query["response_type"] == ["code"]
    with pytest.raises(RuntimeError):
        build_authorization_url("", "https://app.example/callback", "st", "ch")


def test_one_time_store_reads_once():
    store = OneTimeStore(clock=FakeClock())
    store.put(PKCE_VERIFIER_KEY, "verifier")
    assert store.pop(PKCE_VERIFIER_KEY) == "verifier"
    assert store.pop(PKCE_VERIFIER_KEY) is None
    assert store.pop("missing") is None


def test_one_time_store_expiry():
    clock = FakeClock()
    store = OneTimeStore(ttl=600, clock=clock)
    store.put(OAUTH_STATE_KEY, "state")
    store.put(PKCE_VERIFIER_KEY, "verifier")
    assert len(store) == 2

    clock.now += 600
    assert store.pop(OAUTH_STATE_KEY) is None
    assert len(store) == 0


def test_session_roundtrip_and_expiry():
    clock = FakeClock()
    signer = SessionSigner("secret", ttl=60, clock=clock)
    tokens = AuthTokens(access_token="at", refresh_token="rt", expires_at=5_000.0)
    token = signer.sign(tokens)

    assert signer.verify(token) == tokens
    clock.now += 60
    assert signer.verify(token) is None


def test_session_rejects_tampering():
    signer = SessionSigner("secret", clock=FakeClock())
    token = signer.sign(AuthTokens("at", None, 1.0))
    payload, signature = token.split(".")

    assert signer.verify(f"{payload}x.{signature}") is None
    assert SessionSigner("other", clock=FakeClock()).verify(token) is None
    assert signer.verify("no-dot") is None
    assert signer.verify(None) is None


def test_session_requires_secret():
    with pytest.raises(RuntimeError):
        SessionSigner("")


def test_session_store():
    store = SessionStore(SessionSigner("secret", clock=FakeClock()))
    assert store.get() is None
    tokens = AuthTokens("at", "rt", 10.0)
    store.create(tokens)
    assert store.get() == tokens
    store.delete()
    assert store.get() is None
