"""Identity Resolver tests - token decoding, freshness window, user id derivation.

Tests cover:
    - Same secret → same user id; user id is sha256(secret)[:16]
    - Header scheme check
    - Malformed payloads (no colon, extra colon, empty parts, bad instant, bad base64)
    - Freshness boundary at exactly 24h
"""

import base64
import hashlib
from datetime import datetime, timedelta, timezone

import pytest

from notesync.core.errors import AuthError
from notesync.core.identity import (
    decode_token, derive_user_id, encode_token, extract_bearer_token,
)

ISSUED_MS = 1_700_000_000_000
ISSUED_AT = datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)


def _header(payload: bytes) -> str:
    return "Bearer " + base64.b64encode(payload).decode("ascii")


# --- User id derivation -------------------------------------------------------

def test_user_id_is_deterministic():
    assert derive_user_id("p1") == derive_user_id("p1")


def test_user_id_is_truncated_sha256():
    assert derive_user_id("p1") == hashlib.sha256(b"p1").hexdigest()[:16]
    assert len(derive_user_id("anything")) == 16


def test_different_secrets_give_different_ids():
    assert derive_user_id("p1") != derive_user_id("p2")


def test_tokens_minted_at_different_times_resolve_to_same_user():
    now = ISSUED_AT + timedelta(hours=2)
    first = decode_token(_header(b"p1:1700000000000"), now=now)
    second = decode_token(_header(b"p1:1700003600000"), now=now)
    assert first.user_id == second.user_id


# --- Happy path ---------------------------------------------------------------

def test_decode_reference_token():
    identity = decode_token(
        _header(b"p1:1700000000000"), now=ISSUED_AT + timedelta(minutes=5),
    )
    assert identity.secret == "p1"
    assert identity.user_id == hashlib.sha256(b"p1").hexdigest()[:16]
    assert identity.issued_at == ISSUED_AT


def test_encode_token_matches_wire_format():
    token = encode_token("p1", ISSUED_AT)
    assert base64.b64decode(token) == b"p1:1700000000000"


def test_secret_with_unicode_survives():
    header = "Bearer " + encode_token("pässwörd", ISSUED_AT)
    identity = decode_token(header, now=ISSUED_AT)
    assert identity.secret == "pässwörd"


def test_unpadded_token_accepted():
    token = base64.b64encode(b"p1:1700000000000").decode("ascii").rstrip("=")
    identity = decode_token(f"Bearer {token}", now=ISSUED_AT)
    assert identity.user_id == derive_user_id("p1")


def test_url_safe_token_accepted():
    token = base64.urlsafe_b64encode(b"~~~:1700000000000").decode("ascii")
    assert "-" in token
    identity = decode_token(f"Bearer {token.rstrip('=')}", now=ISSUED_AT)
    assert identity.secret == "~~~"


# --- Header -------------------------------------------------------------------

@pytest.mark.parametrize("header", [None, "", "Basic abc", "bearer abc", "Bearer"])
def test_bad_scheme_rejected(header):
    with pytest.raises(AuthError, match="missing or malformed header"):
        decode_token(header, now=ISSUED_AT)


def test_extract_bearer_token_strips_prefix():
    assert extract_bearer_token("Bearer abc==") == "abc=="


# --- Malformed tokens ---------------------------------------------------------

@pytest.mark.parametrize("payload", [
    b"no-colon-here",
    b"a:b:1700000000000",
    b":1700000000000",
    b"p1:",
    b"p1:not-a-number",
    b"p1:-5",
    b"\xff\xfe:1700000000000",
])
def test_malformed_payload_rejected(payload):
    with pytest.raises(AuthError, match="malformed token"):
        decode_token(_header(payload), now=ISSUED_AT)


def test_invalid_base64_rejected():
    with pytest.raises(AuthError, match="malformed token"):
        decode_token("Bearer abc", now=ISSUED_AT)


def test_absurd_issue_instant_rejected():
    with pytest.raises(AuthError, match="malformed token"):
        decode_token(_header(b"p1:99999999999999999999999"), now=ISSUED_AT)


def test_auth_error_maps_to_401():
    with pytest.raises(AuthError) as exc_info:
        decode_token(None)
    assert exc_info.value.http_status == 401


# --- Freshness ----------------------------------------------------------------

def test_token_just_past_24h_is_expired():
    now = ISSUED_AT + timedelta(hours=24, milliseconds=1)
    with pytest.raises(AuthError, match="expired"):
        decode_token(_header(b"p1:1700000000000"), now=now)


def test_token_at_23h59m_is_accepted():
    now = ISSUED_AT + timedelta(hours=23, minutes=59)
    assert decode_token(_header(b"p1:1700000000000"), now=now).secret == "p1"


def test_token_exactly_24h_old_is_accepted():
    now = ISSUED_AT + timedelta(hours=24)
    assert decode_token(_header(b"p1:1700000000000"), now=now).secret == "p1"


def test_custom_max_age():
    now = ISSUED_AT + timedelta(minutes=2)
    with pytest.raises(AuthError, match="expired"):
        decode_token(
            _header(b"p1:1700000000000"), now=now, max_age=timedelta(minutes=1),
        )


def test_naive_now_treated_as_utc():
    now = (ISSUED_AT + timedelta(hours=1)).replace(tzinfo=None)
    assert decode_token(_header(b"p1:1700000000000"), now=now).secret == "p1"
