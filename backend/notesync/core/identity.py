"""Identity Resolver - bearer token decoding and secret-derived user ids.

Invariants:
    - Same secret always yields the same UserId (salt-free SHA-256, 16 hex chars)
    - Token wire format: base64(secret + ":" + issueInstantMillis)
    - Token older than max_age is rejected; exactly max_age old is accepted
    - Pure functions: no IO, time is injectable

Design Decisions:
    - The secret itself is never persisted; only its digest keys the store
    - Known weaknesses kept as-is: no revocation, no scope, replay within window
"""

import base64
import binascii
import hashlib
from datetime import datetime, timedelta, timezone

from notesync.core.domain_types import Identity, UserId
from notesync.core.errors import AuthError

BEARER_PREFIX = "Bearer "
TOKEN_MAX_AGE = timedelta(hours=24)
USER_ID_LENGTH = 16

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)


def derive_user_id(secret: str) -> UserId:
    """Truncated SHA-256 of the secret: 64 bits, stable across tokens."""
    digest = hashlib.sha256(secret.encode("utf-8")).hexdigest()
    return UserId(digest[:USER_ID_LENGTH])


def to_epoch_ms(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return (moment - _EPOCH) // _ONE_MS


def encode_token(secret: str, issued_at: datetime | None = None) -> str:
    """Mint a token in the wire format existing clients produce."""
    issued_ms = to_epoch_ms(issued_at or datetime.now(timezone.utc))
    raw = f"{secret}:{issued_ms}".encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


def extract_bearer_token(auth_header: str | None) -> str:
    if not auth_header or not auth_header.startswith(BEARER_PREFIX):
        raise AuthError("missing or malformed header")
    return auth_header[len(BEARER_PREFIX):]


def _b64decode_lenient(token: str) -> bytes:
    """Accept unpadded and url-safe tokens as well as standard base64."""
    token = token.replace("-", "+").replace("_", "/")
    return base64.b64decode(token + "=" * (-len(token) % 4))


def _split_payload(token: str) -> tuple[str, int]:
    try:
        decoded = _b64decode_lenient(token).decode("utf-8")
    except (binascii.Error, ValueError):
        raise AuthError("malformed token")

    parts = decoded.split(":")
    if len(parts) != 2 or not all(parts):
        raise AuthError("malformed token")
    secret, issued_raw = parts
    if not (issued_raw.isascii() and issued_raw.isdigit()):
        raise AuthError("malformed token")
    return secret, int(issued_raw)


def decode_token(
    auth_header: str | None,
    *,
    now: datetime | None = None,
    max_age: timedelta = TOKEN_MAX_AGE,
) -> Identity:
    """Resolve an Authorization header value into an Identity.

    Raises AuthError with one of: "missing or malformed header",
    "malformed token", "expired".
    """
    token = extract_bearer_token(auth_header)
    secret, issued_ms = _split_payload(token)

    try:
        issued_at = _EPOCH + timedelta(milliseconds=issued_ms)
    except OverflowError:
        raise AuthError("malformed token")

    now_ms = to_epoch_ms(now or datetime.now(timezone.utc))
    if now_ms - issued_ms > max_age // _ONE_MS:
        raise AuthError("expired")

    return Identity(
        user_id=derive_user_id(secret), secret=secret, issued_at=issued_at,
    )
