# mockapi/core/security.py
"""Stateless session tokens for the admin API.

Tokens are compact HS256 JWTs carrying ``sub``, ``iat`` and ``exp``.
There is no revocation list: a token stays valid until it expires, and
rotating the signing secret invalidates every outstanding token.
"""
import hmac
import time
from dataclasses import dataclass
from typing import Optional, Union

from jose import jwk, jwt
from jose.exceptions import JOSEError
from jose.utils import base64url_encode

ALGORITHM = "HS256"
DEFAULT_TTL_SECONDS = 86400

Secret = Union[str, bytes]


@dataclass(frozen=True)
class TokenPayload:
    subject: str
    issued_at: int
    expires_at: int


def issue_token(subject: str, secret: Secret, ttl_seconds: int = DEFAULT_TTL_SECONDS, now: Optional[int] = None) -> str:
    """Sign a token for ``subject`` that expires ``ttl_seconds`` after ``now``."""
    issued_at = int(time.time()) if now is None else int(now)
    claims = {
        "sub": subject,
        "iat": issued_at,
        "exp": issued_at + ttl_seconds,
    }
    return jwt.encode(claims, secret, algorithm=ALGORITHM)


def _signature_segment(signing_input: str, secret: Secret) -> str:
    key = jwk.construct(secret, algorithm=ALGORITHM)
    return base64url_encode(key.sign(signing_input.encode("utf-8"))).decode("ascii")


def verify_token(token: str, secret: Secret) -> Optional[TokenPayload]:
    """Return the token's claims, or None if it is malformed, forged or expired."""
    if not isinstance(token, str):
        return None

    parts = token.split(".")
    if len(parts) != 3:
        return None

    header_b64, payload_b64, signature_b64 = parts
    try:
        expected = _signature_segment(f"{header_b64}.{payload_b64}", secret)
    except (JOSEError, ValueError, TypeError):
        return None

    # whole-string comparison on the encoded segment, not the decoded bytes
    if not hmac.compare_digest(signature_b64.encode("ascii", "replace"), expected.encode("ascii")):
        return None

    try:
        claims = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except (JOSEError, ValueError, TypeError):
        return None

    subject = claims.get("sub")
    issued_at = claims.get("iat")
    expires_at = claims.get("exp")
    if not isinstance(subject, str) or not isinstance(issued_at, int) or not isinstance(expires_at, int):
        return None

    return TokenPayload(subject=subject, issued_at=issued_at, expires_at=expires_at)


def check_credentials(username: str, password: str, expected_username: str, expected_password: str) -> bool:
    user_ok = hmac.compare_digest(username.encode("utf-8"), expected_username.encode("utf-8"))
    password_ok = hmac.compare_digest(password.encode("utf-8"), expected_password.encode("utf-8"))
    return user_ok and password_ok
