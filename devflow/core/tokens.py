"""
JWT access tokens: issuance and validation.

Tokens are HMAC-signed and self-describing. Validity depends only on the
signature, issuer, audience and the check time versus `exp`; nothing is
looked up server-side, so there is no revocation.
"""

import math
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Any, Protocol

import jwt

from devflow.core.config import Settings

REQUIRED_CLAIMS = ["sub", "email", "username", "jti", "iat", "exp", "iss", "aud"]


class TokenErrorReason(str, Enum):
    MALFORMED = "malformed"
    BAD_SIGNATURE = "bad_signature"
    ISSUER_MISMATCH = "issuer_mismatch"
    AUDIENCE_MISMATCH = "audience_mismatch"
    EXPIRED = "expired"


class TokenError(Exception):
    """Why a token was rejected. Returned by validate(), not raised by it."""

    def __init__(self, reason: TokenErrorReason, message: str = "") -> None:
        self.reason = reason
        self.message = message or reason.value
        super().__init__(self.message)


class TokenSubject(Protocol):
    """Anything with the identity fields a token embeds (e.g. a User row)."""

    id: Any
    email: Any
    username: Any


@dataclass(frozen=True)
class TokenIdentity:
    """Caller identity resolved from a valid token."""

    user_id: int
    email: str
    username: str
    jti: str
    issued_at: datetime
    expires_at: datetime


class TokenCodec(Protocol):
    def issue(
        self,
        identity: TokenSubject,
        now: datetime | None = None,
        ttl: timedelta | None = None,
    ) -> str: ...

    def validate(
        self, token: str, now: datetime | None = None
    ) -> TokenIdentity | TokenError: ...


def _to_timestamp(value: datetime) -> float:
    """NumericDate keeping sub-second precision; naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.timestamp()


def _numeric_date(value: Any) -> float:
    """Parse an iat/exp claim. JSON numbers only, fractional seconds allowed."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError("NumericDate must be a number")
    if not math.isfinite(value):
        raise ValueError("NumericDate must be finite")
    return float(value)


class JwtTokenCodec:
    """Issues and validates HS256/384/512 JWTs with fixed issuer and audience."""

    def __init__(
        self,
        secret: str,
        issuer: str,
        audience: str,
        ttl: timedelta,
        algorithm: str = "HS256",
    ) -> None:
        self._secret = secret
        self.issuer = issuer
        self.audience = audience
        self.ttl = ttl
        self.algorithm = algorithm

    @classmethod
    def from_settings(cls, settings: Settings) -> "JwtTokenCodec":
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            issuer=settings.JWT_ISSUER,
            audience=settings.JWT_AUDIENCE,
            ttl=timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
            algorithm=settings.JWT_ALGORITHM,
        )

    def issue(
        self,
        identity: TokenSubject,
        now: datetime | None = None,
        ttl: timedelta | None = None,
    ) -> str:
        """Create a signed access token for the identity, valid for [now, now + ttl)."""
        issued_at = now or datetime.now(UTC)
        # exp is rounded from the exact instant so [iat, exp) matches the datetime window.
        expires_at = issued_at + (ttl if ttl is not None else self.ttl)
        payload: dict[str, Any] = {
            "sub": str(identity.id),
            "email": identity.email,
            "username": identity.username,
            "jti": uuid.uuid4().hex,
            "iat": _to_timestamp(issued_at),
            "exp": _to_timestamp(expires_at),
            "iss": self.issuer,
            "aud": self.audience,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def validate(
        self, token: str, now: datetime | None = None
    ) -> TokenIdentity | TokenError:
        """
        Verify signature, issuer, audience and expiry against `now`.
        Returns the embedded identity, or a TokenError describing the first failure.
        """
        if not isinstance(token, str) or not token:
            return TokenError(TokenErrorReason.MALFORMED, "Token is empty")
        try:
            # Time claims are checked below against the caller-supplied clock.
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                audience=self.audience,
                options={
                    "require": REQUIRED_CLAIMS,
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                },
            )
        except jwt.InvalidSignatureError:
            return TokenError(TokenErrorReason.BAD_SIGNATURE, "Signature verification failed")
        except jwt.InvalidIssuerError:
            return TokenError(TokenErrorReason.ISSUER_MISMATCH, "Invalid issuer")
        except jwt.InvalidAudienceError:
            return TokenError(TokenErrorReason.AUDIENCE_MISMATCH, "Invalid audience")
        except jwt.InvalidTokenError as e:
            return TokenError(TokenErrorReason.MALFORMED, f"Malformed token: {e}")

        try:
            user_id = int(payload["sub"])
            issued_at = _numeric_date(payload["iat"])
            expires_at = _numeric_date(payload["exp"])
            issued_dt = datetime.fromtimestamp(issued_at, UTC)
            expires_dt = datetime.fromtimestamp(expires_at, UTC)
        except (TypeError, ValueError, OverflowError, OSError):
            return TokenError(TokenErrorReason.MALFORMED, "Invalid token payload")

        check = now or datetime.now(UTC)
        if check.tzinfo is None:
            check = check.replace(tzinfo=UTC)
        if _to_timestamp(check) >= expires_at:
            return TokenError(TokenErrorReason.EXPIRED, "Token has expired")

        return TokenIdentity(
            user_id=user_id,
            email=str(payload["email"]),
            username=str(payload["username"]),
            jti=str(payload["jti"]),
            issued_at=issued_dt,
            expires_at=expires_dt,
        )
