"""Issuing and verifying signed access tokens."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum
from functools import lru_cache

from jose import JWTError, jwt
from jose.exceptions import JOSEError, JWTClaimsError

from account_service.config import get_settings
from account_service.models.enums import Role


class TokenConfigurationError(RuntimeError):
    """Raised when the token service cannot sign tokens."""


class TokenFailureReason(str, Enum):
    """Why a token was rejected."""

    MISSING = "missing"
    MALFORMED = "malformed"
    SIGNATURE_MISMATCH = "signature_mismatch"
    EXPIRED = "expired"


@dataclass(frozen=True)
class Claims:
    """Identity facts carried by a verified token."""

    subject_id: str
    role: Role
    issued_at: datetime
    expires_at: datetime


@dataclass(frozen=True)
class TokenFailure:
    """A rejected token and the reason it was rejected."""

    reason: TokenFailureReason


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """Signs and verifies stateless JWT access tokens.

    A token is valid while its signature matches the configured secret and
    the current time is at or before its ``exp`` claim. There is no clock
    skew tolerance and no server-side revocation.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(minutes=1440),
        clock: Callable[[], datetime] | None = None,
    ):
        if not secret:
            raise TokenConfigurationError("JWT secret is not configured")
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = ttl
        self.clock = clock or _utcnow

    def issue(self, subject_id: str, role: Role | str) -> str:
        """Create a signed token for a user."""
        now = self.clock()
        to_encode = {
            "sub": str(subject_id),
            "role": Role(role).value,
            "iat": int(now.timestamp()),
            "exp": int((now + self.ttl).timestamp()),
        }
        try:
            return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)
        except JOSEError as e:
            raise TokenConfigurationError(f"Unable to sign token: {e}") from e

    def verify(self, token: str | None) -> Claims | TokenFailure:
        """Check a token's structure, signature and expiry."""
        if not token:
            return TokenFailure(TokenFailureReason.MISSING)

        # Structure first, so a bad signature is distinguishable from garbage
        try:
            header = jwt.get_unverified_header(token)
            jwt.get_unverified_claims(token)
        except JWTError:
            return TokenFailure(TokenFailureReason.MALFORMED)

        if header.get("alg") != self.algorithm:
            return TokenFailure(TokenFailureReason.MALFORMED)

        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTClaimsError:
            return TokenFailure(TokenFailureReason.MALFORMED)
        except JWTError:
            return TokenFailure(TokenFailureReason.SIGNATURE_MISMATCH)

        claims = self._parse_claims(payload)
        if claims is None:
            return TokenFailure(TokenFailureReason.MALFORMED)

        if self.clock() > claims.expires_at:
            return TokenFailure(TokenFailureReason.EXPIRED)

        return claims

    @staticmethod
    def _parse_claims(payload: dict) -> Claims | None:
        subject_id = payload.get("sub")
        issued_at = payload.get("iat")
        expires_at = payload.get("exp")
        if not isinstance(subject_id, str) or not subject_id:
            return None
        if not isinstance(issued_at, int) or not isinstance(expires_at, int):
            return None
        try:
            role = Role(payload.get("role"))
        except ValueError:
            return None
        return Claims(
            subject_id=subject_id,
            role=role,
            issued_at=datetime.fromtimestamp(issued_at, UTC),
            expires_at=datetime.fromtimestamp(expires_at, UTC),
        )


@lru_cache
def get_token_service() -> TokenService:
    """Get the token service configured from settings."""
    settings = get_settings()
    return TokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(minutes=settings.jwt_expiration_minutes),
    )
