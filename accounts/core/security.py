"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any, Mapping

import bcrypt
import jwt

if TYPE_CHECKING:
    from accounts.core.config import Settings

# Min/max lengths for email and password validation (input validation).
EMAIL_MIN_LEN = 3
EMAIL_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

# Claim present only on access tokens.
ACCESS_CLAIM = "role"


def hash_password(plain_password: str, rounds: int = 12) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def expiration_label(minutes: int) -> str:
    """Human-readable token lifetime, e.g. 1440 -> '24Hrs', 90 -> '90Mins'."""
    if minutes % 60 == 0:
        return f"{minutes // 60}Hrs"
    return f"{minutes}Mins"


class BcryptPasswordHasher:
    """Credential hasher backed by bcrypt."""

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    @classmethod
    def from_settings(cls, settings: "Settings") -> "BcryptPasswordHasher":
        return cls(rounds=settings.BCRYPT_ROUNDS)

    def encode(self, plain_password: str) -> str:
        return hash_password(plain_password, rounds=self.rounds)

    def matches(self, plain_password: str, hashed: str) -> bool:
        return verify_password(plain_password, hashed)


class JwtTokenIssuer:
    """
    Signs and checks access/refresh tokens with PyJWT.

    The subject (sub) is the user's email. Access and refresh tokens share the
    secret but have independent lifetimes.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        access_expire_minutes: int = 1440,
        refresh_expire_minutes: int = 10080,
    ) -> None:
        self._secret = secret
        self.algorithm = algorithm
        self.access_expire_minutes = access_expire_minutes
        self.refresh_expire_minutes = refresh_expire_minutes

    @classmethod
    def from_settings(cls, settings: "Settings") -> "JwtTokenIssuer":
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            access_expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
            refresh_expire_minutes=settings.REFRESH_TOKEN_EXPIRE_MINUTES,
        )

    @property
    def expiration_label(self) -> str:
        return expiration_label(self.access_expire_minutes)

    def _encode(self, subject: str, claims: Mapping[str, Any], minutes: int) -> str:
        now = datetime.now(UTC)
        payload: dict[str, Any] = dict(claims)
        payload.update(
            {
                "sub": str(subject),
                "iat": now,
                "exp": now + timedelta(minutes=minutes),
            }
        )
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def generate(self, identity: str, claims: Mapping[str, Any] | None = None) -> str:
        """Create an access token for identity carrying the given claims (e.g. role)."""
        return self._encode(identity, claims or {}, self.access_expire_minutes)

    def generate_refresh(self, extra_claims: Mapping[str, Any], identity: str) -> str:
        """Create a refresh token for identity; extra_claims is usually empty."""
        return self._encode(identity, extra_claims, self.refresh_expire_minutes)

    def decode(self, token: str) -> dict[str, Any]:
        """
        Decode and validate JWT; return payload (sub, exp, iat, and claims).
        Raises jwt.PyJWTError on invalid or expired token.
        """
        return jwt.decode(token, self._secret, algorithms=[self.algorithm])

    def validate(self, token: str, identity: str) -> bool:
        """True only if the signature verifies, the token is unexpired and sub matches identity."""
        try:
            payload = self.decode(token)
        except jwt.PyJWTError:
            return False
        return payload.get("sub") == identity

    def extract_subject(self, token: str) -> str:
        """
        Read sub without verifying signature or expiry; expired tokens still parse.
        Raises jwt.PyJWTError when the token is malformed or has no subject.
        """
        payload = jwt.decode(
            token,
            options={"verify_signature": False, "verify_exp": False},
            algorithms=[self.algorithm],
        )
        sub = payload.get("sub")
        if not sub:
            raise jwt.InvalidTokenError("Token has no subject")
        return str(sub)

    def is_access_token(self, token: str) -> bool:
        """Access tokens carry a role claim; refresh tokens carry only identity. Unverified read."""
        try:
            payload = jwt.decode(
                token,
                options={"verify_signature": False, "verify_exp": False},
                algorithms=[self.algorithm],
            )
        except jwt.PyJWTError:
            return False
        return ACCESS_CLAIM in payload
