"""Email/password authentication against the user store."""

import logging
from typing import Protocol

from accounts.repositories.users import UserStore
from accounts.services.result import Failure, FailureReason, Result, Success

logger = logging.getLogger(__name__)

BAD_CREDENTIALS = "Bad credentials"


class AuthenticationFailure(Exception):
    """Raised by an authentication provider when credentials are rejected."""

    def __init__(self, message: str = BAD_CREDENTIALS) -> None:
        self.message = message
        super().__init__(message)


class PasswordHasher(Protocol):
    def encode(self, plain_password: str) -> str: ...

    def matches(self, plain_password: str, hashed: str) -> bool: ...


class AuthenticationProvider(Protocol):
    """Verifies credentials; returns None on success, raises AuthenticationFailure otherwise."""

    def verify(self, email: str, password: str) -> None: ...


class StoreAuthenticationProvider:
    """Looks the user up by email and checks the password hash."""

    def __init__(self, store: UserStore, hasher: PasswordHasher) -> None:
        self.store = store
        self.hasher = hasher

    def verify(self, email: str, password: str) -> None:
        user = self.store.find_by_email(email)
        # Same message for unknown email and wrong password.
        if user is None:
            raise AuthenticationFailure(BAD_CREDENTIALS)
        if not self.hasher.matches(password, user.password_hash):
            raise AuthenticationFailure(BAD_CREDENTIALS)


class Authenticator:
    """Wraps a provider; any provider error becomes a failed result (never retried)."""

    def __init__(self, provider: AuthenticationProvider) -> None:
        self.provider = provider

    def authenticate(self, email: str, password: str) -> Result[str]:
        try:
            self.provider.verify(email, password)
        except AuthenticationFailure as e:
            logger.warning("Authentication failed: email=%s, reason=%s", email, e.message)
            return Failure(FailureReason.AUTHENTICATION, e.message)
        except Exception as e:
            logger.warning("Authentication provider error: email=%s, error=%s", email, e)
            return Failure(FailureReason.AUTHENTICATION, str(e), error=str(e))
        return Success(email)
