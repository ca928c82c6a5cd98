"""
Account lifecycle: registration, login, token refresh, profile lookup and admin CRUD.

Every public method returns a ReqRes envelope and never raises. Internal steps
return Success/Failure; unexpected exceptions are caught once at the method
boundary and reported as a 500 envelope.
"""

import functools
import logging
from typing import TYPE_CHECKING, Any, Callable, Mapping, Protocol, TypeVar

import jwt
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from accounts.core.security import BcryptPasswordHasher, JwtTokenIssuer
from accounts.models.user import ROLE_USER, User
from accounts.repositories.users import SqlAlchemyUserStore, UserStore
from accounts.schemas.auth import UserUpdate
from accounts.schemas.envelope import ReqRes
from accounts.schemas.user import UserOut
from accounts.services.authenticator import (
    Authenticator,
    PasswordHasher,
    StoreAuthenticationProvider,
)
from accounts.services.result import Failure, FailureReason, Result, Success

if TYPE_CHECKING:
    from accounts.core.config import Settings

logger = logging.getLogger(__name__)

MSG_REGISTERED = "User Saved Successfully"
MSG_REGISTRATION_FAILED = "User registration failed"
MSG_LOGGED_IN = "Successfully Logged In"
MSG_LOGIN_USER_MISSING = "User not found"
MSG_REFRESHED = "Successfully Refreshed Token"
MSG_REFRESH_INVALID = "Refresh token is invalid or expired"
MSG_LIST_OK = "Successful"
MSG_USER_NOT_FOUND = "User Not found"
MSG_DELETED = "User deleted successfully"
MSG_DELETE_NOT_FOUND = "User not found for deletion"
MSG_UPDATED = "User updated successfully"
MSG_UPDATE_FAILED = "User update failed"
# get_my_info reports a missing user with the update message.
MSG_UPDATE_NOT_FOUND = "User not found for update"
MSG_PROFILE_OK = "successful"

F = TypeVar("F", bound=Callable[..., ReqRes])


class TokenIssuer(Protocol):
    expiration_label: str

    def generate(self, identity: str, claims: Mapping[str, Any] | None = None) -> str: ...

    def generate_refresh(self, extra_claims: Mapping[str, Any], identity: str) -> str: ...

    def validate(self, token: str, identity: str) -> bool: ...

    def extract_subject(self, token: str) -> str: ...

    def is_access_token(self, token: str) -> bool: ...


def _envelope_boundary(func: F) -> F:
    """Convert any exception escaping an operation into a 500 envelope."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> ReqRes:
        try:
            return func(*args, **kwargs)
        except Exception as e:
            logger.exception("Account operation %s failed: %s", func.__name__, e)
            return ReqRes(status_code=500, message=f"Error occurred: {e}", error=str(e))

    return wrapper  # type: ignore[return-value]


def _failure_envelope(failure: Failure) -> ReqRes:
    return ReqRes(
        status_code=failure.status_code,
        message=failure.message,
        error=failure.error,
    )


def _user_out(user: User) -> UserOut:
    return UserOut.model_validate(user)


class AccountService:
    """Orchestrates the user store, password hasher, token issuer and authenticator."""

    def __init__(
        self,
        store: UserStore,
        hasher: PasswordHasher,
        tokens: TokenIssuer,
        authenticator: Authenticator,
    ) -> None:
        self.store = store
        self.hasher = hasher
        self.tokens = tokens
        self.authenticator = authenticator

    @classmethod
    def for_session(cls, session: Session, settings: "Settings") -> "AccountService":
        """Wire the SQLAlchemy store, bcrypt hasher and JWT issuer from settings."""
        store = SqlAlchemyUserStore(session)
        hasher = BcryptPasswordHasher.from_settings(settings)
        return cls(
            store=store,
            hasher=hasher,
            tokens=JwtTokenIssuer.from_settings(settings),
            authenticator=Authenticator(StoreAuthenticationProvider(store, hasher)),
        )

    def _persist(self, user: User, failure_message: str) -> Result[User]:
        try:
            return Success(self.store.save(user))
        except (SQLAlchemyError, ValueError) as e:
            logger.warning("Persisting user failed: email=%s, error=%s", user.email, e)
            return Failure(FailureReason.VALIDATION_OR_PERSISTENCE, failure_message, error=str(e))

    def _access_token(self, user: User) -> str:
        return self.tokens.generate(user.email, {"role": user.role})

    def _resolve_refresh_user(self, refresh_token: str) -> Result[User]:
        invalid = Failure(FailureReason.TOKEN_INVALID, MSG_REFRESH_INVALID)
        try:
            email = self.tokens.extract_subject(refresh_token)
        except jwt.PyJWTError:
            return invalid
        # Access tokens cannot mint new access tokens.
        if self.tokens.is_access_token(refresh_token):
            return invalid
        user = self.store.find_by_email(email)
        if user is None or not self.tokens.validate(refresh_token, user.email):
            return invalid
        return Success(user)

    @_envelope_boundary
    def register(
        self,
        email: str,
        password: str,
        name: str | None = None,
        city: str | None = None,
        role: str = ROLE_USER,
    ) -> ReqRes:
        # No uniqueness pre-check; a duplicate email fails on the store's unique index.
        user = User(
            email=email,
            password_hash=self.hasher.encode(password),
            name=name,
            city=city,
            role=role,
        )
        outcome = self._persist(user, MSG_REGISTRATION_FAILED)
        if isinstance(outcome, Failure):
            return _failure_envelope(outcome)
        saved = outcome.value
        logger.info("User registered: user_id=%s, role=%s", saved.id, saved.role)
        return ReqRes(status_code=200, message=MSG_REGISTERED, our_users=_user_out(saved))

    @_envelope_boundary
    def login(self, email: str, password: str) -> ReqRes:
        auth = self.authenticator.authenticate(email, password)
        if isinstance(auth, Failure):
            return _failure_envelope(auth)
        user = self.store.find_by_email(email)
        if user is None:
            return _failure_envelope(Failure(FailureReason.AUTHENTICATION, MSG_LOGIN_USER_MISSING))

        token = self._access_token(user)
        refresh_token = self.tokens.generate_refresh({}, user.email)
        logger.info("User logged in: user_id=%s", user.id)
        return ReqRes(
            status_code=200,
            message=MSG_LOGGED_IN,
            token=token,
            refresh_token=refresh_token,
            role=user.role,
            expiration_time=self.tokens.expiration_label,
        )

    @_envelope_boundary
    def refresh_token(self, refresh_token: str) -> ReqRes:
        outcome = self._resolve_refresh_user(refresh_token)
        if isinstance(outcome, Failure):
            logger.warning("Refresh rejected: %s", outcome.message)
            return _failure_envelope(outcome)
        user = outcome.value
        logger.info("Access token refreshed: user_id=%s", user.id)
        return ReqRes(
            status_code=200,
            message=MSG_REFRESHED,
            token=self._access_token(user),
            refresh_token=refresh_token,
            expiration_time=self.tokens.expiration_label,
        )

    @_envelope_boundary
    def get_all_users(self) -> ReqRes:
        users = self.store.find_all()
        return ReqRes(
            status_code=200,
            message=MSG_LIST_OK,
            our_users_list=[_user_out(u) for u in users],
        )

    @_envelope_boundary
    def get_users_by_id(self, user_id: int) -> ReqRes:
        user = self.store.find_by_id(user_id)
        if user is None:
            return _failure_envelope(Failure(FailureReason.NOT_FOUND, MSG_USER_NOT_FOUND))
        return ReqRes(
            status_code=200,
            message=f"Users with id '{user_id}' found successfully",
            our_users=_user_out(user),
        )

    @_envelope_boundary
    def delete_user(self, user_id: int) -> ReqRes:
        if self.store.find_by_id(user_id) is None:
            return _failure_envelope(Failure(FailureReason.NOT_FOUND, MSG_DELETE_NOT_FOUND))
        self.store.delete_by_id(user_id)
        logger.info("User deleted: user_id=%s", user_id)
        return ReqRes(status_code=200, message=MSG_DELETED)

    @_envelope_boundary
    def update_user(self, user_id: int, patch: UserUpdate) -> ReqRes:
        user = self.store.find_by_id(user_id)
        if user is None:
            return _failure_envelope(Failure(FailureReason.NOT_FOUND, MSG_UPDATE_NOT_FOUND))

        # id and role are never changed here.
        if patch.email:
            user.email = patch.email
        if patch.name:
            user.name = patch.name
        if patch.city:
            user.city = patch.city
        if patch.password:
            user.password_hash = self.hasher.encode(patch.password)

        outcome = self._persist(user, MSG_UPDATE_FAILED)
        if isinstance(outcome, Failure):
            return _failure_envelope(outcome)
        logger.info("User updated: user_id=%s", user_id)
        return ReqRes(status_code=200, message=MSG_UPDATED, our_users=_user_out(outcome.value))

    @_envelope_boundary
    def get_my_info(self, email: str) -> ReqRes:
        user = self.store.find_by_email(email)
        if user is None:
            return _failure_envelope(Failure(FailureReason.NOT_FOUND, MSG_UPDATE_NOT_FOUND))
        return ReqRes(status_code=200, message=MSG_PROFILE_OK, our_users=_user_out(user))
