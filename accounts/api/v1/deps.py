"""Shared API dependencies: account service wiring, bearer auth and role checks."""

from typing import Annotated, Callable

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from accounts.core.config import Settings, get_settings
from accounts.core.database import get_db
from accounts.core.security import JwtTokenIssuer
from accounts.models.user import ROLE_ADMIN
from accounts.repositories.users import SqlAlchemyUserStore
from accounts.schemas.auth import CurrentUser
from accounts.schemas.envelope import ReqRes
from accounts.services.account_service import AccountService

security = HTTPBearer(auto_error=False)

# Returned by get_current_user when AUTH_ENABLED is False.
DEV_USER = CurrentUser(id=0, email="dev@localhost", role=ROLE_ADMIN)


def get_account_service(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AccountService:
    """Dependency: one AccountService per request, bound to the request's session."""
    return AccountService.for_session(db, settings)


def envelope_response(envelope: ReqRes) -> JSONResponse:
    """Serialize the envelope by alias and mirror its statusCode as the HTTP status."""
    return JSONResponse(status_code=envelope.status_code, content=envelope.to_wire())


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> CurrentUser:
    """Dependency: require a valid Bearer JWT and return the current user. Raises 401 if missing or invalid."""
    if not settings.AUTH_ENABLED:
        return DEV_USER
    if credentials is None:
        raise _unauthorized("Not authenticated")

    token = credentials.credentials
    tokens = JwtTokenIssuer.from_settings(settings)
    try:
        email = tokens.extract_subject(token)
    except jwt.PyJWTError:
        raise _unauthorized("Invalid token payload")
    if not tokens.is_access_token(token):
        raise _unauthorized("Access token required")
    user = SqlAlchemyUserStore(db).find_by_email(email)
    if user is None:
        raise _unauthorized("User not found")
    if not tokens.validate(token, user.email):
        raise _unauthorized("Invalid or expired token")
    return CurrentUser(id=user.id, email=user.email, role=user.role)


def require_roles(*roles: str) -> Callable[..., CurrentUser]:
    """Dependency factory: allow only users whose role is in roles. Raises 403 otherwise."""

    def dependency(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires role: {' or '.join(roles)}",
            )
        return current_user

    return dependency
