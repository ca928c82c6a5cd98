"""Public auth endpoints: register, login, refresh."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from accounts.api.v1.deps import envelope_response, get_account_service
from accounts.schemas.auth import LoginRequest, RefreshTokenRequest, RegisterRequest
from accounts.schemas.envelope import ReqRes
from accounts.services.account_service import AccountService

router = APIRouter()


@router.post("/register", response_model=ReqRes, response_model_by_alias=True)
def register(
    body: RegisterRequest,
    service: Annotated[AccountService, Depends(get_account_service)],
) -> JSONResponse:
    """Create an account. Duplicate emails are reported as a 500 envelope."""
    return envelope_response(
        service.register(
            email=body.email,
            password=body.password,
            name=body.name,
            city=body.city,
            role=body.role,
        )
    )


@router.post("/login", response_model=ReqRes, response_model_by_alias=True)
def login(
    body: LoginRequest,
    service: Annotated[AccountService, Depends(get_account_service)],
) -> JSONResponse:
    """
    Authenticate with email and password; returns access and refresh tokens.
    Include the access token in the Authorization header as: Bearer <token>
    """
    return envelope_response(service.login(body.email, body.password))


@router.post("/refresh", response_model=ReqRes, response_model_by_alias=True)
def refresh(
    body: RefreshTokenRequest,
    service: Annotated[AccountService, Depends(get_account_service)],
) -> JSONResponse:
    """Exchange a refresh token for a new access token."""
    return envelope_response(service.refresh_token(body.token))
