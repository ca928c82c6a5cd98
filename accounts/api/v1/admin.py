"""Admin-only user management endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from accounts.api.v1.deps import envelope_response, get_account_service, require_roles
from accounts.models.user import ROLE_ADMIN
from accounts.schemas.auth import CurrentUser, UserUpdate
from accounts.schemas.envelope import ReqRes
from accounts.services.account_service import AccountService

router = APIRouter()
require_admin = require_roles(ROLE_ADMIN)


@router.get("/get-all-users", response_model=ReqRes, response_model_by_alias=True)
def get_all_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    service: Annotated[AccountService, Depends(get_account_service)],
) -> JSONResponse:
    """List all users ordered by id."""
    return envelope_response(service.get_all_users())


@router.get("/get-users/{user_id}", response_model=ReqRes, response_model_by_alias=True)
def get_user(
    user_id: int,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    service: Annotated[AccountService, Depends(get_account_service)],
) -> JSONResponse:
    return envelope_response(service.get_users_by_id(user_id))


@router.put("/update/{user_id}", response_model=ReqRes, response_model_by_alias=True)
def update_user(
    user_id: int,
    body: UserUpdate,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    service: Annotated[AccountService, Depends(get_account_service)],
) -> JSONResponse:
    """Replace non-empty email/name/city (and password if given). Role is never changed."""
    return envelope_response(service.update_user(user_id, body))


@router.delete("/delete/{user_id}", response_model=ReqRes, response_model_by_alias=True)
def delete_user(
    user_id: int,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    service: Annotated[AccountService, Depends(get_account_service)],
) -> JSONResponse:
    return envelope_response(service.delete_user(user_id))
