"""Endpoints available to any authenticated user (ADMIN or USER)."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from accounts.api.v1.deps import envelope_response, get_account_service, require_roles
from accounts.models.user import ROLE_ADMIN, ROLE_USER
from accounts.schemas.auth import CurrentUser
from accounts.schemas.envelope import ReqRes
from accounts.services.account_service import AccountService

router = APIRouter()


@router.get("/get-profile", response_model=ReqRes, response_model_by_alias=True)
def get_profile(
    current_user: Annotated[CurrentUser, Depends(require_roles(ROLE_ADMIN, ROLE_USER))],
    service: Annotated[AccountService, Depends(get_account_service)],
) -> JSONResponse:
    """Return the caller's own user record, resolved from the token subject."""
    return envelope_response(service.get_my_info(current_user.email))
