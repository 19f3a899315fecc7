"""
Password change and reset.

Prefix: /password
"""

from typing import Any

from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import EmailStr

from elnursery.app import ElnurseryApp
from elnursery.models.principal import PrincipalType, TokenClaims

from .access import access_gate
from .auth_routes import clear_token_cookie
from .deps import get_app
from .models import (
    ChangePasswordByTokenRequest,
    ChangePasswordRequest,
    MessageResponse,
    ResetPasswordRequest,
)

router = APIRouter(prefix="/password", tags=["password"])


@router.post("/change", response_model=MessageResponse)
async def change_password(
    body: ChangePasswordRequest,
    claims: TokenClaims = Depends(access_gate("password.change")),
    instance: ElnurseryApp = Depends(get_app),
):
    """Change the caller's password; the session cookie is cleared"""
    result = await run_in_threadpool(
        instance.password_service.change_password,
        claims.id,
        claims.type,
        body.old_password,
        body.new_password,
    )
    response = JSONResponse(result)
    clear_token_cookie(response, instance)
    return response


@router.post("/reset/{principal_type}", response_model=MessageResponse)
async def reset_password(
    principal_type: PrincipalType,
    body: ResetPasswordRequest,
    _: Any = Depends(access_gate("password.reset")),
    instance: ElnurseryApp = Depends(get_app),
):
    """Email a reset code valid for one hour"""
    return await run_in_threadpool(
        instance.password_service.reset_password, body.email, principal_type
    )


@router.post("/change/{principal_type}", response_model=MessageResponse)
async def change_password_by_token(
    principal_type: PrincipalType,
    body: ChangePasswordByTokenRequest,
    email: EmailStr = Query(...),
    _: Any = Depends(access_gate("password.change_by_token")),
    instance: ElnurseryApp = Depends(get_app),
):
    return await run_in_threadpool(
        instance.password_service.change_password_by_token,
        email,
        body.code,
        body.new_password,
        principal_type,
    )
