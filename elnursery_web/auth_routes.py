"""
Login and logout.

Prefix: /auth
"""

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from elnursery.app import ElnurseryApp
from elnursery.models.principal import PrincipalType

from .access import access_gate
from .deps import get_app
from .models import LoginRequest, MessageResponse

router = APIRouter(prefix="/auth", tags=["auth"])


def set_token_cookie(response: JSONResponse, instance: ElnurseryApp, token: str) -> None:
    """Attach the token as an HttpOnly cookie; cross-site in production"""
    is_prod = instance.settings.app.is_production
    response.set_cookie(
        key=instance.settings.auth.cookie_name,
        value=token,
        max_age=instance.settings.auth.token_expiry_hours * 60 * 60,
        httponly=True,
        secure=is_prod,
        samesite="none" if is_prod else "lax",
    )


def clear_token_cookie(response: JSONResponse, instance: ElnurseryApp) -> None:
    is_prod = instance.settings.app.is_production
    response.delete_cookie(
        key=instance.settings.auth.cookie_name,
        httponly=True,
        secure=is_prod,
        samesite="none" if is_prod else "lax",
    )


@router.post("/login/{principal_type}")
async def login(
    principal_type: PrincipalType,
    body: LoginRequest,
    _: Any = Depends(access_gate("auth.login")),
    instance: ElnurseryApp = Depends(get_app),
):
    """Log in as an admin or a user; sets the token cookie"""
    token, _principal = await run_in_threadpool(
        instance.auth_service.login, body.email, body.password, principal_type
    )
    response = JSONResponse({"message": "Login successful", "token": token})
    set_token_cookie(response, instance, token)
    return response


@router.post("/logout", response_model=MessageResponse)
async def logout(
    _: Any = Depends(access_gate("auth.logout")),
    instance: ElnurseryApp = Depends(get_app),
):
    response = JSONResponse({"message": "Logout successful"})
    clear_token_cookie(response, instance)
    return response
