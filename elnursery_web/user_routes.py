"""
User (parent) management.

Prefix: /user
"""

from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.concurrency import run_in_threadpool

from elnursery.app import ElnurseryApp
from elnursery.models.principal import PrincipalType, TokenClaims
from elnursery.models.user import UserPublic

from .access import access_gate
from .deps import get_app
from .models import CreateUserRequest, MessageResponse, UpdateProfileRequest, UpdateUserRequest

router = APIRouter(prefix="/user", tags=["user"])


@router.post("", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
async def create_user(
    body: CreateUserRequest,
    _: Any = Depends(access_gate("user.create")),
    instance: ElnurseryApp = Depends(get_app),
):
    return await run_in_threadpool(
        instance.user_service.create,
        body.name,
        body.email,
        body.class_category,
        body.children,
    )


@router.get("", response_model=List[UserPublic])
async def list_users(
    class_category: Optional[str] = Query(default=None, alias="classCategory"),
    _: Any = Depends(access_gate("user.find_all")),
    instance: ElnurseryApp = Depends(get_app),
):
    return await run_in_threadpool(instance.user_service.find_all, class_category)


@router.patch("/profile", response_model=UserPublic)
async def update_profile(
    body: UpdateProfileRequest,
    claims: TokenClaims = Depends(access_gate("user.update_profile")),
    instance: ElnurseryApp = Depends(get_app),
):
    """Users edit their own profile"""
    return await run_in_threadpool(instance.user_service.update_profile, claims.id, body.avatar)


@router.get("/{user_id}", response_model=UserPublic)
async def get_user(
    user_id: str,
    claims: TokenClaims = Depends(access_gate("user.find_one")),
    instance: ElnurseryApp = Depends(get_app),
):
    """Admins read any user; a user always gets its own record"""
    if claims.type == PrincipalType.USER:
        user_id = claims.id
    return await run_in_threadpool(instance.user_service.find_one, user_id)


@router.patch("/{user_id}", response_model=UserPublic)
async def update_user(
    user_id: str,
    body: UpdateUserRequest,
    _: Any = Depends(access_gate("user.update")),
    instance: ElnurseryApp = Depends(get_app),
):
    return await run_in_threadpool(
        instance.user_service.update, user_id, body.model_dump(exclude_none=True)
    )


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    _: Any = Depends(access_gate("user.remove")),
    instance: ElnurseryApp = Depends(get_app),
):
    return await run_in_threadpool(instance.user_service.remove, user_id)
