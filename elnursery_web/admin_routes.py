"""
Admin management.

Prefix: /admin
"""

from typing import Any, List

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool

from elnursery.app import ElnurseryApp
from elnursery.models.admin import AdminPublic

from .access import access_gate
from .deps import get_app
from .models import CreateAdminRequest, MessageResponse

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("", response_model=AdminPublic, status_code=status.HTTP_201_CREATED)
async def create_admin(
    body: CreateAdminRequest,
    _: Any = Depends(access_gate("admin.create")),
    instance: ElnurseryApp = Depends(get_app),
):
    """Create an admin; the generated password is emailed, never returned"""
    return await run_in_threadpool(
        instance.admin_service.create, body.name, body.email, body.roles
    )


@router.get("", response_model=List[AdminPublic])
async def list_admins(
    _: Any = Depends(access_gate("admin.find_all")),
    instance: ElnurseryApp = Depends(get_app),
):
    return await run_in_threadpool(instance.admin_service.find_all)


@router.get("/{admin_id}", response_model=AdminPublic)
async def get_admin(
    admin_id: str,
    _: Any = Depends(access_gate("admin.find_one")),
    instance: ElnurseryApp = Depends(get_app),
):
    return await run_in_threadpool(instance.admin_service.find_one, admin_id)


@router.delete("/{admin_id}", response_model=MessageResponse)
async def delete_admin(
    admin_id: str,
    _: Any = Depends(access_gate("admin.remove")),
    instance: ElnurseryApp = Depends(get_app),
):
    return await run_in_threadpool(instance.admin_service.remove, admin_id)
