"""
Child records.

Prefix: /child
"""

from typing import Any, List

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool

from elnursery.app import ElnurseryApp
from elnursery.models.child import ChildPublic
from elnursery.models.principal import PrincipalType, TokenClaims

from .access import access_gate
from .deps import get_app
from .models import CreateChildRequest, MessageResponse, UpdateChildRequest

router = APIRouter(prefix="/child", tags=["child"])


@router.post("", response_model=ChildPublic, status_code=status.HTTP_201_CREATED)
async def create_child(
    body: CreateChildRequest,
    claims: TokenClaims = Depends(access_gate("child.create")),
    instance: ElnurseryApp = Depends(get_app),
):
    """Add a child to the calling user's account"""
    return await run_in_threadpool(
        instance.child_service.create,
        claims.id,
        body.name,
        body.date_of_birth,
        body.avatar or "",
    )


@router.get("", response_model=List[ChildPublic])
async def list_children(
    _: Any = Depends(access_gate("child.find_all")),
    instance: ElnurseryApp = Depends(get_app),
):
    return await run_in_threadpool(instance.child_service.find_all)


@router.get("/parent/{parent_id}", response_model=List[ChildPublic])
async def list_children_by_parent(
    parent_id: str,
    claims: TokenClaims = Depends(access_gate("child.find_by_parent")),
    instance: ElnurseryApp = Depends(get_app),
):
    if claims.type == PrincipalType.USER:
        parent_id = claims.id
    return await run_in_threadpool(instance.child_service.find_all_by_parent, parent_id)


@router.get("/{child_id}", response_model=ChildPublic)
async def get_child(
    child_id: str,
    _: Any = Depends(access_gate("child.find_one")),
    instance: ElnurseryApp = Depends(get_app),
):
    return await run_in_threadpool(instance.child_service.find_one, child_id)


@router.patch("/{child_id}", response_model=ChildPublic)
async def update_child(
    child_id: str,
    body: UpdateChildRequest,
    claims: TokenClaims = Depends(access_gate("child.update")),
    instance: ElnurseryApp = Depends(get_app),
):
    return await run_in_threadpool(
        instance.child_service.update, child_id, body.model_dump(exclude_none=True), claims
    )


@router.delete("/{child_id}", response_model=MessageResponse)
async def delete_child(
    child_id: str,
    _: Any = Depends(access_gate("child.remove")),
    instance: ElnurseryApp = Depends(get_app),
):
    return await run_in_threadpool(instance.child_service.remove, child_id)


@router.post("/{child_id}/programs/{program_id}", response_model=ChildPublic)
async def add_program(
    child_id: str,
    program_id: str,
    _: Any = Depends(access_gate("child.add_program")),
    instance: ElnurseryApp = Depends(get_app),
):
    return await run_in_threadpool(instance.child_service.add_program, child_id, program_id)


@router.delete("/{child_id}/programs/{program_id}", response_model=ChildPublic)
async def remove_program(
    child_id: str,
    program_id: str,
    _: Any = Depends(access_gate("child.remove_program")),
    instance: ElnurseryApp = Depends(get_app),
):
    return await run_in_threadpool(instance.child_service.remove_program, child_id, program_id)


@router.post("/{child_id}/assessments/{result_id}", response_model=ChildPublic)
async def add_assessment_result(
    child_id: str,
    result_id: str,
    _: Any = Depends(access_gate("child.add_assessment")),
    instance: ElnurseryApp = Depends(get_app),
):
    return await run_in_threadpool(
        instance.child_service.add_assessment_result, child_id, result_id
    )


@router.delete("/{child_id}/assessments/{result_id}", response_model=ChildPublic)
async def remove_assessment_result(
    child_id: str,
    result_id: str,
    _: Any = Depends(access_gate("child.remove_assessment")),
    instance: ElnurseryApp = Depends(get_app),
):
    return await run_in_threadpool(
        instance.child_service.remove_assessment_result, child_id, result_id
    )
