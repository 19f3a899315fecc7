"""
Task catalogue.

Prefix: /tasks
"""

from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.concurrency import run_in_threadpool

from elnursery.app import ElnurseryApp
from elnursery.models.task import Task

from .access import access_gate
from .deps import get_app
from .models import CreateTaskRequest, MessageResponse, UpdateTaskRequest

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.post("", response_model=Task, status_code=status.HTTP_201_CREATED)
async def create_task(
    body: CreateTaskRequest,
    _: Any = Depends(access_gate("task.create")),
    instance: ElnurseryApp = Depends(get_app),
):
    return await run_in_threadpool(
        instance.task_service.create,
        body.title,
        body.category,
        body.data,
        body.description,
        body.level,
    )


@router.get("", response_model=List[Task])
async def list_tasks(
    title: Optional[str] = Query(default=None),
    category: Optional[str] = Query(default=None),
    level: Optional[int] = Query(default=None),
    _: Any = Depends(access_gate("task.find_all")),
    instance: ElnurseryApp = Depends(get_app),
):
    """Filter by title/category substring (case-insensitive) and exact level"""
    return await run_in_threadpool(instance.task_service.find_all, title, category, level)


@router.get("/{task_id}", response_model=Task)
async def get_task(
    task_id: str,
    _: Any = Depends(access_gate("task.find_one")),
    instance: ElnurseryApp = Depends(get_app),
):
    return await run_in_threadpool(instance.task_service.find_one, task_id)


@router.patch("/{task_id}", response_model=Task)
async def update_task(
    task_id: str,
    body: UpdateTaskRequest,
    _: Any = Depends(access_gate("task.update")),
    instance: ElnurseryApp = Depends(get_app),
):
    return await run_in_threadpool(
        instance.task_service.update, task_id, body.model_dump(exclude_none=True)
    )


@router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task(
    task_id: str,
    _: Any = Depends(access_gate("task.remove")),
    instance: ElnurseryApp = Depends(get_app),
):
    return await run_in_threadpool(instance.task_service.remove, task_id)
