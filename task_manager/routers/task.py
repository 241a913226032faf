"""
Task router - API endpoints for the caller's own tasks.
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.core.dependencies import get_current_user
from task_manager.db.session import get_db
from task_manager.models.user import User
from task_manager.schemas.base import ErrorResponse, MessageResponse
from task_manager.schemas.task import (
    TaskDetailResponse,
    TaskListResponse,
    TaskMutationResponse,
    TaskRead,
)
from task_manager.services.task_service import TaskService

router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
    responses={status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse}},
)

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}
_INVALID = {422: {"model": ErrorResponse}}

# Bodies are read as raw bytes inside the handlers and decoded by the
# service, so the auth dependency always runs before the body is looked at.


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List the caller's tasks, newest first."""
    service = TaskService(db)
    tasks = await service.list_tasks(current_user)
    return TaskListResponse(data=[TaskRead.model_validate(t) for t in tasks])


@router.post(
    "",
    response_model=TaskMutationResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_INVALID,
)
async def create_task(
    request: Request,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a new task owned by the caller."""
    service = TaskService(db)
    task = await service.create_task(current_user, await request.body())
    await db.commit()
    return TaskMutationResponse(
        message="Task created successfully",
        data=TaskRead.model_validate(task),
    )


@router.get("/{task_id}", response_model=TaskDetailResponse, responses=_NOT_FOUND)
async def get_task(
    task_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get one of the caller's tasks by ID."""
    service = TaskService(db)
    task = await service.get_task(current_user, task_id)
    return TaskDetailResponse(data=TaskRead.model_validate(task))


@router.put(
    "/{task_id}",
    response_model=TaskMutationResponse,
    responses={**_NOT_FOUND, **_INVALID},
)
async def update_task(
    task_id: int,
    request: Request,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Update only the supplied fields of one of the caller's tasks."""
    service = TaskService(db)
    task = await service.update_task(current_user, task_id, await request.body())
    await db.commit()
    return TaskMutationResponse(
        message="Task updated successfully",
        data=TaskRead.model_validate(task),
    )


@router.delete("/{task_id}", response_model=MessageResponse, responses=_NOT_FOUND)
async def delete_task(
    task_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete one of the caller's tasks permanently."""
    service = TaskService(db)
    await service.delete_task(current_user, task_id)
    await db.commit()
    return MessageResponse(message="Task deleted successfully")
