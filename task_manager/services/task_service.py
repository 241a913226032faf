"""
Task business logic service.

Validation happens here rather than in the router so that update/delete can
resolve ownership first: a missing or foreign task is reported as not found
before the payload is looked at.
"""

import json
import logging
from datetime import datetime
from typing import Any, Callable, List, Optional, Type, TypeVar

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.errors import INVALID_JSON_MESSAGE, TaskNotFound, ValidationFailed
from task_manager.models.task import Task
from task_manager.models.user import User
from task_manager.repositories.task_repository import TaskRepository
from task_manager.schemas.task import TaskCreate, TaskUpdate, collect_field_errors
from task_manager.utils.time import utc_now

logger = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT", TaskCreate, TaskUpdate)


class TaskService:
    """Service for task business logic, always scoped to one user."""
    
    def __init__(self, db: AsyncSession, clock: Optional[Callable[[], datetime]] = None):
        self.repository = TaskRepository(db)
        self.clock = clock or utc_now
    
    @staticmethod
    def _decode(payload: Any) -> Any:
        """Raw request bytes become their JSON value; empty bytes mean no body."""
        if not isinstance(payload, (bytes, bytearray)):
            return payload
        if not payload.strip():
            return None
        try:
            return json.loads(payload)
        except ValueError as exc:
            raise ValidationFailed({"body": [INVALID_JSON_MESSAGE]}) from exc
    
    def _validate(self, schema: Type[PayloadT], payload: Any) -> PayloadT:
        payload = self._decode(payload)
        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            raise ValidationFailed({"body": ["The request body must be a JSON object."]})
        try:
            return schema.model_validate(payload, context={"now": self.clock()})
        except ValidationError as exc:
            errors = collect_field_errors(exc)
            logger.debug("Task payload rejected: %s", errors)
            raise ValidationFailed(errors) from exc
    
    async def list_tasks(self, user: User) -> List[Task]:
        """All of the user's tasks, newest first."""
        return await self.repository.list_for_user(user.id)
    
    async def get_task(self, user: User, task_id: int) -> Task:
        """Get one of the user's tasks or raise TaskNotFound."""
        task = await self.repository.get_for_user(user.id, task_id)
        if task is None:
            logger.info("Task %s not found for user %s", task_id, user.id)
            raise TaskNotFound()
        return task
    
    async def create_task(self, user: User, payload: Any) -> Task:
        """Validate and create a task owned by the user."""
        data = self._validate(TaskCreate, payload)
        task = await self.repository.create(user.id, data.model_dump())
        logger.info("Task %s created for user %s", task.id, user.id)
        return task
    
    async def update_task(self, user: User, task_id: int, payload: Any) -> Task:
        """
        Apply a partial update.
        
        Only supplied fields are validated and written. The deadline window
        is measured from the time of this update, not from creation.
        """
        task = await self.get_task(user, task_id)
        data = self._validate(TaskUpdate, payload)
        values = data.model_dump(exclude_unset=True)
        if not values:
            return task
        task = await self.repository.update(task, values)
        logger.info("Task %s updated for user %s (%s)", task.id, user.id, ", ".join(sorted(values)))
        return task
    
    async def delete_task(self, user: User, task_id: int) -> None:
        """Delete one of the user's tasks permanently."""
        task = await self.get_task(user, task_id)
        await self.repository.delete(task)
        logger.info("Task %s deleted for user %s", task_id, user.id)
