"""
Task repository - database operations for Task.

Every lookup is scoped to the owning user with a single predicate
(id = ? AND user_id = ?), so a foreign task looks exactly like a missing one.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.models.task import Task


class TaskRepository:
    """Repository for Task database operations."""
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    async def list_for_user(self, user_id: int) -> List[Task]:
        """List a user's tasks, newest first."""
        query = (
            select(Task)
            .where(Task.user_id == user_id)
            .order_by(Task.created_at.desc(), Task.id.desc())
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())
    
    async def get_for_user(self, user_id: int, task_id: int) -> Optional[Task]:
        """Get a task by ID, only if the user owns it."""
        result = await self.db.execute(
            select(Task).where(
                Task.id == task_id,
                Task.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()
    
    async def create(self, user_id: int, values: Dict[str, Any]) -> Task:
        """Create a new task owned by user_id."""
        task = Task(user_id=user_id, **values)
        self.db.add(task)
        await self.db.flush()
        await self.db.refresh(task)
        return task
    
    async def update(self, task: Task, values: Dict[str, Any]) -> Task:
        """Apply the given fields to a loaded task."""
        for field, value in values.items():
            setattr(task, field, value)
        await self.db.flush()
        await self.db.refresh(task)
        return task
    
    async def delete(self, task: Task) -> None:
        """Delete a loaded task permanently."""
        await self.db.delete(task)
        await self.db.flush()
