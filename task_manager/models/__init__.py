"""
Models package.

Import all models here so they are registered with SQLAlchemy.
"""

from task_manager.models.user import User
from task_manager.models.task import Task, TaskStatus

# Export all models
__all__ = [
    "User",
    "Task",
    "TaskStatus",
]
