"""
Task model.

Represents a personal task owned by exactly one user.
"""

import enum
from datetime import datetime
from typing import Optional, TYPE_CHECKING

from sqlalchemy import String, Text, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from task_manager.models.base_model import TimestampedModel

if TYPE_CHECKING:
    from task_manager.models.user import User


class TaskStatus(str, enum.Enum):
    """Allowed task statuses."""
    
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


TITLE_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1000


class Task(TimestampedModel):
    """
    Task table - one row per personal task.
    """
    
    __tablename__ = "task"
    
    title: Mapped[str] = mapped_column(
        String(TITLE_MAX_LENGTH),
        nullable=False,
    )
    
    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    
    deadline: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=TaskStatus.PENDING.value,
    )
    
    # Owner - never taken from the request body
    user_id: Mapped[int] = mapped_column(
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    
    user: Mapped["User"] = relationship(
        "User",
        back_populates="tasks",
    )
    
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'in_progress', 'completed')",
            name="ck_task_status",
        ),
    )
