"""
User model for authentication.
"""

from typing import List, TYPE_CHECKING

from sqlalchemy import String, Boolean
from sqlalchemy.orm import Mapped, mapped_column, relationship

from task_manager.models.base_model import TimestampedModel

if TYPE_CHECKING:
    from task_manager.models.task import Task


class User(TimestampedModel):
    """
    User table - the owners of tasks.
    
    Rows are managed by the authentication side of the system; the task API
    only reads them to resolve the caller.
    """
    
    __tablename__ = "user"
    
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
    )
    
    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )
    
    tasks: Mapped[List["Task"]] = relationship(
        "Task",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
