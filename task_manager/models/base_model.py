"""
Base model with common fields.

All tables inherit from this to get:
- id (integer primary key)
- created_at (when the record was created)
- updated_at (when the record was last modified)
"""

from datetime import datetime

from sqlalchemy import Integer, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from task_manager.db.base import Base


class TimestampedModel(Base):
    """
    Abstract base class for all models.
    
    This is not a real table - it's a template that other models inherit from.
    """
    
    __abstract__ = True  # This means: don't create a table for this class
    
    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    
    # Timestamps - set by the database when records are created/updated
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
