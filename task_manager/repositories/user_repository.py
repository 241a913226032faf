"""
User repository - database operations for User.
"""

from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.models.user import User
from task_manager.core.security import hash_password


class UserRepository:
    """Repository for User database operations."""
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get a user by ID."""
        result = await self.db.execute(
            select(User).where(User.id == user_id)
        )
        return result.scalar_one_or_none()
    
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by email (case-insensitive)."""
        if not email or not email.strip():
            return None
        email_clean = email.strip().lower()
        result = await self.db.execute(
            select(User).where(func.lower(User.email) == email_clean)
        )
        return result.scalar_one_or_none()
    
    async def create(self, name: str, email: str, password: str) -> User:
        """Create a new user with a bcrypt-hashed password."""
        user = User(
            name=name,
            email=email.strip().lower(),
            hashed_password=hash_password(password),
        )
        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)
        return user
