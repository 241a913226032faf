"""
User Pydantic schemas.
"""

from pydantic import BaseModel, ConfigDict

from task_manager.schemas.base import ApiResponse


class UserRead(BaseModel):
    """Public view of the authenticated user."""
    
    id: int
    name: str
    email: str
    
    model_config = ConfigDict(from_attributes=True)


class UserResponse(ApiResponse):
    data: UserRead
