"""Current user endpoint."""

from fastapi import APIRouter, Depends

from task_manager.core.dependencies import get_current_user
from task_manager.models.user import User
from task_manager.schemas.user import UserRead, UserResponse

router = APIRouter(tags=["user"])


@router.get("/user", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get information about the currently authenticated user."""
    return UserResponse(data=UserRead.model_validate(current_user))
