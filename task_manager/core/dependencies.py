"""
FastAPI dependencies for the application.
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.core.jwt import decode_access_token
from task_manager.db.session import get_db
from task_manager.errors import Unauthenticated
from task_manager.models.user import User
from task_manager.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

# Security scheme for JWT bearer tokens; missing headers are handled below
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Get the current authenticated user from the bearer token.
    
    Validates the JWT, loads the user from the database and
    ensures the account is active.
    
    Raises:
        Unauthenticated (401): missing/invalid token, unknown or inactive user
    """
    if credentials is None:
        raise Unauthenticated()
    
    payload = decode_access_token(credentials.credentials)
    if not payload:
        logger.warning("Rejected bearer token: invalid or expired")
        raise Unauthenticated()
    
    user_id = payload.get("user_id")
    try:
        user_id = int(user_id)
    except (TypeError, ValueError):
        logger.warning("Rejected bearer token: bad user_id claim")
        raise Unauthenticated()
    
    user = await UserRepository(db).get_by_id(user_id)
    if user is None or not user.is_active:
        logger.warning("Rejected bearer token: user %s missing or inactive", user_id)
        raise Unauthenticated()
    
    return user
