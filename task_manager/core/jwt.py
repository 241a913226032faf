"""
JWT access token helpers.

Tokens are issued by the authentication side of the system; the API only
needs to decode them. ``create_access_token`` exists for the seed script
and the test suite.
"""

from datetime import timedelta
from typing import Any, Dict, Optional

import jwt

from task_manager.core.config import settings
from task_manager.utils.time import utc_now


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed JWT access token.
    
    Args:
        data: Claims to embed (must include "user_id")
        expires_delta: Lifetime override; defaults to ACCESS_TOKEN_EXPIRE_HOURS
        
    Returns:
        Encoded JWT string
    """
    to_encode = dict(data)
    if expires_delta is None:
        expires_delta = timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS)
    to_encode["exp"] = utc_now() + expires_delta
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Decode and verify a JWT access token.
    
    Returns:
        The claims dict, or None if the token is invalid or expired
    """
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.PyJWTError:
        return None
