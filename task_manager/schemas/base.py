"""
Base response envelopes.

Every API response carries a ``success`` flag; errors add a ``message`` and,
for validation failures, a per-field ``errors`` map.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel


class ApiResponse(BaseModel):
    """Common envelope field."""
    
    success: bool = True


class MessageResponse(ApiResponse):
    """Envelope with a human-readable message and no payload."""
    
    message: str


class ErrorResponse(BaseModel):
    """Envelope returned for 401 / 404 / 422 responses."""
    
    success: bool = False
    message: str
    errors: Optional[Dict[str, List[str]]] = None
