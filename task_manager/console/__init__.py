"""
Task console: client-side state and HTTP access for the task API.
"""

from task_manager.console.client import GatewayClient
from task_manager.console.errors import (
    GatewayError,
    GatewayNotFound,
    GatewayUnauthenticated,
    GatewayValidationError,
    NetworkError,
)
from task_manager.console.session import CredentialStore, Session
from task_manager.console.state import TaskConsole, TaskDraft, validate_changes, validate_draft

__all__ = [
    "GatewayClient",
    "GatewayError",
    "GatewayNotFound",
    "GatewayUnauthenticated",
    "GatewayValidationError",
    "NetworkError",
    "CredentialStore",
    "Session",
    "TaskConsole",
    "TaskDraft",
    "validate_changes",
    "validate_draft",
]
