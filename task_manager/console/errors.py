"""Errors raised by the gateway client, one per failure the console reports."""

from typing import Dict, List, Optional


class GatewayError(Exception):
    """Any failed gateway call."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class GatewayValidationError(GatewayError):
    """422: the gateway rejected one or more fields."""

    def __init__(self, message: str, errors: Optional[Dict[str, List[str]]] = None):
        super().__init__(message)
        self.errors = errors or {}


class GatewayNotFound(GatewayError):
    """404: missing task, or a task owned by someone else."""


class GatewayUnauthenticated(GatewayError):
    """401: no token, or the token was rejected."""


class NetworkError(GatewayError):
    """Transport failure or a response that is not the expected JSON envelope."""
