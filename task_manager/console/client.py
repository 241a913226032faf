"""
HTTP client for the task API.

Maps the API's JSON envelopes onto return values and its failures onto
``GatewayError`` subclasses. One request per call, no retries.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from task_manager.console.errors import (
    GatewayError,
    GatewayNotFound,
    GatewayUnauthenticated,
    GatewayValidationError,
    NetworkError,
)
from task_manager.console.session import Session
from task_manager.schemas.task import TaskRead
from task_manager.schemas.user import UserRead

logger = logging.getLogger(__name__)


class GatewayClient:
    """Synchronous client bound to one session."""

    def __init__(
        self,
        session: Session,
        base_url: Optional[str] = None,
        http: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ):
        if http is None and base_url is None:
            raise ValueError("either base_url or http must be given")
        self.session = session
        self._owns_http = http is None
        self._http = http if http is not None else httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "GatewayClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        headers = {
            "Authorization": self.session.authorization,
            "Accept": "application/json",
        }
        try:
            response = self._http.request(method, path, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise NetworkError("Network error. Please try again.") from exc

        try:
            body = response.json()
        except ValueError as exc:
            logger.warning("%s %s returned non-JSON (HTTP %s)", method, path, response.status_code)
            raise NetworkError("Network error. Please try again.") from exc
        if not isinstance(body, dict):
            raise NetworkError("Network error. Please try again.")

        message = body.get("message") or ""
        if response.status_code == 422:
            raise GatewayValidationError(message or "Validation failed", body.get("errors"))
        if response.status_code == 404:
            raise GatewayNotFound(message or "Task not found")
        if response.status_code == 401:
            raise GatewayUnauthenticated(message or "Unauthenticated.")
        if not response.is_success or not body.get("success"):
            logger.warning("%s %s -> HTTP %s: %s", method, path, response.status_code, message)
            raise GatewayError(message or f"Request failed (HTTP {response.status_code})")
        return body

    @staticmethod
    def _parse_task(data: Any) -> TaskRead:
        try:
            return TaskRead.model_validate(data)
        except ValidationError as exc:
            raise NetworkError("Network error. Please try again.") from exc

    def list_tasks(self) -> List[TaskRead]:
        body = self._request("GET", "/tasks")
        data = body.get("data")
        if not isinstance(data, list):
            raise NetworkError("Network error. Please try again.")
        return [self._parse_task(item) for item in data]

    def get_task(self, task_id: int) -> TaskRead:
        body = self._request("GET", f"/tasks/{task_id}")
        return self._parse_task(body.get("data"))

    def create_task(self, payload: Dict[str, Any]) -> TaskRead:
        body = self._request("POST", "/tasks", payload)
        return self._parse_task(body.get("data"))

    def update_task(self, task_id: int, payload: Dict[str, Any]) -> TaskRead:
        body = self._request("PUT", f"/tasks/{task_id}", payload)
        return self._parse_task(body.get("data"))

    def delete_task(self, task_id: int) -> str:
        body = self._request("DELETE", f"/tasks/{task_id}")
        return body.get("message") or "Task deleted successfully"

    def current_user(self) -> UserRead:
        body = self._request("GET", "/user")
        try:
            return UserRead.model_validate(body.get("data"))
        except ValidationError as exc:
            raise NetworkError("Network error. Please try again.") from exc
