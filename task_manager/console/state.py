"""
Task console state.

Holds what a task UI needs between user actions: the task list as the API
last confirmed it, the form draft, field errors, the current selection and
loading/submitting flags. Every change to ``tasks`` follows a successful
API response; failures only touch ``errors`` / ``general_error``.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Type, Union

from pydantic import BaseModel, ValidationError

from task_manager.console.client import GatewayClient
from task_manager.console.errors import (
    GatewayError,
    GatewayNotFound,
    GatewayValidationError,
)
from task_manager.models.task import TaskStatus
from task_manager.schemas.task import (
    FieldErrors,
    TaskCreate,
    TaskRead,
    TaskUpdate,
    collect_field_errors,
)
from task_manager.utils.time import utc_now

logger = logging.getLogger(__name__)

DELETE_PROMPT = "Are you sure you want to delete this task?"

DRAFT_FIELDS = ("title", "description", "deadline", "status")


class TaskDraft(BaseModel):
    """Form fields as the user typed them."""

    title: str = ""
    description: str = ""
    deadline: str = ""
    status: str = TaskStatus.PENDING.value

    @classmethod
    def from_task(cls, task: TaskRead) -> "TaskDraft":
        return cls(
            title=task.title,
            description=task.description or "",
            deadline=task.deadline.isoformat(),
            status=task.status,
        )

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "title": self.title,
            "description": self.description or None,
            "status": self.status,
        }
        # left out so an empty input reads as "required", not "invalid date"
        if self.deadline.strip():
            payload["deadline"] = self.deadline.strip()
        return payload

    def changes_from(self, task: TaskRead) -> Dict[str, Any]:
        """
        Update payload holding only the fields edited since ``from_task(task)``.

        An untouched deadline is never resent, so an overdue task can still
        be renamed or completed.
        """
        original = TaskDraft.from_task(task)
        changes: Dict[str, Any] = {}
        for field in DRAFT_FIELDS:
            value = getattr(self, field)
            if value == getattr(original, field):
                continue
            if field == "description":
                value = value or None
            elif field == "deadline":
                value = value.strip() or None
            changes[field] = value
        return changes


def _field_errors(
    schema: Union[Type[TaskCreate], Type[TaskUpdate]],
    payload: Dict[str, Any],
    now: Optional[datetime],
) -> FieldErrors:
    try:
        schema.model_validate(payload, context={"now": now or utc_now()})
    except ValidationError as exc:
        return collect_field_errors(exc)
    return {}


def validate_draft(draft: TaskDraft, now: Optional[datetime] = None) -> FieldErrors:
    """
    Check a new-task draft against the same rules the API applies.

    Advisory only: the API re-checks with its own clock and has the last word.
    """
    return _field_errors(TaskCreate, draft.to_payload(), now)


def validate_changes(changes: Dict[str, Any], now: Optional[datetime] = None) -> FieldErrors:
    """Check a partial update the way the API does: supplied fields only."""
    return _field_errors(TaskUpdate, changes, now)


class TaskConsole:
    """State holder driving the task API through a ``GatewayClient``."""

    def __init__(self, client: GatewayClient, clock: Callable[[], datetime] = utc_now):
        self.client = client
        self.clock = clock
        self.tasks: List[TaskRead] = []
        self.draft = TaskDraft()
        self.errors: FieldErrors = {}
        self.general_error: Optional[str] = None
        self.editing: Optional[TaskRead] = None
        self.viewing: Optional[TaskRead] = None
        self.loading = False
        self.submitting = False

    def _fail(self, exc: GatewayError) -> None:
        if isinstance(exc, GatewayValidationError) and exc.errors:
            self.errors = exc.errors
        elif isinstance(exc, GatewayNotFound):
            self.general_error = exc.message or "Task not found"
        else:
            self.general_error = exc.message
        logger.info("Task API call failed: %s", exc.message)

    def _clear_errors(self) -> None:
        self.errors = {}
        self.general_error = None

    def _reset_form(self) -> None:
        self.draft = TaskDraft()
        self._clear_errors()

    def mount(self) -> bool:
        """Load the full task list once."""
        self.loading = True
        try:
            self.tasks = self.client.list_tasks()
            return True
        except GatewayError as exc:
            self._fail(exc)
            return False
        finally:
            self.loading = False

    def validate(self) -> FieldErrors:
        """Local check of the form: full draft when creating, edited fields when editing."""
        if self.editing is not None:
            return validate_changes(self.draft.changes_from(self.editing), self.clock())
        return validate_draft(self.draft, self.clock())

    def submit_create(self) -> Optional[TaskRead]:
        """Create a task from the draft; prepend it on success."""
        self._clear_errors()
        errors = validate_draft(self.draft, self.clock())
        if errors:
            self.errors = errors
            return None

        self.submitting = True
        try:
            task = self.client.create_task(self.draft.to_payload())
        except GatewayError as exc:
            self._fail(exc)
            return None
        finally:
            self.submitting = False

        self.tasks.insert(0, task)
        self._reset_form()
        return task

    def start_edit(self, task: TaskRead) -> None:
        self.editing = task
        self.draft = TaskDraft.from_task(task)
        self._clear_errors()

    def submit_update(self) -> Optional[TaskRead]:
        """Send the edited fields of the selected task; replace it in place on success."""
        if self.editing is None:
            raise RuntimeError("no task is being edited")
        self._clear_errors()
        changes = self.draft.changes_from(self.editing)
        errors = validate_changes(changes, self.clock())
        if errors:
            self.errors = errors
            return None

        self.submitting = True
        try:
            task = self.client.update_task(self.editing.id, changes)
        except GatewayError as exc:
            self._fail(exc)
            return None
        finally:
            self.submitting = False

        self.tasks = [task if t.id == task.id else t for t in self.tasks]
        if self.viewing is not None and self.viewing.id == task.id:
            self.viewing = task
        self.editing = None
        self._reset_form()
        return task

    def delete(self, task_id: int, confirm: Callable[[str], bool]) -> bool:
        """Delete after ``confirm(prompt)`` returns true; drop the local entry on success."""
        if not confirm(DELETE_PROMPT):
            return False
        self._clear_errors()
        try:
            self.client.delete_task(task_id)
        except GatewayError as exc:
            self._fail(exc)
            return False

        self.tasks = [t for t in self.tasks if t.id != task_id]
        if self.viewing is not None and self.viewing.id == task_id:
            self.viewing = None
        if self.editing is not None and self.editing.id == task_id:
            self.editing = None
        return True

    def view(self, task: TaskRead) -> None:
        self.viewing = task

    def open(self, task_id: int) -> Optional[TaskRead]:
        """Fetch one task fresh from the API, select it for viewing and refresh the cached copy."""
        self._clear_errors()
        try:
            task = self.client.get_task(task_id)
        except GatewayError as exc:
            self._fail(exc)
            return None

        self.tasks = [task if t.id == task.id else t for t in self.tasks]
        self.viewing = task
        return task

    def close(self) -> None:
        self.viewing = None

    def cancel(self) -> None:
        """Abandon the form: clear draft, errors and the edit selection."""
        self.editing = None
        self._reset_form()

    def find(self, task_id: int) -> Optional[TaskRead]:
        return next((t for t in self.tasks if t.id == task_id), None)
