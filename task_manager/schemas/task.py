"""
Task Pydantic schemas.

Validation rules shared by create and update:
- title: required, trimmed, 1-255 characters
- description: optional, at most 1000 characters, "" stored as null
- deadline: strictly after "now" and strictly before "now + 1 year"
- status: pending / in_progress / completed

"now" comes from the validation context (``context={"now": ...}``) so the
service decides which clock the window is measured against.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)
from pydantic_core import PydanticCustomError

from task_manager.models.task import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH, TaskStatus
from task_manager.schemas.base import ApiResponse, MessageResponse
from task_manager.utils.time import add_one_year, ensure_utc, utc_now

# field name -> list of messages, for the closed set of task fields
FieldErrors = Dict[str, List[str]]


def _now_from(info: ValidationInfo) -> datetime:
    if info.context and info.context.get("now") is not None:
        return ensure_utc(info.context["now"])
    return utc_now()


class _TaskRules(BaseModel):
    """Field rules common to create and update payloads."""

    # Unknown keys (id, user_id, timestamps, ...) are dropped
    model_config = ConfigDict(
        extra="ignore",
        str_strip_whitespace=True,
        use_enum_values=True,
    )

    @field_validator("description", mode="before", check_fields=False)
    @classmethod
    def _blank_description_is_null(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("deadline", mode="after", check_fields=False)
    @classmethod
    def _deadline_window(cls, value: Optional[datetime], info: ValidationInfo) -> Optional[datetime]:
        if value is None:
            return value
        value = ensure_utc(value)
        now = _now_from(info)
        if value <= now:
            raise PydanticCustomError(
                "deadline_after_now",
                "The deadline field must be a date after now.",
            )
        if value >= add_one_year(now):
            raise PydanticCustomError(
                "deadline_before_one_year",
                "The deadline field must be a date before one year from now.",
            )
        return value


class TaskCreate(_TaskRules):
    """Schema for creating a new task."""

    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    deadline: datetime
    status: TaskStatus = TaskStatus.PENDING.value


class TaskUpdate(_TaskRules):
    """
    Schema for updating a task. Every field is optional.

    Only the keys present in the payload are validated and applied
    (``model_dump(exclude_unset=True)``). A present-but-null title,
    deadline or status is rejected; a null description clears it.
    """

    title: Optional[str] = Field(default=None, min_length=1, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    deadline: Optional[datetime] = None
    status: Optional[TaskStatus] = None

    @field_validator("title", "deadline", "status", mode="before")
    @classmethod
    def _present_means_required(cls, value: Any) -> Any:
        if value is None:
            raise PydanticCustomError("required", "Field required")
        return value


class TaskRead(BaseModel):
    """Schema for reading task data (API response)."""

    id: int
    title: str
    description: Optional[str] = None
    deadline: datetime
    status: str
    user_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("deadline", "created_at", "updated_at")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        # SQLite hands back naive datetimes; everything is stored as UTC
        return ensure_utc(value)


class TaskListResponse(ApiResponse):
    data: List[TaskRead]


class TaskDetailResponse(ApiResponse):
    data: TaskRead


class TaskMutationResponse(MessageResponse):
    data: TaskRead


def _error_message(field: str, error: Dict[str, Any]) -> str:
    error_type = error["type"]
    ctx = error.get("ctx") or {}

    if field == "status":
        return "The selected status is invalid."
    if error_type in ("missing", "required", "string_too_short"):
        return f"The {field} field is required."
    if "input" in error and error["input"] is None and error_type.endswith("_type"):
        return f"The {field} field is required."
    if error_type == "string_too_long":
        return f"The {field} field must not be greater than {ctx.get('max_length')} characters."
    if error_type == "string_type":
        return f"The {field} field must be a string."
    if error_type.startswith("datetime") or error_type.startswith("date_"):
        return f"The {field} field must be a valid date."
    return error["msg"]


def collect_field_errors(exc: ValidationError) -> FieldErrors:
    """Turn a pydantic ValidationError into a field -> messages map."""
    errors: FieldErrors = {}
    for error in exc.errors():
        loc = error.get("loc") or ()
        field = str(loc[0]) if loc else "body"
        message = _error_message(field, error)
        messages = errors.setdefault(field, [])
        if message not in messages:
            messages.append(message)
    return errors
