"""Payload builders shared by the test modules."""

from datetime import timedelta

from task_manager.utils.time import utc_now


def future_deadline(**delta) -> str:
    """ISO deadline inside the allowed window (default: 7 days out)."""
    if not delta:
        delta = {"days": 7}
    return (utc_now() + timedelta(**delta)).isoformat()


def task_payload(**overrides) -> dict:
    payload = {
        "title": "Write report",
        "description": "Quarterly numbers",
        "deadline": future_deadline(),
    }
    payload.update(overrides)
    return payload
