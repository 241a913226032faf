"""
Session and credential store.

The session (token + cached user) is an explicit value handed to the gateway
client. ``CredentialStore`` keeps it in a JSON file so it survives restarts.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError

from task_manager.schemas.user import UserRead

logger = logging.getLogger(__name__)


class Session(BaseModel):
    """Credentials attached to every gateway call."""

    token: str
    user: Optional[UserRead] = None

    @property
    def authorization(self) -> str:
        return f"Bearer {self.token}"


class CredentialStore:
    """JSON file holding ``{"token": ..., "user": {...}}``."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> Optional[Session]:
        """Return the stored session, or None if there is none or it is unreadable."""
        if not self.path.exists():
            return None
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
            return Session.model_validate(data)
        except (OSError, ValueError, ValidationError) as exc:
            logger.warning("Ignoring unreadable credentials file %s: %s", self.path, exc)
            return None

    def save(self, session: Session) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as f:
            json.dump(session.model_dump(mode="json"), f, indent=2)
        try:
            self.path.chmod(0o600)
        except OSError:
            logger.debug("Could not restrict permissions on %s", self.path)

    def clear(self) -> None:
        """Forget the stored session (logout)."""
        self.path.unlink(missing_ok=True)
