"""Console client settings (environment variables prefixed TASK_CONSOLE_)."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class ConsoleSettings(BaseSettings):
    """
    Attributes:
        API_BASE_URL: Root of the task API, including its prefix
        CREDENTIALS_PATH: Where the token and cached user are kept between runs
        TIMEOUT: Per-request timeout in seconds
    """
    
    API_BASE_URL: str = "http://localhost:8000/api"
    CREDENTIALS_PATH: Path = Path.home() / ".task_manager" / "credentials.json"
    TIMEOUT: float = 10.0
    
    model_config = SettingsConfigDict(
        env_prefix="TASK_CONSOLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
