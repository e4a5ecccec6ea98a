"""Configuration manager for settings supplied through the environment."""

import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, SecretStr, ValidationError, field_validator

from .errors import InvalidConfigError, MissingConfigError
from .logging import get_logger, log_call

logger = get_logger(__name__)

REQUIRED_VARIABLES = ("NOTION_API_KEY", "NOTION_DATABASE_ID")


class NotionConfig(BaseModel):
    """Pydantic model for the Notion connection."""

    api_key: SecretStr
    database_id: str = Field(min_length=1)
    page_size: int = Field(default=5, ge=1, le=100)
    timeout_ms: int = Field(default=60_000, gt=0)


class LoggingConfig(BaseModel):
    """Pydantic model for logging settings."""

    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level '{value}'")
        return level


class AppConfig(BaseModel):
    """Pydantic model for overall application configuration."""

    version: str = "1.0.0"
    notion: NotionConfig
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class ConfigManager:
    """Loads and validates application configuration once at startup.

    Values come from the process environment, optionally seeded from a
    ``.env`` file in the working directory. Pass ``environ`` to load from an
    explicit mapping instead (used by tests).
    """

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        load_env_file: bool = True,
    ):
        if environ is None:
            if load_env_file:
                load_dotenv()
            environ = os.environ

        self.config = self._load_config(environ)
        logger.info("Configuration loaded from environment")

    @staticmethod
    def _load_config(environ: Mapping[str, str]) -> AppConfig:
        """Build an AppConfig from environment variables."""

        missing = [name for name in REQUIRED_VARIABLES if not environ.get(name, "").strip()]
        if missing:
            raise MissingConfigError(
                f"{', '.join(missing)} must be set in environment variables or .env file",
                details={"missing": missing},
            )

        data = {
            "notion": {
                "api_key": environ["NOTION_API_KEY"].strip(),
                "database_id": environ["NOTION_DATABASE_ID"].strip(),
            },
            "logging": {},
        }
        if environ.get("NOTION_PAGE_SIZE"):
            data["notion"]["page_size"] = environ["NOTION_PAGE_SIZE"]
        if environ.get("NOTION_TIMEOUT_MS"):
            data["notion"]["timeout_ms"] = environ["NOTION_TIMEOUT_MS"]
        if environ.get("NOTION_MAIL_LOG_LEVEL"):
            data["logging"]["log_level"] = environ["NOTION_MAIL_LOG_LEVEL"]

        try:
            return AppConfig(**data)
        except ValidationError as e:
            logger.error(f"Failed to validate configuration: {e}")
            raise InvalidConfigError(
                f"Configuration does not match expected schema: {str(e)}"
            ) from e

    @property
    def notion(self) -> NotionConfig:
        return self.config.notion

    @log_call
    def get_logging_config(self) -> dict:
        """Retrieve logging configuration as a dictionary."""
        return self.config.logging.model_dump()
