"""Error taxonomy and the helpers used where failures are caught."""

from enum import Enum
from typing import Any, Dict, Optional

from .logging import get_logger

logger = get_logger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred - check logs for details."


class ErrorCategory(str, Enum):
    NETWORK = "network"
    BACKEND = "backend"
    FILE_SYSTEM = "file_system"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


class NotionMailError(Exception):
    """Base class for failures the application knows how to describe.

    ``user_message`` is the fallback text when no message is given; the
    ``details`` mapping goes to the log, never to the terminal.
    """

    category = ErrorCategory.UNKNOWN
    user_message = "An error occurred"

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message or self.user_message
        self.details = dict(details or {})
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": type(self).__name__,
            "category": self.category.value,
            "message": self.message,
            "details": self.details,
        }


## Transport and backend


class NetworkError(NotionMailError):
    """The request never got an answer from Notion."""

    category = ErrorCategory.NETWORK
    user_message = "A network error occurred"


class NetworkTimeoutError(NetworkError):
    user_message = "The connection timed out"


class BackendRejectedError(NotionMailError):
    """Notion answered with an error response."""

    category = ErrorCategory.BACKEND
    user_message = "The request was rejected by Notion"

    @property
    def status(self) -> Optional[int]:
        return self.details.get("status")

    @property
    def code(self) -> Optional[str]:
        return self.details.get("code")


## Local environment


class FileSystemError(NotionMailError):
    category = ErrorCategory.FILE_SYSTEM
    user_message = "A file system error occurred"


class ConfigurationError(NotionMailError):
    """Startup cannot continue with the current settings."""

    category = ErrorCategory.CONFIGURATION
    user_message = "A configuration error occurred"


class MissingConfigError(ConfigurationError):
    user_message = "Missing configuration settings"


class InvalidConfigError(ConfigurationError):
    user_message = "Invalid configuration settings"


class SchemaError(ConfigurationError):
    """A schema field has no column or no value kind."""

    user_message = "The message schema is incomplete"


## Boundary helpers


class ErrorHandler:
    """Logs failures caught at a boundary and summarises them."""

    @staticmethod
    def describe(error: Exception, context: str = "") -> Dict[str, Any]:
        if isinstance(error, NotionMailError):
            return error.to_dict()
        return {
            "error_type": "UnknownError",
            "category": ErrorCategory.UNKNOWN.value,
            "message": str(error),
            "details": {"context": context},
        }

    @classmethod
    def handle(cls, error: Exception, context: str = "", log_traceback: bool = True) -> Dict[str, Any]:
        """Log ``error`` with its details and return the summary."""
        summary = cls.describe(error, context)
        logger.error(
            f"{context}: {summary['message']}",
            exc_info=error if log_traceback else None,
            extra={"context": summary["details"]},
        )
        return summary


def format_error_message(error: Exception) -> str:
    """Text safe to show the user; unexpected errors stay in the log."""
    if isinstance(error, NotionMailError):
        return error.message
    return UNEXPECTED_ERROR_MESSAGE
