"""Input cleaning and command validation."""

from enum import Enum
from typing import Union

from prompt_toolkit.validation import ValidationError, Validator


class Command(str, Enum):
    """Commands accepted by the shell."""

    SEND = "send"
    READ = "read"
    HELP = "help"
    DELETE = "delete"
    EXIT = "exit"


COMMANDS = frozenset(command.value for command in Command)

INVALID_COMMAND_MESSAGE = (
    f"Please enter a valid command {','.join(command.value for command in Command)}"
)


def clean(text: str) -> str:
    """Trim surrounding whitespace and lowercase.

    Applied to commands, senders and recipients. Never to message bodies.
    """
    return text.strip().lower()


def is_valid_command(text: str) -> bool:
    return clean(text) in COMMANDS


def validate_command(text: str) -> Union[bool, str]:
    """Return True for a valid command, otherwise the rejection message."""
    if is_valid_command(text):
        return True
    return INVALID_COMMAND_MESSAGE


class CommandValidator(Validator):
    """prompt_toolkit validator that re-asks until a known command is typed."""

    def validate(self, document) -> None:
        if not is_valid_command(document.text):
            raise ValidationError(
                message=INVALID_COMMAND_MESSAGE,
                cursor_position=len(document.text),
            )


REQUIRED_FIELD_MESSAGE = "This field cannot be empty"


class RequiredValidator(Validator):
    """Re-asks while the answer cleans to an empty string."""

    def validate(self, document) -> None:
        if not clean(document.text):
            raise ValidationError(
                message=REQUIRED_FIELD_MESSAGE,
                cursor_position=len(document.text),
            )
