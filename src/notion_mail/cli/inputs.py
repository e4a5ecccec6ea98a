"""Field prompts for the shell and its commands."""

from typing import Iterable, Optional

from prompt_toolkit.validation import Validator

from .constants import CommandPrompts
from .prompts import Prompter
from .sanitize import COMMANDS, CommandValidator, RequiredValidator, clean


async def prompt_input_clean(
    prompter: Prompter,
    label: str,
    validator: Optional[Validator] = None,
    completions: Optional[Iterable[str]] = None,
) -> str:
    """Prompt for text and return it cleaned."""
    answer = await prompter.prompt_text(label, validator=validator, completions=completions)
    return clean(answer)


async def get_command(prompter: Prompter) -> str:
    """Prompt until a known command is entered; returns it cleaned."""
    return await prompt_input_clean(
        prompter,
        CommandPrompts.GET_COMMAND,
        validator=CommandValidator(),
        completions=COMMANDS,
    )


async def get_sender(prompter: Prompter) -> str:
    return await prompt_input_clean(prompter, CommandPrompts.GET_SENDER)


async def get_recipient(prompter: Prompter) -> str:
    """Recipient is the mailbox key, so it may not be blank."""
    return await prompt_input_clean(
        prompter, CommandPrompts.GET_RECIPIENT, validator=RequiredValidator()
    )


async def get_message(prompter: Prompter) -> str:
    # message bodies keep their case and whitespace
    return await prompter.prompt_text(CommandPrompts.GET_MESSAGE)
