"""Prompt labels and user-facing messages."""

from .sanitize import Command

PROMPT_INDENT = " " * 4


class CommandPrompts:
    """Labels for the interactive prompts."""

    GET_COMMAND = "Enter command:"
    GET_SENDER = PROMPT_INDENT + "Sender:"
    GET_RECIPIENT = PROMPT_INDENT + "Recipient:"
    GET_MESSAGE = PROMPT_INDENT + "Message:"
    READ_MESSAGES = "Browse messages:"
    DELETE_MESSAGES = "Select a message to delete:"


class UserMessages:
    """Static text shown to the user."""

    WELCOME = "Welcome to NotionMail!"
    GOODBYE = "Exiting NotionMail - [bold green]Goodbye![/]"
    SEND_SUCCESS = "Message sent successfully"
    SEND_FAILURE = "Error sending message"
    DELETE_SUCCESS = "Message deleted successfully"
    DELETE_FAILURE = "Error deleting message"
    UNKNOWN_COMMAND = "Unknown command. Please try again."
    CANCELLED = "Cancelled"


COMMAND_DESCRIPTIONS = {
    Command.SEND: "Send mail to a user.",
    Command.READ: "Check a user's mail.",
    Command.DELETE: "Delete mail for a user.",
    Command.HELP: "Show this help message.",
    Command.EXIT: "Exit program.",
}
