"""Shared rich console and styled one-line messages"""

from typing import Optional

from rich.console import Console

_console: Optional[Console] = None


def get_console() -> Console:
    """Get the Console shared by the shell, the browser and the prompter"""
    global _console

    if _console is None:
        _console = Console(highlight=False)

    return _console


def _print_styled(style: str, message: str, console: Optional[Console]) -> None:
    (console or get_console()).print(f"[{style}]{message}[/]")


## Convenience Print Functions

def print_success(message: str, console: Optional[Console] = None) -> None:
    _print_styled("green", message, console)

def print_error(message: str, console: Optional[Console] = None) -> None:
    """Print a failure notice; callers escape any user-supplied text"""
    _print_styled("red", message, console)

def print_warning(message: str, console: Optional[Console] = None) -> None:
    _print_styled("yellow", message, console)
