"""Centralized path definitions for the NotionMail application.

This module provides a single source of truth for all application paths.
The base directory can be moved with the NOTION_MAIL_HOME environment variable.
"""

import os
from pathlib import Path

# Base application directory
NOTION_MAIL_DIR = Path(
    os.environ.get("NOTION_MAIL_HOME", str(Path.home() / ".notion_mail"))
).expanduser()

# Subdirectories
LOGS_DIR = NOTION_MAIL_DIR / "logs"

# Specific files
SHELL_HISTORY_PATH = NOTION_MAIL_DIR / "shell_history.txt"
