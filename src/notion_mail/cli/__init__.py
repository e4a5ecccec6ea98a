"""Interactive command-line interface for NotionMail."""
