"""NotionMail: a command-line mail client backed by a Notion database."""

__version__ = "1.0.0"
