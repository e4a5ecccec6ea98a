"""Message browsing feature.

Public API:
    PaginationBrowser.browse(recipient, prompt_label) -> selected message id or None
"""

from .workflow import BrowseSession, BrowseState, PaginationBrowser

__all__ = ["BrowseSession", "BrowseState", "PaginationBrowser"]
