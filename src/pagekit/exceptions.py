"""Errors raised by the pagination controller and its helpers."""

from typing import Optional


class PaginationError(Exception):
    """Base exception for pagination errors."""

    default_message = "Pagination failed."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class AlreadyLoadingError(PaginationError):
    """Raised by ``load_more()`` while another page is still loading."""

    default_message = "A loading operation is already in progress."


class EndReachedError(PaginationError):
    """Raised by ``load_more()`` once a short page has signalled end-of-data."""

    default_message = "No more items to load; the end has been reached."


class PaginationCancelledError(PaginationError):
    """
    Raised to the awaiter of an operation that was superseded or cancelled.

    Not a subclass of ``asyncio.CancelledError``; the awaiting task itself is
    still running when it receives this error.
    """

    default_message = "The operation was cancelled."


class FetchError(PaginationError):
    """Raised by the REST fetch adapter when a response carries no page of items."""

    default_message = "Failed to fetch page."
