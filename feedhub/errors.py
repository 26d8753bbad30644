"""Errors raised by the feed layer, each carrying the HTTP status it maps to."""
from typing import Optional


class FeedError(Exception):
    """Base exception for feed errors."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(FeedError):
    """Raised when a required feed field is missing or empty (400)."""
    status_code = 400


class Unauthenticated(FeedError):
    """Raised when an anonymous caller attempts a protected operation (403)."""
    status_code = 403


class Forbidden(FeedError):
    """Raised when the caller is neither the feed's owner nor an admin (403)."""
    status_code = 403


class NotFound(FeedError):
    """Raised when no feed is stored under the requested id (404)."""
    status_code = 404


class Conflict(FeedError):
    """Raised when a feed with the same url is already stored (409)."""
    status_code = 409


class AdapterFailure(FeedError):
    """Raised when the cache or the search index cannot be reached (500)."""
    status_code = 500
