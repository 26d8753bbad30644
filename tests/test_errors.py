"""
Tests for the feed error taxonomy.
"""
from feedhub.errors import (
    AdapterFailure,
    Conflict,
    FeedError,
    Forbidden,
    NotFound,
    Unauthenticated,
    ValidationError,
)


class TestStatusCodes:
    """Tests for the HTTP status each error carries."""

    def test_class_defaults(self):
        assert ValidationError("x").status_code == 400
        assert Unauthenticated("x").status_code == 403
        assert Forbidden("x").status_code == 403
        assert NotFound("x").status_code == 404
        assert Conflict("x").status_code == 409
        assert AdapterFailure("x").status_code == 500

    def test_omitted_status_keeps_class_default(self):
        error = NotFound("Feed abc not found", status_code=None)
        assert error.status_code == 404
        assert error.message == "Feed abc not found"

    def test_explicit_status_overrides_default(self):
        assert FeedError("Teapot", status_code=418).status_code == 418
