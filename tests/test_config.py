"""
Tests for environment helpers in feedhub.config.
"""
from feedhub.config import _get_bool_env_var, _get_list_env_var


class TestBoolEnvVar:
    """Tests for _get_bool_env_var."""

    def test_none_is_false(self):
        assert _get_bool_env_var(None) is False

    def test_truthy_values(self):
        for value in ["1", "true", "T", " yes ", "Y"]:
            assert _get_bool_env_var(value) is True

    def test_falsy_values(self):
        for value in ["0", "false", "no", ""]:
            assert _get_bool_env_var(value) is False


class TestListEnvVar:
    """Tests for _get_list_env_var."""

    def test_empty_values(self):
        assert _get_list_env_var(None) == []
        assert _get_list_env_var("") == []

    def test_splits_and_strips(self):
        """Comma-separated values are split, stripped and blanks dropped."""
        value = "admin@example.com, root@example.com ,,"
        assert _get_list_env_var(value) == ["admin@example.com", "root@example.com"]
