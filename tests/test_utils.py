"""Tests for the shared utility functions."""

from frp_config.common.utils import (
    add_prefix,
    get_map_without_prefix,
    join_list,
    mask_sensitive_data,
    sanitize_log_data,
    split_list,
)


class TestGetMapWithoutPrefix:
    """Test side-map extraction from a flat block."""

    def test_strips_prefix(self):
        """Only prefixed keys are collected, in source order."""
        items = {"meta_b": "2", "type": "tcp", "meta_a": "1"}

        assert list(get_map_without_prefix(items, "meta_").items()) == [
            ("b", "2"),
            ("a", "1"),
        ]

    def test_values_become_strings(self):
        """TOML numbers and booleans are stored as strings."""
        assert get_map_without_prefix({"meta_n": 5, "meta_f": True}, "meta_") == {
            "n": "5",
            "f": "True",
        }

    def test_longer_prefix_is_not_confused(self):
        """A key of a longer prefix also carries the shorter one."""
        items = {"header_Host": "a", "response_header_X": "b"}

        assert get_map_without_prefix(items, "header_") == {"Host": "a"}
        assert get_map_without_prefix(items, "response_header_") == {"X": "b"}

    def test_no_match(self):
        assert get_map_without_prefix({"type": "tcp"}, "meta_") == {}


class TestAddPrefix:
    """Test side-map flattening."""

    def test_add_prefix(self):
        assert add_prefix({"a": "1"}, "meta_") == {"meta_a": "1"}

    def test_original_untouched(self):
        items = {"a": "1"}
        add_prefix(items, "meta_")
        assert items == {"a": "1"}


class TestLists:
    """Test comma separated list handling."""

    def test_split_list(self):
        assert split_list("web, ssh,,range_0 ") == ["web", "ssh", "range_0"]

    def test_split_empty(self):
        assert split_list("") == []

    def test_join_list(self):
        assert join_list(["web", "ssh"]) == "web,ssh"
        assert join_list([]) == ""


class TestMaskSensitiveData:
    """Test sensitive data masking function."""

    def test_mask_normal_data(self):
        """Test masking of normal sensitive data."""
        assert mask_sensitive_data("secret123456") == "********3456"
        assert mask_sensitive_data("token_abcdef", show_chars=6) == "******abcdef"
        assert mask_sensitive_data("key") == "***"

    def test_mask_none_data(self):
        """Test masking of None data."""
        assert mask_sensitive_data(None) == "<None>"
        assert mask_sensitive_data("") == "<None>"

    def test_custom_mask_char(self):
        """Test custom mask character."""
        assert mask_sensitive_data("secret123456", mask_char="X") == "XXXXXXXX3456"


class TestSanitizeLogData:
    """Test log data sanitization function."""

    def test_sanitize_config_secrets(self):
        """Tokens, passwords and secret keys of a config are masked."""
        data = {
            "server_addr": "example.com",
            "token": "secret123456",
            "admin_pwd": "mypassword",
            "sk": "abcdef",
            "oidc_client_secret": "clientsecret",
        }

        sanitized = sanitize_log_data(data)

        assert sanitized["server_addr"] == "example.com"
        assert sanitized["token"] == "********3456"
        assert sanitized["admin_pwd"] == "******word"
        assert sanitized["sk"] == "**cdef"
        assert sanitized["oidc_client_secret"] == "********cret"

    def test_case_insensitive_detection(self):
        """Test case-insensitive sensitive field detection."""
        sanitized = sanitize_log_data({"TOKEN": "secret123456"})

        assert sanitized["TOKEN"] == "********3456"

    def test_empty_secret(self):
        assert sanitize_log_data({"token": ""}) == {"token": "<None>"}

    def test_no_sensitive_fields(self):
        """Test sanitization with no sensitive fields."""
        data = {"server_addr": "example.com", "server_port": 7000}

        assert sanitize_log_data(data) == data
