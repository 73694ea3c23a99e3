"""Unit tests for command argument validation."""

import sys
from pathlib import Path

import pytest

from configvault.utils.validators import (
    ValidationError,
    validate_path_argument,
    validate_text_argument,
)


class TestValidateTextArgument:
    """Tests for validate_text_argument()."""

    def test_accepts_unicode(self):
        """Test ordinary non-ASCII text passes through."""
        assert validate_text_argument('{"name": "测试 🔑"}') == '{"name": "测试 🔑"}'

    def test_empty_allowed_by_default(self):
        """Test empty text is accepted unless disallowed."""
        assert validate_text_argument("") == ""
        with pytest.raises(ValidationError, match="empty"):
            validate_text_argument("", "password", allow_empty=False)

    @pytest.mark.parametrize("value", ["\ud800", "pw-\udcff", '{"k": "\udfff"}'])
    def test_rejects_lone_surrogates(self, value):
        """Test text that cannot be encoded as UTF-8 is rejected without echoing it."""
        with pytest.raises(ValidationError, match="password is not valid Unicode text") as exc_info:
            validate_text_argument(value, "password")

        assert exc_info.value.__cause__ is None
        assert value not in str(exc_info.value)

    def test_rejects_non_string(self):
        """Test bytes are not accepted as text."""
        with pytest.raises(ValidationError, match="must be a string"):
            validate_text_argument(b"{}", "config_json")


class TestValidatePathArgument:
    """Tests for validate_path_argument()."""

    def test_returns_expanded_path(self):
        """Test the home directory marker is expanded."""
        assert validate_path_argument("~/export.json") == Path.home() / "export.json"

    @pytest.mark.skipif(sys.platform == "win32", reason="Windows paths accept surrogates")
    def test_rejects_unencodable_path(self):
        """Test paths the filesystem encoding cannot represent are rejected."""
        with pytest.raises(ValidationError, match="not a valid filesystem path"):
            validate_path_argument("/tmp/\ud800.json", "export_path")
