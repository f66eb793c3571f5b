"""
Tests for shared formatting helpers.
"""

import pytest

from calperm.core.formatting import format_count, format_size, truncate


class TestFormatSize:
    """Tests for format_size() - human readable byte sizes."""

    def test_bytes(self):
        """Small values shown in bytes."""
        assert format_size(0) == "0.0 B"
        assert format_size(1023) == "1023.0 B"

    def test_kilobytes(self):
        assert format_size(1024) == "1.0 KB"
        assert format_size(1536) == "1.5 KB"

    def test_megabytes_and_up(self):
        assert format_size(1024 * 1024 * 50) == "50.0 MB"
        assert format_size(1024 ** 3 * 2.5) == "2.5 GB"


class TestFormatCount:

    def test_singular(self):
        assert format_count(1, "item") == "1 item"

    def test_plural(self):
        assert format_count(0, "item") == "0 items"
        assert format_count(12, "item") == "12 items"


class TestTruncate:
    """truncate() marks cut text with '...'."""

    def test_short_text_unchanged(self):
        assert truncate("Calendar", 20) == "Calendar"

    def test_long_text_cut(self):
        assert truncate("alice@contoso.com", 10) == "alice@c..."
        assert len(truncate("alice@contoso.com", 10)) == 10

    @pytest.mark.parametrize("max_len,expected", [(3, "ali"), (1, "a"), (0, ""), (-2, "")])
    def test_tiny_limits(self, max_len, expected):
        assert truncate("alice", max_len) == expected
