"""Tests for zilo.utils -- display width of status-line text."""

from __future__ import annotations

from zilo.utils import truncate_to_width, visible_width


class TestVisibleWidth:
    """Measure the visible terminal width of text."""

    def test_plain_ascii(self) -> None:
        assert visible_width("hello") == 5

    def test_empty_string(self) -> None:
        assert visible_width("") == 0

    def test_wide_cjk_characters_count_as_two(self) -> None:
        assert visible_width("世") == 2

    def test_mixed_ascii_and_wide(self) -> None:
        assert visible_width("A世B") == 4

    def test_combining_mark_adds_nothing(self) -> None:
        assert visible_width("e\u0301") == 1


class TestTruncateToWidth:
    """Cut text to a column budget without splitting characters."""

    def test_short_text_unchanged(self) -> None:
        assert truncate_to_width("abc", 10) == "abc"

    def test_ascii_cut(self) -> None:
        assert truncate_to_width("abcdefghij", 4) == "abcd"

    def test_zero_width_budget(self) -> None:
        assert truncate_to_width("abc", 0) == ""
        assert truncate_to_width("abc", -3) == ""

    def test_wide_character_not_split(self) -> None:
        assert truncate_to_width("世界", 3) == "世"

    def test_combining_sequence_kept_whole(self) -> None:
        assert truncate_to_width("e\u0301x", 1) == "e\u0301"

    def test_control_characters_dropped(self) -> None:
        assert truncate_to_width("a\x1b[2Jb", 10) == "a[2Jb"
        assert truncate_to_width("x\ty\r\n\x9bz", 10) == "xyz"

    def test_control_characters_take_no_budget(self) -> None:
        assert truncate_to_width("\x1b\x1bab", 1) == "a"
