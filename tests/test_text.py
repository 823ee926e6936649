"""Tests for text measurement and alignment helpers."""

import pytest

import termwidgets as tw


class TestTextWidth:
    """Test column width computation."""

    def test_ascii(self) -> None:
        assert tw.textwidth('abc') == 3

    def test_wide_characters(self) -> None:
        assert tw.textwidth('日本') == 4

    def test_combining_mark_takes_no_column(self) -> None:
        assert tw.textwidth('e\u0301') == 1

    def test_control_characters_take_no_column(self) -> None:
        assert tw.charwidth('\x07') == 0

    def test_chars2cols(self) -> None:
        assert tw.chars2cols('日本x', 2) == 4
        assert tw.chars2cols('abc', 0) == 0


class TestCols2Chars:
    """Test mapping columns back to character indices."""

    def test_ascii(self) -> None:
        assert tw.cols2chars('abc', 2) == 2

    def test_beyond_end(self) -> None:
        assert tw.cols2chars('abc', 10) == 3

    def test_negative(self) -> None:
        assert tw.cols2chars('abc', -4) == 0

    def test_inside_wide_character_picks_closest_start(self) -> None:
        assert tw.cols2chars('日本', 1) == 0
        assert tw.cols2chars('日本', 3) == 1
        assert tw.cols2chars('日本', 4) == 2


class TestSubstrWidth:
    """Test cutting text by columns."""

    def test_tail(self) -> None:
        assert tw.substrwidth('hello world', 6) == 'world'

    def test_middle(self) -> None:
        assert tw.substrwidth('hello', 1, 3) == 'ell'

    def test_cut_wide_characters_become_spaces(self) -> None:
        result = tw.substrwidth('日本語', 1, 4)
        assert result == ' 本 '
        assert tw.textwidth(result) == 4

    def test_short_text(self) -> None:
        assert tw.substrwidth('ab', 1, 10) == 'b'


class TestAlignment:
    """Test alignment parsing and allocation."""

    def test_names(self) -> None:
        assert tw.parse_align('left') == 0.0
        assert tw.parse_align('centre') == 0.5
        assert tw.parse_align('middle') == 0.5
        assert tw.parse_align('bottom') == 1.0

    def test_numbers_pass_through(self) -> None:
        assert tw.parse_align(0.25) == 0.25

    def test_unknown_name(self) -> None:
        with pytest.raises(ValueError):
            tw.parse_align('sideways')

    def test_allocation(self) -> None:
        assert tw.align_allocation(4, 10, 0.5) == (3, 4, 3)
        assert tw.align_allocation(4, 10, tw.ALIGN_RIGHT) == (6, 4, 0)

    def test_allocation_too_wide(self) -> None:
        assert tw.align_allocation(12, 10, 0.0) == (0, 10, 0)
        assert tw.align_allocation(3, -2, 0.5) == (0, 0, 0)
