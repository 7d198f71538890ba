"""Test offset to line/column mapping."""

from jinjahl.positions import PositionMapper, position_of
from jinjahl.tokens import Position


class TestPositionOf:
    def test_start_of_text(self):
        assert position_of("abc", 0) == Position(0, 0, 0)

    def test_second_line(self):
        # a b \n c d -> offset 4 is "d"
        assert position_of("ab\ncd", 4) == Position(1, 1, 4)

    def test_offset_at_newline(self):
        assert position_of("ab\ncd", 2) == Position(0, 2, 2)

    def test_offset_just_after_newline(self):
        assert position_of("ab\ncd", 3) == Position(1, 0, 3)

    def test_end_of_text(self):
        assert position_of("ab\ncd", 5) == Position(1, 2, 5)

    def test_clamped_past_end(self):
        assert position_of("ab\ncd", 99) == Position(1, 2, 5)

    def test_consecutive_newlines(self):
        assert position_of("\n\n\nx", 3) == Position(3, 0, 3)

    def test_empty_text(self):
        assert position_of("", 0) == Position(0, 0, 0)


class TestPositionMapper:
    def test_matches_pure_function(self):
        text = "line one\n{{ x }}\n\n{% if y %}\nend"
        mapper = PositionMapper(text)
        for offset in range(len(text) + 1):
            assert mapper.position(offset) == position_of(text, offset)

    def test_backwards_lookup_restarts(self):
        text = "ab\ncd\nef"
        mapper = PositionMapper(text)
        assert mapper.position(7) == Position(2, 1, 7)
        assert mapper.position(1) == Position(0, 1, 1)
        assert mapper.position(4) == Position(1, 1, 4)

    def test_repeated_offset(self):
        mapper = PositionMapper("ab\ncd")
        first = mapper.position(4)
        assert mapper.position(4) == first

    def test_skipping_several_lines(self):
        text = "a\nb\nc\nd"
        mapper = PositionMapper(text)
        assert mapper.position(1) == Position(0, 1, 1)
        assert mapper.position(6) == Position(3, 0, 6)
