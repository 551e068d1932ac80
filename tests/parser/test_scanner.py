"""
Tests for the cursor and scanner primitives.
"""

from templator.parser.cursor import EOF, Cursor
from templator.parser.scanner import (
    accept,
    accept_all,
    identifier_run,
    is_identifier_part,
    is_identifier_start,
    lowercase_run,
    skip_whitespace,
    whitespace_run,
)


class TestCursor:

    def test_current_and_advance(self):
        cursor = Cursor("ab")
        assert cursor.current == "a"
        assert cursor.advance().current == "b"
        assert cursor.advance().advance().current == EOF
        assert cursor.advance().advance().at_end

    def test_advance_past_end_is_clamped(self):
        end = Cursor("a", 1)
        assert end.advance() == end

    def test_empty_source(self):
        cursor = Cursor("")
        assert cursor.at_end
        assert cursor.current == EOF

    def test_code_points_not_bytes(self):
        cursor = Cursor("ж€x")
        assert cursor.current == "ж"
        assert cursor.advance().current == "€"
        assert cursor.advance().advance().current == "x"

    def test_text_since(self):
        start = Cursor("hello world")
        end = Cursor("hello world", 5)
        assert end.text_since(start) == "hello"


class TestScanner:

    def test_accept_moves_only_on_match(self):
        cursor = Cursor("ab")
        assert accept(cursor, "a") == Cursor("ab", 1)
        assert accept(cursor, "b") is None
        assert cursor.offset == 0

    def test_accept_at_end_fails(self):
        assert accept(Cursor(""), EOF) is None
        assert accept(Cursor(""), "a") is None

    def test_accept_all(self):
        assert accept_all(Cursor("%{x"), "%{") == Cursor("%{x", 2)
        assert accept_all(Cursor("%x"), "%{") is None
        assert accept_all(Cursor("%"), "%{") is None

    def test_whitespace_run(self):
        assert whitespace_run(Cursor("  \t\nx")) == Cursor("  \t\nx", 4)
        assert whitespace_run(Cursor("x")) is None

    def test_skip_whitespace_is_optional(self):
        assert skip_whitespace(Cursor("x")) == Cursor("x")
        assert skip_whitespace(Cursor("  x")).current == "x"

    def test_identifier_run(self):
        result = identifier_run(Cursor("user_1.name"))
        assert result is not None
        assert result.value == "user_1"
        assert result.cursor.current == "."

    def test_identifier_allows_underscore_and_currency_start(self):
        assert identifier_run(Cursor("_x")).value == "_x"
        assert identifier_run(Cursor("$price")).value == "$price"

    def test_identifier_unicode_letters(self):
        assert identifier_run(Cursor("имя}")).value == "имя"

    def test_identifier_cannot_start_with_digit(self):
        assert identifier_run(Cursor("1abc")) is None
        assert identifier_run(Cursor("")) is None

    def test_identifier_char_classes(self):
        assert is_identifier_start("a")
        assert not is_identifier_start("9")
        assert is_identifier_part("9")
        assert not is_identifier_part("-")
        assert not is_identifier_part(EOF)

    def test_lowercase_run(self):
        result = lowercase_run(Cursor("upper}"))
        assert result.value == "upper"
        assert result.cursor.current == "}"

    def test_lowercase_run_stops_at_non_lowercase(self):
        assert lowercase_run(Cursor("ifX")).value == "if"
        assert lowercase_run(Cursor("Upper")) is None
        assert lowercase_run(Cursor("")) is None
