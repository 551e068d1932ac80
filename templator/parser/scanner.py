"""
Примитивы сканера.

Каждая функция принимает курсор и при успехе возвращает новый курсор
(или Match со значением), а при неудаче - None. Курсор вызывающего
кода при этом не меняется.
"""

from __future__ import annotations

import unicodedata
from typing import Optional

from .cursor import EOF, Cursor, Match

# Валюта ($) и соединительная пунктуация (_) допустимы в идентификаторах
_IDENTIFIER_START_CATEGORIES = {"Sc", "Pc"}
_IDENTIFIER_PART_CATEGORIES = _IDENTIFIER_START_CATEGORIES | {"Nd", "Mn", "Mc"}


def is_whitespace(ch: str) -> bool:
    return ch != EOF and ch.isspace()


def is_identifier_start(ch: str) -> bool:
    if ch == EOF:
        return False
    return ch.isidentifier() or unicodedata.category(ch) in _IDENTIFIER_START_CATEGORIES


def is_identifier_part(ch: str) -> bool:
    if ch == EOF:
        return False
    return (
        is_identifier_start(ch)
        or ("_" + ch).isidentifier()
        or unicodedata.category(ch) in _IDENTIFIER_PART_CATEGORIES
    )


def is_lowercase(ch: str) -> bool:
    return "a" <= ch <= "z"


def accept(cursor: Cursor, ch: str) -> Optional[Cursor]:
    """Принимает символ ch, если он текущий."""
    if cursor.current == ch and not cursor.at_end:
        return cursor.advance()
    return None


def accept_all(cursor: Cursor, text: str) -> Optional[Cursor]:
    """Принимает последовательность символов text подряд."""
    for ch in text:
        next_cursor = accept(cursor, ch)
        if next_cursor is None:
            return None
        cursor = next_cursor
    return cursor


def whitespace_run(cursor: Cursor) -> Optional[Cursor]:
    """Один или более пробельных символов; None, если пробелов нет."""
    if not is_whitespace(cursor.current):
        return None
    while is_whitespace(cursor.current):
        cursor = cursor.advance()
    return cursor


def skip_whitespace(cursor: Cursor) -> Cursor:
    """Необязательные пробелы."""
    return whitespace_run(cursor) or cursor


def identifier_run(cursor: Cursor) -> Optional[Match[str]]:
    """Идентификатор: начальный символ и ноль или более символов продолжения."""
    if not is_identifier_start(cursor.current):
        return None
    start = cursor
    cursor = cursor.advance()
    while is_identifier_part(cursor.current):
        cursor = cursor.advance()
    return Match(cursor.text_since(start), cursor)


def lowercase_run(cursor: Cursor) -> Optional[Match[str]]:
    """Один или более символов [a-z] (имена тегов и трансформаций)."""
    if not is_lowercase(cursor.current):
        return None
    start = cursor
    while is_lowercase(cursor.current):
        cursor = cursor.advance()
    return Match(cursor.text_since(start), cursor)


__all__ = [
    "is_whitespace",
    "is_identifier_start",
    "is_identifier_part",
    "is_lowercase",
    "accept",
    "accept_all",
    "whitespace_run",
    "skip_whitespace",
    "identifier_run",
    "lowercase_run",
]
