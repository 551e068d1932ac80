"""
Грамматика путей.

    IDENTIFIER_OR_CALL = IDENTIFIER "()"?
    CHAINED_PATH       = IDENTIFIER ("." IDENTIFIER_OR_CALL)*
"""

from __future__ import annotations

from typing import List, Optional

from ..model import Path, Segment
from .cursor import Cursor, Match
from .scanner import accept, accept_all, identifier_run


def identifier_or_call(cursor: Cursor) -> Optional[Match[Segment]]:
    """
    Сегмент пути: идентификатор, за которым сразу может следовать "()".

    Пробелы между скобками не допускаются; "(" без ")" - ошибка.
    """
    ident = identifier_run(cursor)
    if ident is None:
        return None

    if ident.cursor.current != "(":
        return Match(Segment(ident.value), ident.cursor)

    after_call = accept_all(ident.cursor, "()")
    if after_call is None:
        return None
    return Match(Segment(ident.value, is_call=True), after_call)


def chained_path(cursor: Cursor) -> Optional[Match[Path]]:
    """
    Цепочка идентификаторов через точку.

    Первый идентификатор никогда не является вызовом. Точка без
    корректного сегмента после неё делает недействительным весь путь.
    """
    head = identifier_run(cursor)
    if head is None:
        return None

    cursor = head.cursor
    segments: List[Segment] = []
    while True:
        after_dot = accept(cursor, ".")
        if after_dot is None:
            break
        segment = identifier_or_call(after_dot)
        if segment is None:
            return None
        segments.append(segment.value)
        cursor = segment.cursor

    return Match(Path(head.value, tuple(segments)), cursor)


__all__ = ["identifier_or_call", "chained_path"]
