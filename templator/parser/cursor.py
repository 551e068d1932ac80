"""
Курсор по исходному тексту шаблона.

Курсор неизменяем: каждое продвижение возвращает новый экземпляр.
Неудачная попытка разбора просто отбрасывает полученный курсор,
а вызывающий код продолжает со своего.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

# Значение current за концом входных данных
EOF = ""


@dataclass(frozen=True)
class Cursor:
    """
    Позиция в исходном тексте.

    Attributes:
        source: Исходный текст (не изменяется)
        offset: Смещение текущего символа
    """
    source: str
    offset: int = 0

    @property
    def current(self) -> str:
        """Текущий символ или EOF за концом текста."""
        if self.offset < len(self.source):
            return self.source[self.offset]
        return EOF

    @property
    def at_end(self) -> bool:
        return self.offset >= len(self.source)

    def advance(self) -> Cursor:
        """Возвращает курсор, сдвинутый на один символ (не дальше конца текста)."""
        if self.at_end:
            return self
        return Cursor(self.source, self.offset + 1)

    def text_since(self, start: Cursor) -> str:
        """Текст между start и текущей позицией."""
        return self.source[start.offset:self.offset]

    def __repr__(self) -> str:
        return f"Cursor(offset={self.offset}, current={self.current!r})"


@dataclass(frozen=True)
class Match(Generic[T]):
    """
    Успешный результат разбора: значение и курсор сразу после него.
    """
    value: T
    cursor: Cursor


__all__ = ["Cursor", "Match", "EOF"]
