"""
Парсер структуры шаблона.

Один проход по тексту: на каждой позиции пробуется открывающий тег
<#if(...)>, затем интерполяция %{...}. Текст между распознанными
конструкциями накапливается и сбрасывается в LiteralNode перед каждым
новым узлом и в конце разбора.

Грамматика:
    VAR       = "%{" ws? CHAINED_PATH (ws LOWER_ALPHA)? ws? "}"
    TAG_START = "<" ws? "#"
    TAG_END   = "<" ws? "/" ws? "#" LOWER_ALPHA ws? ">"
    IF_TAG    = TAG_START "if" ws? "(" ws? EXPRESSION ws? ")" ws? ">" BODY TAG_END("if")
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from ..config import DEFAULT_PARSER_CONFIG, ParserConfig
from ..errors import NestingDepthError, TemplateSyntaxError, UnknownTransformError, UnterminatedTagError
from ..model import Expression
from ..nodes import ConditionalNode, InterpolationNode, LiteralNode, RootNode, TemplateNode
from ..transforms import Transform, TransformResolver
from .cursor import Cursor, Match
from .expressions import expression
from .paths import chained_path
from .scanner import accept, accept_all, lowercase_run, skip_whitespace, whitespace_run

logger = logging.getLogger(__name__)

IF_TAG = "if"

Body = Tuple[TemplateNode, ...]


class TemplateParser:
    """
    Парсер шаблонов с рекурсивным спуском.

    Разбирает литеральный текст, интерполяции и условные теги
    (в том числе вложенные) в неизменяемое дерево RootNode.

    Поведение при некорректных конструкциях задаётся ParserConfig.strict:
    в нестрогом режиме они остаются в выводе обычным текстом,
    в строгом - вызывают TemplateSyntaxError. Незакрытый тег и превышение
    глубины вложенности являются ошибкой в обоих режимах.
    """

    def __init__(
        self,
        registry: Optional[TransformResolver] = None,
        config: Optional[ParserConfig] = None,
    ):
        """
        Args:
            registry: Реестр трансформаций для разрешения имён в %{path name}
            config: Политика разбора
        """
        self.registry = registry
        self.config = config or DEFAULT_PARSER_CONFIG

    def parse(self, text: str) -> RootNode:
        """
        Парсит текст шаблона в AST.

        Args:
            text: Исходный текст шаблона

        Returns:
            Корневой узел дерева

        Raises:
            UnterminatedTagError: Тег открыт, но не закрыт
            NestingDepthError: Превышена глубина вложенности
            TemplateSyntaxError: Некорректная конструкция (только в строгом режиме)
        """
        logger.debug(f"Parsing template ({len(text)} chars, strict={self.config.strict})")

        # На верхнем уровне закрывающий тег не ожидается, тело идёт до конца текста
        body, _ = self._scan_body(Cursor(text), closing=None, depth=0)

        root = RootNode(body.value)
        logger.debug(f"Parsed template into {len(root.children)} top-level nodes")
        return root

    # Структура

    def _scan_body(self, cursor: Cursor, closing: Optional[str], depth: int) -> Tuple[Match[Body], bool]:
        """
        Разбирает последовательность узлов до конца текста или закрывающего тега.

        Args:
            cursor: Начало тела
            closing: Имя ожидаемого закрывающего тега (None для верхнего уровня)
            depth: Текущая глубина вложенности

        Returns:
            Узлы с курсором после них и признак того, что встретился
            закрывающий тег closing
        """
        children: List[TemplateNode] = []
        literal_start = cursor

        while not cursor.at_end:
            attempt_start = cursor

            tag_end = self._tag_end(cursor)
            if tag_end is not None:
                if tag_end.value == closing:
                    _flush_literal(children, literal_start, attempt_start)
                    return Match(tuple(children), tag_end.cursor), True
                self._reject(f"Unexpected closing tag '</#{tag_end.value}>'", attempt_start)

            node = self._if_tag(cursor, depth) or self._interpolation(cursor)
            if node is None:
                # Неудачная попытка не сдвигает курсор, поэтому продвигаемся сами
                cursor = cursor.advance()
                continue

            _flush_literal(children, literal_start, attempt_start)
            children.append(node.value)
            cursor = literal_start = node.cursor

        _flush_literal(children, literal_start, cursor)
        return Match(tuple(children), cursor), False

    def _if_tag(self, cursor: Cursor, depth: int) -> Optional[Match[TemplateNode]]:
        """Условный тег <#if(EXP)>BODY</#if>."""
        start = cursor

        after_open = self._tag_start(cursor)
        if after_open is None:
            return None

        name = lowercase_run(after_open)
        if name is None:
            return self._reject("Expected tag name after '<#'", start)
        if name.value != IF_TAG:
            return self._reject(f"Unknown tag '<#{name.value}>'", start)

        condition = self._if_condition(name.cursor)
        if condition is None:
            return self._reject(f"Malformed '<#{IF_TAG}>' tag", start)

        if depth >= self.config.max_nesting_depth:
            raise NestingDepthError(self.config.max_nesting_depth, start.offset)

        body, closed = self._scan_body(condition.cursor, closing=IF_TAG, depth=depth + 1)
        if not closed:
            raise UnterminatedTagError(IF_TAG, start.offset)

        return Match(ConditionalNode(condition.value, body.value), body.cursor)

    def _if_condition(self, cursor: Cursor) -> Optional[Match[Expression]]:
        """Условие тега if: ws? "(" ws? EXP ws? ")" ws? ">" """
        after_paren = accept(skip_whitespace(cursor), "(")
        if after_paren is None:
            return None

        exp = expression(skip_whitespace(after_paren))
        if exp is None:
            return None

        closed = accept(skip_whitespace(exp.cursor), ")")
        if closed is None:
            return None

        after_tag = accept(skip_whitespace(closed), ">")
        if after_tag is None:
            return None

        return Match(exp.value, after_tag)

    @staticmethod
    def _tag_start(cursor: Cursor) -> Optional[Cursor]:
        """TAG_START = "<" ws? "#" """
        after_lt = accept(cursor, "<")
        if after_lt is None:
            return None
        return accept(skip_whitespace(after_lt), "#")

    @staticmethod
    def _tag_end(cursor: Cursor) -> Optional[Match[str]]:
        """TAG_END = "<" ws? "/" ws? "#" LOWER_ALPHA ws? ">" """
        after_lt = accept(cursor, "<")
        if after_lt is None:
            return None

        after_slash = accept(skip_whitespace(after_lt), "/")
        if after_slash is None:
            return None

        after_hash = accept(skip_whitespace(after_slash), "#")
        if after_hash is None:
            return None

        name = lowercase_run(after_hash)
        if name is None:
            return None

        closed = accept(skip_whitespace(name.cursor), ">")
        if closed is None:
            return None

        return Match(name.value, closed)

    # Интерполяция

    def _interpolation(self, cursor: Cursor) -> Optional[Match[TemplateNode]]:
        """Интерполяция %{path} или %{path transform}."""
        start = cursor

        after_open = accept_all(cursor, "%{")
        if after_open is None:
            return None

        path = chained_path(skip_whitespace(after_open))
        if path is None:
            return self._reject("Expected path after '%{'", start)

        cursor = path.cursor
        transform_name: Optional[str] = None
        after_ws = whitespace_run(cursor)
        if after_ws is not None:
            cursor = after_ws
            name = lowercase_run(cursor)
            if name is not None:
                transform_name = name.value
                cursor = skip_whitespace(name.cursor)

        closed = accept(cursor, "}")
        if closed is None:
            return self._reject("Expected '}' to close interpolation", start)

        transform = None
        if transform_name is not None:
            transform = self._resolve_transform(transform_name, start)

        return Match(InterpolationNode(path.value, transform), closed)

    def _resolve_transform(self, name: str, at: Cursor) -> Optional[Transform]:
        """Разрешает имя трансформации через реестр."""
        transform = self.registry.resolve(name) if self.registry is not None else None
        if transform is not None:
            return transform

        if self.config.strict:
            raise UnknownTransformError(name, at.offset)

        logger.warning(f"Unknown transform '{name}' at position {at.offset}, interpolation left without transform")
        return None

    # Политика ошибок

    def _reject(self, message: str, at: Cursor) -> None:
        """
        Обрабатывает некорректную конструкцию согласно политике.

        В строгом режиме выбрасывает TemplateSyntaxError, иначе конструкция
        будет выведена как обычный текст.
        """
        if self.config.strict:
            raise TemplateSyntaxError(message, at.offset)
        logger.debug(f"{message} at position {at.offset}, treating as text")
        return None


def _flush_literal(children: List[TemplateNode], start: Cursor, end: Cursor) -> None:
    """Добавляет накопленный текст в тело, если он не пуст."""
    text = end.text_since(start)
    if text:
        children.append(LiteralNode(text))


def parse_template(
    text: str,
    registry: Optional[TransformResolver] = None,
    config: Optional[ParserConfig] = None,
) -> RootNode:
    """
    Удобная функция для парсинга шаблона.

    Args:
        text: Исходный текст шаблона
        registry: Реестр трансформаций
        config: Политика разбора

    Returns:
        Корневой узел дерева

    Raises:
        TemplateSyntaxError: При ошибке синтаксического анализа
    """
    parser = TemplateParser(registry=registry, config=config)
    return parser.parse(text)


__all__ = ["TemplateParser", "parse_template"]
