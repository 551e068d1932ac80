"""
Парсер булевых выражений с рекурсивным спуском.

Грамматика:
expression    → term ("||" term)?
term          → factor ("&&" factor)?
factor        → "(" expression ")" | "!" factor | comparison
comparison    → CHAINED_PATH comparison_op CHAINED_PATH
comparison_op → "==" | "!=" | ">" | ">=" | "<" | "<="

Пробелы вокруг операторов и скобок необязательны.

Операторы && и || допускают только одно повторение на уровень:
"a==b && c==d && e==f" не разбирается, для цепочек нужны скобки.

Вложенность скобок и отрицаний ограничена MAX_EXPRESSION_DEPTH;
более глубокое выражение считается некорректным.
"""

from __future__ import annotations

from typing import Optional

from ..errors import TemplateSyntaxError
from ..model import (
    AndExpression,
    Comparison,
    ComparisonOp,
    Expression,
    NotExpression,
    OrExpression,
)
from .cursor import Cursor, Match
from .paths import chained_path
from .scanner import accept, accept_all, skip_whitespace

# Предел вложенности скобок и отрицаний в одном выражении
MAX_EXPRESSION_DEPTH = 64


def comparison_op(cursor: Cursor) -> Optional[Match[ComparisonOp]]:
    """Оператор сравнения; одиночные "=" и "!" недопустимы."""
    after = accept_all(cursor, "==")
    if after is not None:
        return Match(ComparisonOp.EQ, after)

    after = accept_all(cursor, "!=")
    if after is not None:
        return Match(ComparisonOp.NEQ, after)

    for symbol, strict_op, inclusive_op in ((">", ComparisonOp.GT, ComparisonOp.GTE),
                                            ("<", ComparisonOp.LT, ComparisonOp.LTE)):
        after = accept(cursor, symbol)
        if after is None:
            continue
        after_eq = accept(after, "=")
        if after_eq is not None:
            return Match(inclusive_op, after_eq)
        return Match(strict_op, after)

    return None


def comparison(cursor: Cursor) -> Optional[Match[Expression]]:
    """Сравнение двух путей: left op right"""
    left = chained_path(cursor)
    if left is None:
        return None

    op = comparison_op(skip_whitespace(left.cursor))
    if op is None:
        return None

    right = chained_path(skip_whitespace(op.cursor))
    if right is None:
        return None

    return Match(Comparison(left.value, op.value, right.value), right.cursor)


def factor(cursor: Cursor, depth: int = 0) -> Optional[Match[Expression]]:
    """
    Группа в скобках, отрицание или сравнение.

    depth - число охватывающих скобок и отрицаний; глубже
    MAX_EXPRESSION_DEPTH группа или отрицание не разбираются.
    """
    if cursor.current == "(":
        if depth >= MAX_EXPRESSION_DEPTH:
            return None
        inner = expression(skip_whitespace(cursor.advance()), depth + 1)
        if inner is None:
            return None
        closed = accept(skip_whitespace(inner.cursor), ")")
        if closed is None:
            return None
        # Скобки влияют только на приоритет, отдельного узла для группы нет
        return Match(inner.value, closed)

    if cursor.current == "!":
        if depth >= MAX_EXPRESSION_DEPTH:
            return None
        operand = factor(skip_whitespace(cursor.advance()), depth + 1)
        if operand is None:
            return None
        return Match(NotExpression(operand.value), operand.cursor)

    return comparison(cursor)


def term(cursor: Cursor, depth: int = 0) -> Optional[Match[Expression]]:
    """Логическое И (средний приоритет)."""
    left = factor(cursor, depth)
    if left is None:
        return None

    after_op = accept_all(skip_whitespace(left.cursor), "&&")
    if after_op is None:
        return left

    right = factor(skip_whitespace(after_op), depth)
    if right is None:
        return None
    return Match(AndExpression(left.value, right.value), right.cursor)


def expression(cursor: Cursor, depth: int = 0) -> Optional[Match[Expression]]:
    """Логическое ИЛИ (низший приоритет)."""
    left = term(cursor, depth)
    if left is None:
        return None

    after_op = accept_all(skip_whitespace(left.cursor), "||")
    if after_op is None:
        return left

    right = term(skip_whitespace(after_op), depth)
    if right is None:
        return None
    return Match(OrExpression(left.value, right.value), right.cursor)


def parse_expression(text: str) -> Expression:
    """
    Удобная функция для разбора выражения из строки целиком.

    Raises:
        TemplateSyntaxError: Если строка не является корректным выражением
    """
    start = skip_whitespace(Cursor(text))
    result = expression(start)
    if result is None:
        raise TemplateSyntaxError(f"Invalid expression '{text}'", start.offset)

    end = skip_whitespace(result.cursor)
    if not end.at_end:
        raise TemplateSyntaxError(f"Unexpected input '{text[end.offset:]}'", end.offset)

    return result.value


__all__ = [
    "MAX_EXPRESSION_DEPTH",
    "comparison_op",
    "comparison",
    "factor",
    "term",
    "expression",
    "parse_expression",
]
