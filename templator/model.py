"""
Модели данных для выражений шаблона.

Содержит пути к значениям (цепочки идентификаторов через точку)
и узлы булевых выражений, используемых в условных тегах.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


@dataclass(frozen=True)
class Segment:
    """
    Сегмент пути после точки: name или name().

    Флаг is_call означает вызов функции без аргументов.
    """
    name: str
    is_call: bool = False

    def __str__(self) -> str:
        return f"{self.name}()" if self.is_call else self.name


@dataclass(frozen=True)
class Path:
    """
    Цепочка идентификаторов: head.seg1.seg2()...

    Первый идентификатор обязателен и никогда не является вызовом.
    """
    head: str
    segments: Tuple[Segment, ...] = ()

    def __str__(self) -> str:
        return ".".join([self.head, *(str(s) for s in self.segments)])


class ComparisonOp(Enum):
    """Операторы сравнения."""
    EQ = "=="
    NEQ = "!="
    GT = ">"
    GTE = ">="
    LT = "<"
    LTE = "<="


class ExpressionType(Enum):
    """Типы узлов булевых выражений."""
    COMPARISON = "comparison"
    AND = "and"
    OR = "or"
    NOT = "not"


@dataclass(frozen=True)
class Expression(ABC):
    """Базовый абстрактный класс для всех выражений."""

    @abstractmethod
    def get_type(self) -> ExpressionType:
        """Возвращает тип выражения."""
        pass

    def __str__(self) -> str:
        """Строковое представление выражения в синтаксисе шаблона."""
        return self._to_string()

    @abstractmethod
    def _to_string(self) -> str:
        pass


@dataclass(frozen=True)
class Comparison(Expression):
    """
    Сравнение двух путей: left op right
    """
    left: Path
    op: ComparisonOp
    right: Path

    def get_type(self) -> ExpressionType:
        return ExpressionType.COMPARISON

    def _to_string(self) -> str:
        return f"{self.left}{self.op.value}{self.right}"


@dataclass(frozen=True)
class BinaryExpression(Expression):
    """Бинарная логическая операция над двумя выражениями."""
    left: Expression
    right: Expression

    @property
    def symbol(self) -> str:
        return "&&" if self.get_type() == ExpressionType.AND else "||"

    def _to_string(self) -> str:
        return f"{_operand(self.left)} {self.symbol} {_operand(self.right)}"


@dataclass(frozen=True)
class AndExpression(BinaryExpression):
    """Логическое И: left && right"""

    def get_type(self) -> ExpressionType:
        return ExpressionType.AND


@dataclass(frozen=True)
class OrExpression(BinaryExpression):
    """Логическое ИЛИ: left || right"""

    def get_type(self) -> ExpressionType:
        return ExpressionType.OR


@dataclass(frozen=True)
class NotExpression(Expression):
    """
    Отрицание: !inner

    Операнд, не являющийся сравнением, берётся в скобки.
    """
    inner: Expression

    def get_type(self) -> ExpressionType:
        return ExpressionType.NOT

    def _to_string(self) -> str:
        if isinstance(self.inner, Comparison):
            return f"!{self.inner}"
        return f"!({self.inner})"


def _operand(expr: Expression) -> str:
    # Грамматика допускает только одно повторение && и ||,
    # поэтому любой вложенный бинарный операнд выводится в скобках
    if isinstance(expr, BinaryExpression):
        return f"({expr})"
    return str(expr)


__all__ = [
    "Segment",
    "Path",
    "ComparisonOp",
    "ExpressionType",
    "Expression",
    "Comparison",
    "BinaryExpression",
    "AndExpression",
    "OrExpression",
    "NotExpression",
]
