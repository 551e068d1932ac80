"""
Парсер шаблонов: сканер, грамматика путей, выражений и структуры тегов.
"""

from .cursor import Cursor, Match
from .expressions import parse_expression
from .template import TemplateParser, parse_template

__all__ = [
    # Основная точка входа
    "TemplateParser",
    "parse_template",

    # Низкоуровневые функции (для тестирования и отладки)
    "parse_expression",
    "Cursor",
    "Match",
]
