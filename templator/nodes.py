"""
AST-узлы шаблона.

Определяет неизменяемую иерархию узлов, которую строит парсер и
обходит внешний вычислитель при рендеринге.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .model import Expression, Path
from .transforms import Transform


@dataclass(frozen=True)
class TemplateNode:
    """Базовый класс для всех узлов AST шаблона."""
    pass


@dataclass(frozen=True)
class RootNode(TemplateNode):
    """
    Корень дерева шаблона.

    Содержит упорядоченную последовательность дочерних узлов верхнего уровня.
    """
    children: Tuple[TemplateNode, ...] = ()


@dataclass(frozen=True)
class LiteralNode(TemplateNode):
    """
    Обычный текст шаблона.

    Выводится в результат как есть.
    """
    text: str


@dataclass(frozen=True)
class InterpolationNode(TemplateNode):
    """
    Подстановка значения %{path transform}.

    transform равен None, если трансформация не запрошена
    или её имя не найдено в реестре.
    """
    path: Path
    transform: Optional[Transform] = None


@dataclass(frozen=True)
class ConditionalNode(TemplateNode):
    """
    Условный блок <#if(condition)>...</#if>.

    Тело включается в вывод только если условие истинно при рендеринге.
    """
    condition: Expression
    children: Tuple[TemplateNode, ...] = ()


def to_source(node: TemplateNode) -> str:
    """
    Восстанавливает текст шаблона по дереву.

    Выражения и интерполяции выводятся в каноническом виде,
    поэтому пробелы внутри конструкций не сохраняются.
    """
    if isinstance(node, LiteralNode):
        return node.text
    if isinstance(node, InterpolationNode):
        if node.transform is not None:
            return f"%{{{node.path} {node.transform.name}}}"
        return f"%{{{node.path}}}"
    if isinstance(node, ConditionalNode):
        body = "".join(to_source(child) for child in node.children)
        return f"<#if({node.condition})>{body}</#if>"
    if isinstance(node, RootNode):
        return "".join(to_source(child) for child in node.children)
    raise TypeError(f"Unknown node type: {type(node).__name__}")


def collect_text_content(node: TemplateNode) -> str:
    """
    Собирает весь текстовый контент из AST (для тестирования и отладки).

    Args:
        node: Узел для обработки

    Returns:
        Объединенный текст всех литералов, включая тела условий
    """
    result_parts: List[str] = []

    def collect_from_node(current: TemplateNode) -> None:
        if isinstance(current, LiteralNode):
            result_parts.append(current.text)
        elif isinstance(current, (RootNode, ConditionalNode)):
            for child in current.children:
                collect_from_node(child)

    collect_from_node(node)
    return "".join(result_parts)


def tree_to_dict(node: TemplateNode) -> Dict[str, Any]:
    """Преобразует дерево в JSON-совместимый словарь."""
    if isinstance(node, LiteralNode):
        return {"type": "literal", "text": node.text}
    if isinstance(node, InterpolationNode):
        return {
            "type": "interpolation",
            "path": str(node.path),
            "transform": node.transform.name if node.transform is not None else None,
        }
    if isinstance(node, ConditionalNode):
        return {
            "type": "conditional",
            "condition": str(node.condition),
            "children": [tree_to_dict(child) for child in node.children],
        }
    if isinstance(node, RootNode):
        return {"type": "root", "children": [tree_to_dict(child) for child in node.children]}
    raise TypeError(f"Unknown node type: {type(node).__name__}")


def format_ast_tree(node: TemplateNode, indent: int = 0) -> str:
    """Форматирует AST как дерево для отладки."""
    lines = []
    prefix = "  " * indent

    if isinstance(node, RootNode):
        lines.append(f"{prefix}RootNode")
        for child in node.children:
            lines.append(format_ast_tree(child, indent + 1))
    elif isinstance(node, LiteralNode):
        # Показываем только начало текста для читабельности
        text_preview = repr(node.text[:50] + "..." if len(node.text) > 50 else node.text)
        lines.append(f"{prefix}LiteralNode({text_preview})")
    elif isinstance(node, InterpolationNode):
        suffix = f", transform='{node.transform.name}'" if node.transform is not None else ""
        lines.append(f"{prefix}InterpolationNode(path='{node.path}'{suffix})")
    elif isinstance(node, ConditionalNode):
        lines.append(f"{prefix}ConditionalNode(condition='{node.condition}')")
        for child in node.children:
            lines.append(format_ast_tree(child, indent + 1))
    else:
        lines.append(f"{prefix}{type(node).__name__}")

    return "\n".join(lines)


__all__ = [
    "TemplateNode",
    "RootNode",
    "LiteralNode",
    "InterpolationNode",
    "ConditionalNode",
    "to_source",
    "collect_text_content",
    "tree_to_dict",
    "format_ast_tree",
]
