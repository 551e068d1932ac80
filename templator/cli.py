from __future__ import annotations

import argparse
import json
import logging
import sys
from importlib import metadata
from pathlib import Path
from typing import List, Optional

from .config import ParserConfig, load_parser_config
from .errors import TemplatorUserError
from .nodes import format_ast_tree, tree_to_dict
from .parser import TemplateParser
from .transforms import TransformRegistry


def _installed_version() -> str:
    try:
        return metadata.version("templator")
    except metadata.PackageNotFoundError:
        # Запуск из исходников без установки
        return "unknown"


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="templator",
        description="Template parser (debugging front-end)",
        add_help=True,
    )
    p.add_argument("-V", "--version", action="version", version=f"%(prog)s {_installed_version()}")
    p.add_argument("-v", "--verbose", action="store_true", help="подробный журнал разбора в stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_parse = sub.add_parser("parse", help="Разобрать шаблон и вывести дерево")
    sp_parse.add_argument("source", help="файл шаблона или - для чтения из stdin")
    sp_parse.add_argument("--config", type=Path, help="YAML-файл с настройками парсера")
    sp_parse.add_argument(
        "--strict",
        action="store_true",
        help="ошибка на некорректных конструкциях вместо вывода их текстом",
    )
    sp_parse.add_argument(
        "--transform",
        action="append",
        metavar="NAME",
        help="считать трансформацию NAME известной (можно указать несколько)",
    )
    sp_parse.add_argument("--json", action="store_true", help="вывести дерево в JSON")
    sp_parse.set_defaults(func=_cmd_parse)

    return p


def _read_source(source: str) -> str:
    """Читает шаблон из файла или stdin."""
    if source == "-":
        return sys.stdin.read()

    path = Path(source)
    if not path.is_file():
        raise TemplatorUserError(f"Template file not found: {path}")
    return path.read_text(encoding="utf-8")


def _config(ns: argparse.Namespace) -> ParserConfig:
    config = load_parser_config(ns.config) if ns.config else ParserConfig()
    if ns.strict:
        config = ParserConfig(strict=True, max_nesting_depth=config.max_nesting_depth)
    return config


def _registry(names: Optional[List[str]]) -> TransformRegistry:
    """Реестр с тождественными трансформациями для переданных имён."""
    registry = TransformRegistry()
    for name in names or []:
        try:
            registry.register(name, lambda value: value)
        except ValueError as e:
            raise TemplatorUserError(str(e)) from e
    return registry


def _cmd_parse(ns: argparse.Namespace) -> int:
    parser = TemplateParser(registry=_registry(ns.transform), config=_config(ns))
    root = parser.parse(_read_source(ns.source))
    if ns.json:
        sys.stdout.write(json.dumps(tree_to_dict(root), ensure_ascii=False, indent=2))
    else:
        sys.stdout.write(format_ast_tree(root))
    sys.stdout.write("\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return ns.func(ns)
    except TemplatorUserError as e:
        sys.stderr.write(f"templator: {e}\n")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
