"""Concrete syntax tree helpers for JavaScript/TypeScript configuration sources."""

from __future__ import annotations

import re
from enum import StrEnum
from functools import cache
from typing import TYPE_CHECKING, Final

from tree_sitter import Parser
from tree_sitter_language_pack import get_language

from pm_link_auto.config.errors import ConfigSourceError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from tree_sitter import Node


class SourceDialect(StrEnum):
    """Grammar used to parse a config file; values are tree-sitter language names."""

    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"


_DIALECTS_BY_SUFFIX: Final[dict[str, SourceDialect]] = {
    ".js": SourceDialect.JAVASCRIPT,
    ".mjs": SourceDialect.JAVASCRIPT,
    ".cjs": SourceDialect.JAVASCRIPT,
    ".ts": SourceDialect.TYPESCRIPT,
    ".mts": SourceDialect.TYPESCRIPT,
    ".cts": SourceDialect.TYPESCRIPT,
}

_ESCAPE = re.compile(
    r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|[0-7]{1,3}|\r\n|.)",
    re.DOTALL,
)
_SIMPLE_ESCAPES: Final[dict[str, str]] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "\n": "",
    "\r\n": "",
    "\u2028": "",
    "\u2029": "",
}


def dialect_for(path: Path) -> SourceDialect:
    try:
        return _DIALECTS_BY_SUFFIX[path.suffix.lower()]
    except KeyError:
        raise ConfigSourceError(
            f"Unsupported configuration file type '{path.suffix}'", path=str(path)
        ) from None


@cache
def _parser(dialect: SourceDialect) -> Parser:
    parser = Parser()
    parser.language = get_language(dialect.value)
    return parser


def iter_nodes(root: Node) -> Iterator[Node]:
    """Pre-order walk, i.e. nodes in document order."""

    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def line_of(node: Node) -> int:
    return node.start_point[0] + 1


def parse_source(source: bytes, dialect: SourceDialect, *, path: str | None = None) -> Node:
    """Parse ``source``; raises ``ConfigSourceError`` pointing at the first syntax error."""

    root = _parser(dialect).parse(source).root_node
    if root.has_error:
        broken = next(
            (node for node in iter_nodes(root) if node.type == "ERROR" or node.is_missing),
            root,
        )
        raise ConfigSourceError(
            "Syntax error in configuration source", path=path, line=line_of(broken)
        )
    return root


def node_text(node: Node) -> str:
    return (node.text or b"").decode("utf-8")


def _decode_escape(match: re.Match[str]) -> str:
    escape = match.group(1)
    if escape in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[escape]
    if escape.startswith("u{"):
        return chr(int(escape[2:-1], 16))
    if escape.startswith("u") and len(escape) == 5:
        return chr(int(escape[1:], 16))
    if escape.startswith("x") and len(escape) == 3:
        return chr(int(escape[1:], 16))
    if escape[0] in "01234567":
        return chr(int(escape, 8))
    return escape


def string_value(node: Node) -> str | None:
    """Value of a string literal, or of a template literal without substitutions."""

    if node.type == "template_string":
        if any(child.type == "template_substitution" for child in node.named_children):
            return None
    elif node.type != "string":
        return None
    return _ESCAPE.sub(_decode_escape, node_text(node)[1:-1])


def quote_char(node: Node) -> str:
    """Quote character a string literal was written with."""

    text = node_text(node)
    return text[0] if text[:1] in ("'", '"') else "'"


def quote_string(value: str, quote: str = "'") -> str:
    escaped = (
        value.replace("\\", "\\\\")
        .replace(quote, f"\\{quote}")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f"{quote}{escaped}{quote}"


def property_key(pair: Node) -> str | None:
    """Static key of an object ``pair`` node, or ``None`` for computed keys."""

    key = pair.child_by_field_name("key")
    if key is None:
        return None
    if key.type in ("property_identifier", "identifier", "number"):
        return node_text(key)
    if key.type == "string":
        return string_value(key)
    return None


def pair_value(pair: Node) -> Node | None:
    return pair.child_by_field_name("value")


def find_pair(obj: Node, key: str) -> Node | None:
    """First ``key: value`` property of an object literal."""

    for child in obj.named_children:
        if child.type == "pair" and property_key(child) == key:
            return child
    return None


def find_shorthand(obj: Node, key: str) -> Node | None:
    """Shorthand ``{ key }`` property of an object literal."""

    for child in obj.named_children:
        if child.type == "shorthand_property_identifier" and node_text(child) == key:
            return child
    return None
