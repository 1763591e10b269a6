"""Static evaluation of a configuration module's default export.

Config files are never executed. Only literal data is understood: objects,
arrays, strings, numbers, booleans, ``null``/``undefined`` and identifiers
bound to such literals at module level.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from pm_link_auto.config.errors import ConfigSourceError

from .syntax import line_of, node_text, parse_source, property_key, string_value

if TYPE_CHECKING:
    from tree_sitter import Node

    from .syntax import SourceDialect

_TRANSPARENT_WRAPPERS: Final[frozenset[str]] = frozenset(
    {"parenthesized_expression", "as_expression", "satisfies_expression", "non_null_expression"}
)
_DECLARATIONS: Final[frozenset[str]] = frozenset({"lexical_declaration", "variable_declaration"})


def evaluate_default_export(
    source: str,
    *,
    dialect: SourceDialect,
    path: str | None = None,
) -> object:
    root = parse_source(source.encode("utf-8"), dialect, path=path)
    evaluator = _LiteralEvaluator(bindings=_module_bindings(root), path=path)
    exported = _default_export(root)
    if exported is None:
        raise ConfigSourceError(
            "No default export found; expected `export default {...}` or `module.exports = {...}`",
            path=path,
        )
    return evaluator.evaluate(exported)


def _default_export(root: Node) -> Node | None:
    for statement in root.named_children:
        if statement.type == "export_statement":
            if any(child.type == "default" for child in statement.children):
                return statement.child_by_field_name("value")
        elif statement.type == "expression_statement":
            expression = statement.named_children[0] if statement.named_children else None
            if expression is None or expression.type != "assignment_expression":
                continue
            left = expression.child_by_field_name("left")
            if left is not None and "".join(node_text(left).split()) == "module.exports":
                return expression.child_by_field_name("right")
    return None


def _module_bindings(root: Node) -> dict[str, Node]:
    bindings: dict[str, Node] = {}
    for statement in root.named_children:
        declaration = statement
        if statement.type == "export_statement":
            declaration = statement.child_by_field_name("declaration") or statement
        if declaration.type not in _DECLARATIONS:
            continue
        for declarator in declaration.named_children:
            if declarator.type != "variable_declarator":
                continue
            name = declarator.child_by_field_name("name")
            value = declarator.child_by_field_name("value")
            if name is not None and value is not None and name.type == "identifier":
                bindings[node_text(name)] = value
    return bindings


class _LiteralEvaluator:
    def __init__(self, *, bindings: dict[str, Node], path: str | None) -> None:
        self._bindings = bindings
        self._path = path
        self._resolving: set[str] = set()

    def _unsupported(self, node: Node, what: str | None = None) -> ConfigSourceError:
        return ConfigSourceError(
            f"Unsupported {what or node.type} in configuration; only literal values are allowed",
            path=self._path,
            line=line_of(node),
        )

    def evaluate(self, node: Node) -> object:  # noqa: PLR0911
        kind = node.type
        if kind in _TRANSPARENT_WRAPPERS:
            inner = next((child for child in node.named_children if child.type != "comment"), None)
            if inner is None:
                raise self._unsupported(node)
            return self.evaluate(inner)
        if kind == "object":
            return self._object(node)
        if kind == "array":
            items = (child for child in node.named_children if child.type != "comment")
            return [self.evaluate(child) for child in items]
        if kind in ("string", "template_string"):
            value = string_value(node)
            if value is None:
                raise self._unsupported(node, "template substitution")
            return value
        if kind == "number":
            return self._number(node)
        if kind == "true":
            return True
        if kind == "false":
            return False
        if kind in ("null", "undefined"):
            return None
        if kind == "identifier":
            return self._identifier(node)
        raise self._unsupported(node)

    def _object(self, node: Node) -> dict[str, object]:
        result: dict[str, object] = {}
        for child in node.named_children:
            if child.type == "comment":
                continue
            if child.type == "shorthand_property_identifier":
                result[node_text(child)] = self._identifier(child)
                continue
            if child.type != "pair":
                raise self._unsupported(child)
            key = property_key(child)
            value = child.child_by_field_name("value")
            if key is None or value is None:
                raise self._unsupported(child, "computed property")
            result[key] = self.evaluate(value)
        return result

    def _number(self, node: Node) -> int | float:
        text = node_text(node).replace("_", "")
        try:
            return int(text, 0)
        except ValueError:
            try:
                return float(text)
            except ValueError:
                raise self._unsupported(node, f"number {text!r}") from None

    def _identifier(self, node: Node) -> object:
        name = node_text(node)
        if name == "undefined":
            return None
        bound = self._bindings.get(name)
        if bound is None or name in self._resolving:
            raise self._unsupported(node, f"reference to '{name}'")
        self._resolving.add(name)
        try:
            return self.evaluate(bound)
        finally:
            self._resolving.discard(name)
