"""Format-preserving edits of package entries in a configuration source.

The source is parsed into a concrete syntax tree only to locate the target
entry; the edit itself is a byte splice, so comments, whitespace, quotes and
trailing commas everywhere else stay exactly as written.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .syntax import (
    dialect_for,
    find_pair,
    find_shorthand,
    iter_nodes,
    pair_value,
    parse_source,
    property_key,
    quote_char,
    quote_string,
    string_value,
)

if TYPE_CHECKING:
    from pathlib import Path

    from tree_sitter import Node

    from .syntax import SourceDialect

log = getLogger(__name__)

NAME_KEY = "name"
PATH_KEY = "path"


def find_package_entry(root: Node, package_name: str) -> tuple[Node, Node] | None:
    """First object literal whose ``name`` is the string ``package_name``.

    Returns the object node and its ``name`` pair.
    """

    for node in iter_nodes(root):
        if node.type != "object":
            continue
        for child in node.named_children:
            if child.type != "pair" or property_key(child) != NAME_KEY:
                continue
            value = pair_value(child)
            if value is not None and value.type == "string" and string_value(value) == package_name:
                return node, child
    return None


def patch_config_source(
    source: str,
    package_name: str,
    new_path: str,
    *,
    dialect: SourceDialect,
    path: str | None = None,
) -> str:
    """Set the ``path`` of ``package_name``'s entry, inserting it after ``name`` if absent.

    Returns ``source`` unchanged (and logs a warning) when no entry declares
    ``package_name``.
    """

    data = source.encode("utf-8")
    root = parse_source(data, dialect, path=path)
    match = find_package_entry(root, package_name)
    if match is None:
        log.warning("Could not find an entry for '%s' in the config file to update.", package_name)
        return source

    obj, name_pair = match
    name_value = pair_value(name_pair)
    quote = quote_char(name_value) if name_value is not None else "'"

    path_pair = find_pair(obj, PATH_KEY)
    if path_pair is not None:
        value = pair_value(path_pair)
        if value is not None:
            if value.type == "string":
                quote = quote_char(value)
            replacement = quote_string(new_path, quote)
            return _splice(data, [(value.start_byte, value.end_byte, replacement)])

    literal = f"{PATH_KEY}: {quote_string(new_path, quote)}"
    shorthand = find_shorthand(obj, PATH_KEY)
    if shorthand is not None:
        return _splice(data, [(shorthand.start_byte, shorthand.end_byte, literal)])
    return _splice(data, _insertion_edits(data, obj, name_pair, literal))


def _splice(data: bytes, edits: list[tuple[int, int, str]]) -> str:
    # Edits at the same offset apply in list order, each landing before the previous one.
    for start, end, text in sorted(edits, key=lambda edit: edit[0], reverse=True):
        data = data[:start] + text.encode("utf-8") + data[end:]
    return data.decode("utf-8")


def _siblings_after(obj: Node, node: Node) -> list[Node]:
    children = obj.children
    for index, child in enumerate(children):
        if child.start_byte == node.start_byte and child.end_byte == node.end_byte:
            return children[index + 1 :]
    return []


def _line_indent(data: bytes, node: Node) -> str:
    line_start = data.rfind(b"\n", 0, node.start_byte) + 1
    line = data[line_start : node.start_byte].decode("utf-8")
    return line[: len(line) - len(line.lstrip())]


def _insertion_edits(
    data: bytes,
    obj: Node,
    name_pair: Node,
    literal: str,
) -> list[tuple[int, int, str]]:
    followers = _siblings_after(obj, name_pair)
    comma = followers[0] if followers and followers[0].type == "," else None
    rest = followers[1:] if comma is not None else followers

    row = name_pair.end_point[0]
    same_line = [node for node in rest if node.start_point[0] == row]
    own_line = all(node.type == "comment" and node.end_point[0] == row for node in same_line)

    if not own_line:
        if comma is not None:
            return [(comma.end_byte, comma.end_byte, f" {literal},")]
        return [(name_pair.end_byte, name_pair.end_byte, f", {literal}")]

    line_end = data.find(b"\n", name_pair.end_byte)
    if line_end == -1:
        line_end = len(data)
    newline = "\n"
    if line_end > 0 and data[line_end - 1 : line_end] == b"\r":
        line_end -= 1
        newline = "\r\n"

    next_property = next((node for node in rest if node.type != "comment"), None)
    anchor = next_property if next_property is not None and next_property.type != "}" else name_pair
    indent = _line_indent(data, anchor if anchor.start_point[0] != row else name_pair)

    edits = [(line_end, line_end, f"{newline}{indent}{literal}{',' if comma is not None else ''}")]
    if comma is None:
        edits.append((name_pair.end_byte, name_pair.end_byte, ","))
    return edits


def update_config_file(config_path: Path, package_name: str, new_path: str) -> bool:
    """Persist ``new_path`` for ``package_name`` in ``config_path``; ``True`` if rewritten."""

    source = config_path.read_bytes().decode("utf-8")
    updated = patch_config_source(
        source,
        package_name,
        new_path,
        dialect=dialect_for(config_path),
        path=str(config_path),
    )
    if updated == source:
        log.debug("%s already up to date for '%s'", config_path.name, package_name)
        return False

    config_path.write_bytes(updated.encode("utf-8"))
    log.info("Updated %s: '%s' path set to '%s'", config_path.name, package_name, new_path)
    return True
