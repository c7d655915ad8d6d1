"""JSON-friendly dumps of the Quill AST.

``ast_to_obj`` turns a node tree into plain dicts and lists so it can be
printed with ``json.dumps`` by the ``--parser`` flag. Every node becomes
a dict with a ``type`` key, a ``span`` key and one key per field.
"""

from __future__ import annotations

import json
from dataclasses import fields
from typing import Any, Dict

from .ast import Node
from .position import Position, Span


def position_to_obj(pos: Position) -> Dict[str, Any]:
    return {"index": pos.index, "line": pos.line, "column": pos.column}


def span_to_obj(span: Span) -> Dict[str, Any]:
    return {"left": position_to_obj(span.left), "right": position_to_obj(span.right)}


def ast_to_obj(node: Any) -> Any:
    if node is None or isinstance(node, (int, float, str, bool)):
        return node
    if isinstance(node, list):
        return [ast_to_obj(n) for n in node]
    if isinstance(node, dict):
        return {key: ast_to_obj(value) for key, value in node.items()}
    if isinstance(node, Node):
        obj: Dict[str, Any] = {"type": type(node).__name__}
        for f in fields(node):
            value = getattr(node, f.name)
            obj[f.name] = span_to_obj(value) if f.name == 'span' else ast_to_obj(value)
        return obj
    raise TypeError(f"cannot serialize {type(node).__name__}")


def dump_ast(node: Node, indent: int = 2) -> str:
    return json.dumps(ast_to_obj(node), ensure_ascii=False, indent=indent)
