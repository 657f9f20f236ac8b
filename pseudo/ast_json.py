"""JSON serialization/deserialization for the pseudocode AST.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding. Nodes are written as objects with
a "type" key naming the node class plus one key per dataclass field.
`TypeSpec`, `Position` and date literals are tagged with "__type__".
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from typing import Any, Dict
import datetime

from . import ast as ast_nodes
from .errors import Position
from .types import TypeSpec

NODE_TYPES: Dict[str, type] = {
    name: cls for name, cls in vars(ast_nodes).items()
    if isinstance(cls, type) and issubclass(cls, ast_nodes.Node) and cls is not ast_nodes.Node
}


def typespec_to_obj(t: TypeSpec) -> Dict[str, Any]:
    obj: Dict[str, Any] = {"kind": t.kind, "args": [typespec_to_obj(a) for a in t.args]}
    if t.kind == 'Array':
        obj["bounds"] = list(t.bounds)
    if t.name:
        obj["name"] = t.name
    return obj


def typespec_from_obj(o: Dict[str, Any]) -> TypeSpec:
    return TypeSpec(
        o["kind"],
        tuple(typespec_from_obj(x) for x in o.get("args", [])),
        tuple(o.get("bounds", (0, 0))),
        o.get("name", ''),
    )


def ast_to_obj(node: Any) -> Any:
    # Primitives
    if node is None or isinstance(node, (int, float, str, bool)):
        return node
    if isinstance(node, datetime.date):
        return {"__type__": "Date", "value": node.isoformat()}
    if isinstance(node, TypeSpec):
        return {"__type__": "TypeSpec", "value": typespec_to_obj(node)}
    if isinstance(node, Position):
        return {"__type__": "Position",
                "value": [node.line, node.column, node.end_line, node.end_column]}
    if isinstance(node, (list, tuple)):
        return [ast_to_obj(n) for n in node]

    # Node types
    if isinstance(node, ast_nodes.Node) and is_dataclass(node):
        obj: Dict[str, Any] = {"type": type(node).__name__}
        for f in fields(node):
            obj[f.name] = ast_to_obj(getattr(node, f.name))
        return obj

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None or isinstance(obj, (int, float, str, bool)):
        return obj
    if isinstance(obj, list):
        return [ast_from_obj(o) for o in obj]
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")

    tag = obj.get("__type__")
    if tag == "TypeSpec":
        return typespec_from_obj(obj["value"])
    if tag == "Position":
        return Position(*obj["value"])
    if tag == "Date":
        return datetime.date.fromisoformat(obj["value"])

    t = obj.get("type")
    cls = NODE_TYPES.get(t)
    if cls is None:
        raise ValueError(f"Unknown AST node type: {t}")
    kwargs = {f.name: ast_from_obj(obj[f.name]) for f in fields(cls) if f.name in obj}
    try:
        return cls(**kwargs)
    except TypeError as e:
        raise ValueError(f"Malformed {t} node: {e}")
