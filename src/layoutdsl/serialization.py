"""
Serialization helpers for layoutdsl objects (Program, Line, Append, expressions).

Provides lossless JSON/YAML round-trip via intermediate dict representation.
This module intentionally keeps serialization structure stable and explicit.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable, Tuple

import yaml

from layoutdsl.expressions import (
    Clone,
    DefaultConstructor,
    Expression,
    Identifier,
    Literal,
    Reference,
)
from layoutdsl.model import Append, Line, Position, Program


def expr_to_dict(expr: Expression | None) -> Any:
    if expr is None:
        return None
    if isinstance(expr, Literal):
        return {"type": "lit", "text": expr.text, "value": expr.value}
    if isinstance(expr, Identifier):
        return {"type": "ident", "name": expr.name}
    if isinstance(expr, Reference):
        return {"type": "ref", "name": expr.name}
    if isinstance(expr, Clone):
        return {"type": "clone", "target": expr.target.name}
    if isinstance(expr, DefaultConstructor):
        return {"type": "default"}
    raise TypeError(f"Unsupported Expression type: {type(expr)}")


def expr_from_dict(d: Any) -> Expression | None:
    if d is None:
        return None
    t = d.get("type")
    if t == "lit":
        return Literal(text=d["text"], value=d["value"])
    if t == "ident":
        return Identifier(d["name"])
    if t == "ref":
        return Reference(d["name"])
    if t == "clone":
        return Clone(Identifier(d["target"]))
    if t == "default":
        return DefaultConstructor()
    raise TypeError(f"Unsupported expression dict type: {t}")


def position_to_dict(p: Position) -> Dict[str, int]:
    return {"offset": p.offset, "line": p.line, "column": p.column}


def position_from_dict(d: Dict[str, int] | None) -> Position:
    if d is None:
        return Position()
    return Position(offset=d.get("offset", 0), line=d.get("line", 1), column=d.get("column", 1))


def line_to_dict(line: Line) -> Dict[str, Any]:
    return {
        "text": expr_to_dict(line.text),
        "spacing": expr_to_dict(line.spacing),
        "format": expr_to_dict(line.format),
        "position": position_to_dict(line.position),
    }


def line_from_dict(d: Dict[str, Any]) -> Line:
    return Line(
        text=expr_from_dict(d["text"]),
        spacing=expr_from_dict(d.get("spacing")),
        format=expr_from_dict(d.get("format")),
        position=position_from_dict(d.get("position")),
    )


def program_to_dict(p: Program) -> Dict[str, Any]:
    return {
        "header": expr_to_dict(p.header),
        "default_format": expr_to_dict(p.default_format),
        "lines": [line_to_dict(line) for line in p.lines],
    }


def program_from_dict(d: Dict[str, Any]) -> Program:
    return Program(
        default_format=expr_from_dict(d.get("default_format", {"type": "default"})),
        lines=tuple(line_from_dict(line) for line in d.get("lines", [])),
        header=expr_from_dict(d.get("header")),
    )


def append_to_dict(a: Append) -> Dict[str, Any]:
    return {
        "text": expr_to_dict(a.text),
        "spacing": expr_to_dict(a.spacing),
        "format": expr_to_dict(a.format),
    }


def append_from_dict(d: Dict[str, Any]) -> Append:
    return Append(
        text=expr_from_dict(d["text"]),
        spacing=expr_from_dict(d["spacing"]),
        format=expr_from_dict(d["format"]),
    )


def instructions_to_dict(instructions: Iterable[Append]) -> Dict[str, Any]:
    return {"instructions": [append_to_dict(a) for a in instructions]}


def instructions_from_dict(d: Dict[str, Any]) -> Tuple[Append, ...]:
    return tuple(append_from_dict(a) for a in d.get("instructions", []))


def program_to_json(p: Program) -> str:
    return json.dumps(program_to_dict(p), sort_keys=True)


def program_from_json(s: str) -> Program:
    return program_from_dict(json.loads(s))


def program_to_yaml(p: Program) -> str:
    return yaml.safe_dump(program_to_dict(p), sort_keys=False)


def program_from_yaml(s: str) -> Program:
    return program_from_dict(yaml.safe_load(s))


def instructions_to_json(instructions: Iterable[Append]) -> str:
    return json.dumps(instructions_to_dict(instructions), sort_keys=True)


def instructions_from_json(s: str) -> Tuple[Append, ...]:
    return instructions_from_dict(json.loads(s))


def instructions_to_yaml(instructions: Iterable[Append]) -> str:
    return yaml.safe_dump(instructions_to_dict(instructions), sort_keys=False)


def instructions_from_yaml(s: str) -> Tuple[Append, ...]:
    return instructions_from_dict(yaml.safe_load(s))
