"""
layoutdsl: a compiler for styled-run layout descriptions.

A layout description lists text runs, each with optional spacing and an
optional format reference:

    default_fmt;
    "Hello",
    "World!" 1.0 <secondary_fmt>,
    &string space

It compiles to an ordered list of `append(text, spacing, format)` builder
instructions. This package only parses and emits. The layout job and format
types belong to whoever consumes the instructions.
"""

from layoutdsl.compiler import compile_layout
from layoutdsl.emitter import emit_instructions, resolve_default_format
from layoutdsl.errors import (
    LayoutError,
    LayoutExecutionError,
    LayoutParseError,
    LayoutSyntaxError,
    MissingRequiredField,
    UnboundNameError,
)
from layoutdsl.executor import build_layout, execute
from layoutdsl.model import Append, Line, Position, Program
from layoutdsl.parser import parse_program

__version__ = "0.1.0"

__all__ = [
    "Append",
    "LayoutError",
    "LayoutExecutionError",
    "LayoutParseError",
    "LayoutSyntaxError",
    "Line",
    "MissingRequiredField",
    "Position",
    "Program",
    "UnboundNameError",
    "build_layout",
    "compile_layout",
    "emit_instructions",
    "execute",
    "parse_program",
    "resolve_default_format",
]
