"""
Instruction emitter (Layer 3: Program → Builder Instructions).

Walks a parsed Program and produces one Append instruction per Line, in
declaration order, filling in defaults where the source left a field out:

    spacing  ->  0.0
    format   ->  the program's resolved default format

Nothing is reordered, merged or deduplicated.
"""

import logging
from typing import Optional, Tuple

from .expressions import Clone, DefaultConstructor, Expression, Identifier, ZERO_SPACING
from .model import Append, Line, Program

log = logging.getLogger(__name__)


def resolve_default_format(header: Optional[Identifier]) -> Expression:
    """
    Resolve the expression used for lines without a format.

    Args:
        header: Identifier from an `ident;` header, or None

    Returns:
        Clone(header) if a header was given, DefaultConstructor() otherwise
    """
    if header is not None:
        return Clone(header)
    return DefaultConstructor()


def emit_line(line: Line, default_format: Expression) -> Append:
    spacing = line.spacing if line.spacing is not None else ZERO_SPACING
    fmt = Clone(line.format) if line.format is not None else default_format
    return Append(text=line.text, spacing=spacing, format=fmt)


def emit_instructions(program: Program) -> Tuple[Append, ...]:
    """
    Emit the builder instructions for a program.

    Returns:
        Tuple of Append instructions, instruction i built from line i
    """
    instructions = tuple(emit_line(line, program.default_format) for line in program.lines)
    log.debug("Emitted %d instruction(s)", len(instructions))
    return instructions


__all__ = ["emit_instructions", "emit_line", "resolve_default_format"]
