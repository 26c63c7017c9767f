"""
One-call compilation: source text → builder instructions.

The pipeline is a pure function. A failing parse raises before any
instruction is emitted, so callers never see partial output.
"""

from typing import Tuple

from .emitter import emit_instructions
from .model import Append
from .parser import parse_program


def compile_layout(source: str) -> Tuple[Append, ...]:
    """
    Parse and emit in one step.

    Args:
        source: Layout description text

    Returns:
        Tuple of Append instructions in declaration order

    Raises:
        LayoutSyntaxError: If the source does not match the grammar
        MissingRequiredField: If a line has no leading text value
    """
    return emit_instructions(parse_program(source))


__all__ = ["compile_layout"]
